"""Agent construction helpers."""

from core.agents.base_agent import create_agent, gemini_model

__all__ = ["create_agent", "gemini_model"]
