"""
SummitBase Base Agent — Pydantic AI Foundation

Every model-backed feature builds its agent through this factory:
- One place to pick the hosted model and provider credentials
- Plain-text or typed outputs via ``output_type``
- Built-in retry logic from pydantic-ai
- Tests inject ``TestModel`` / ``FunctionModel`` instead of a hosted model
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic_ai import Agent
from pydantic_ai.models import Model


def gemini_model(model_name: str, api_key: str) -> Model:
    """Hosted Gemini model authenticated with an explicit API key."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))


def create_agent(
    name: str,
    system_prompt: str,
    model: Model | str,
    output_type: Any = str,
    retries: int = 2,
    tools: Optional[list] = None,
) -> Agent:
    """
    Factory function for creating SummitBase agents.

    Usage:
        agent = create_agent(
            name="insights",
            system_prompt="You analyse store performance.",
            model=gemini_model("gemini-2.5-flash", api_key),
        )
        result = await agent.run("How did the week go?")
        print(result.output)
    """
    return Agent(
        model,
        output_type=output_type,
        system_prompt=system_prompt,
        retries=retries,
        tools=tools or [],
        name=name,
    )
