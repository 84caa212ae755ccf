"""AI business-insights advisor for the back office.

Summarises the current state for one branch, hands it to a hosted Gemini
model through pydantic-ai and returns the answer as text. Never raises:
configuration gaps and model failures come back as fixed messages.
"""

import json
import logging
from typing import Optional

from pydantic_ai.models import Model

from core.agents import create_agent, gemini_model
from patterns.domain_config import SummitBaseConfig
from verticals.outdoor.state import AppState
from verticals.outdoor.views import business_summary

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "AI Configuration missing: API Key not found. Please check your environment variables."
)
EMPTY_ANSWER_MESSAGE = "I apologize, but I couldn't generate an insight at this moment."
UNREACHABLE_MESSAGE = (
    "System Error: Unable to reach the AI analysis engine. Please try again later."
)

SYSTEM_PROMPT = (
    "You are an elite Business Intelligence AI for 'SummitBase', an outdoor "
    "equipment rental and retail company."
)

INSTRUCTIONS = """Instructions:
1. Analyze the provided context to answer the user's query.
2. If the user asks about revenue, compare branches.
3. If the user asks about stock, highlight low stock items.
4. Keep the tone professional, executive, and concise.
5. Format the response with clear headings or bullet points if necessary.
6. If you propose an action (e.g., "Transfer stock"), explain why."""


def build_prompt(summary: dict, query: str) -> str:
    return (
        "Current Business Context (JSON Summary):\n"
        f"{json.dumps(summary, indent=2, default=str)}\n\n"
        f'User Query: "{query}"\n\n'
        f"{INSTRUCTIONS}"
    )


class InsightsAdvisor:
    """Answers free-form business questions about one branch.

    ``model`` overrides the hosted model (tests pass a pydantic-ai
    ``TestModel``); without it an API key is required.
    """

    def __init__(
        self,
        api_key: str = "",
        model_name: str = "gemini-2.5-flash",
        model: Optional[Model] = None,
        config: Optional[SummitBaseConfig] = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.config = config or SummitBaseConfig.default()
        self._model = model
        self._agent = None

    @property
    def configured(self) -> bool:
        return self._model is not None or bool(self.api_key)

    def _get_agent(self):
        if self._agent is None:
            model = self._model or gemini_model(self.model_name, self.api_key)
            self._agent = create_agent("insights", SYSTEM_PROMPT, model)
        return self._agent

    async def ask(self, state: AppState, branch: str, query: str) -> str:
        if not self.configured:
            return MISSING_KEY_MESSAGE

        prompt = build_prompt(business_summary(state, branch, self.config), query)
        try:
            result = await self._get_agent().run(prompt)
        except Exception:
            logger.exception("Advisor request failed for branch %s", branch)
            return UNREACHABLE_MESSAGE

        answer = (result.output or "").strip()
        return answer or EMPTY_ANSWER_MESSAGE
