"""Stack advisor: asks the model for a recommendation and interprets the reply."""

from __future__ import annotations

import logging

from stackguider.advisor.interpreter import PROSE_FALLBACK_LIMIT, interpret_completion
from stackguider.advisor.prompts import SYSTEM_PROMPT
from stackguider.schemas.config import AdvisorConfig
from stackguider.schemas.recommendation import RecommendationResult
from stackguider.shared.llm_client import LLMClient, TokensCallback

logger = logging.getLogger(__name__)


class StackAdvisor:
    """Turns a free-text project description into a RecommendationResult.

    Errors raised by the client (network failures, exhausted retries) are
    not caught here; the caller decides what the user sees.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        prose_fallback_limit: int = PROSE_FALLBACK_LIMIT,
        json_mode: bool = False,
    ) -> None:
        self.client = client
        self.prose_fallback_limit = prose_fallback_limit
        self.json_mode = json_mode

    @classmethod
    def from_config(cls, client: LLMClient, config: AdvisorConfig) -> "StackAdvisor":
        return cls(
            client,
            prose_fallback_limit=config.prose_fallback_limit,
            json_mode=config.json_mode,
        )

    @property
    def name(self) -> str:
        return "Stack Advisor"

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def parse_output(self, raw_text: str) -> RecommendationResult:
        return interpret_completion(raw_text, prose_fallback_limit=self.prose_fallback_limit)

    async def recommend(
        self,
        message: str,
        *,
        on_tokens: TokensCallback | None = None,
    ) -> RecommendationResult:
        """Send ``message`` to the model and return the interpreted result."""
        if not message.strip():
            raise ValueError("Message is required")

        raw = await self.client.simple_completion(
            system=self.get_system_prompt(),
            user_message=message,
            json_mode=self.json_mode,
            on_tokens=on_tokens,
        )

        logger.debug("%s raw output:\n%s", self.name, raw[:500])
        result = self.parse_output(raw)
        logger.info(
            "%s returned %d recommendation(s)%s",
            self.name,
            len(result.recommendations),
            " with boilerplate" if result.boilerplate else "",
        )
        return result
