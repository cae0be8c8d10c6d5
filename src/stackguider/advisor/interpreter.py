"""Turn a raw stack-advisor completion into a RecommendationResult.

The advisor prompt asks the model for a bare JSON object, but nothing holds
it to that: completions arrive wrapped in markdown fences, surrounded by
chatty preamble, truncated, or as plain conversation. ``interpret_completion``
recovers what it can in three stages (fence strip, brace extraction, parse)
and otherwise degrades to a prose or apology message. It never raises.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from stackguider.schemas.recommendation import (
    DEFAULT_MESSAGE,
    Boilerplate,
    Recommendation,
    RecommendationResult,
)

logger = logging.getLogger(__name__)

PROSE_FALLBACK_LIMIT = 1000

FALLBACK_MESSAGE = (
    "I encountered an issue formatting the response. Could you rephrase your "
    "question or describe your project in a different way?"
)

# Keys accepted for each field, in order of preference
_MESSAGE_KEYS = ("response", "message")
_PROMPT_KEYS = ("claudePrompt", "implementationPrompt")

_FENCE_OPEN = re.compile(r"^```[\w.+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")


@dataclass(frozen=True)
class Malformed:
    """A candidate that could not be turned into a result, and why."""

    reason: str


def strip_code_fence(text: str) -> str:
    """Drop an opening ```lang fence line and its closing fence.

    Text that does not start with a fence is returned unchanged.
    """
    if not text.startswith("```"):
        return text
    text = _FENCE_OPEN.sub("", text, count=1)
    return _FENCE_CLOSE.sub("", text, count=1)


def extract_brace_span(text: str) -> str:
    """Narrow ``text`` to the span from the first ``{`` to the last ``}``."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return text
    return text[start : end + 1]


def parse_payload(candidate: str) -> RecommendationResult | Malformed:
    """Parse and validate one candidate JSON document."""
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        return Malformed(f"invalid JSON: {exc}")

    if not isinstance(data, dict):
        return Malformed(f"expected a JSON object, got {type(data).__name__}")

    return _build_result(data)


def _first_text(data: dict[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _build_recommendations(raw: Any) -> list[Recommendation]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        logger.warning(
            "Ignoring 'recommendations' of type %s (expected a list)",
            type(raw).__name__,
        )
        return []

    recommendations: list[Recommendation] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping recommendation %d: not an object", index)
            continue
        try:
            recommendations.append(Recommendation.model_validate(item))
        except ValidationError as exc:
            logger.warning(
                "Skipping recommendation %d: %d validation error(s): %s",
                index,
                exc.error_count(),
                exc.errors()[0]["msg"],
            )
    return recommendations


def _build_boilerplate(raw: Any) -> Boilerplate | None:
    if not isinstance(raw, dict):
        return None
    try:
        return Boilerplate.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Ignoring malformed boilerplate: %s", exc.errors()[0]["msg"])
        return None


def _build_result(data: dict[str, Any]) -> RecommendationResult:
    return RecommendationResult(
        message=_first_text(data, _MESSAGE_KEYS) or DEFAULT_MESSAGE,
        recommendations=_build_recommendations(data.get("recommendations")),
        implementation_prompt=_first_text(data, _PROMPT_KEYS),
        boilerplate=_build_boilerplate(data.get("boilerplate")),
    )


def _fallback(text: str, prose_fallback_limit: int) -> RecommendationResult:
    # Short text without braces reads as conversation; anything else is a
    # broken JSON attempt the user should not see.
    if text and len(text) < prose_fallback_limit and "{" not in text:
        return RecommendationResult(message=text)
    return RecommendationResult(message=FALLBACK_MESSAGE)


def interpret_completion(
    raw: str,
    *,
    prose_fallback_limit: int = PROSE_FALLBACK_LIMIT,
) -> RecommendationResult:
    """Interpret one raw model completion.

    1. Trim whitespace and strip a surrounding code fence
    2. Narrow to the outermost ``{...}`` span
    3. Parse and validate, substituting documented defaults for missing fields
    4. On failure, fall back to the text itself (short prose) or a fixed
       apology asking the user to rephrase
    """
    text = raw.strip()
    candidate = extract_brace_span(strip_code_fence(text))

    outcome = parse_payload(candidate)
    if isinstance(outcome, RecommendationResult):
        return outcome

    logger.warning(
        "Could not parse advisor completion (%s). Raw completion: %r",
        outcome.reason,
        raw,
    )
    return _fallback(text, prose_fallback_limit)
