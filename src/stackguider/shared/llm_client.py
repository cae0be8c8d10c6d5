"""Async OpenAI API wrapper used by the stack advisor.

``LLMClient`` sends one system + user message pair and returns the raw
completion text, retrying rate-limit and connection errors. ``DryRunClient``
has the same interface and makes no API calls.
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
import re
from typing import Any, Callable

from openai import AsyncOpenAI, APIConnectionError, APITimeoutError, RateLimitError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 4000

# One advisor request per user message, so a throttled request can afford to
# wait: up to 8 attempts, the delay doubling from 5 s.
_MAX_ATTEMPTS = 8
_BASE_DELAY = 5.0
# Connection failures stop doubling after this many steps (5 s -> 40 s)
_CONNECTION_DOUBLINGS = 3

# Rate-limit errors that mean the request itself is over the model's limits
_OVERSIZE_MARKERS = ("request too large", "context_length_exceeded")
_RETRY_HINT = re.compile(r"try again in (\d+(?:\.\d+)?)\s*(ms|s)\b", re.IGNORECASE)


def _parse_retry_after(exc: RateLimitError) -> float | None:
    """Seconds the API asked us to wait, or None when it gave no hint.

    The ``Retry-After`` header wins; otherwise the "try again in 2.5s" /
    "750ms" phrase in the error text is used.
    """
    response = getattr(exc, "response", None)
    header = response.headers.get("retry-after") if response is not None else None
    if header:
        try:
            return float(header)
        except ValueError:
            logger.debug("Non-numeric Retry-After header %r, checking the message", header)

    match = _RETRY_HINT.search(str(exc))
    if match is None:
        return None
    value = float(match.group(1))
    return value / 1000 if match.group(2).lower() == "ms" else value


def _jittered(delay: float, *, floor: float) -> float:
    """``delay`` give or take 25%, never below ``floor``."""
    return max(floor, delay + random.uniform(-0.25 * delay, 0.25 * delay))


TokensCallback = Callable[[int, int], None]
"""Called with (input_tokens, output_tokens) when a completion finishes."""


class LLMClient:
    """Thin async wrapper around the OpenAI SDK.

    One instance is built per process (CLI command or API server) and
    handed to whoever needs it.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> None:
        self._client = AsyncOpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens

    async def _call_with_retry(self, **kwargs: Any) -> Any:
        """Create one chat completion, retrying throttling and network failures.

        A throttled request waits for the longer of the API's hint and the
        exponential backoff. A request rejected for its own size is raised
        straight away, as is anything other than a rate-limit or connection
        error.
        """
        for attempt in range(1, _MAX_ATTEMPTS + 1):
            try:
                return await self._client.chat.completions.create(**kwargs)
            except RateLimitError as exc:
                if any(marker in str(exc).lower() for marker in _OVERSIZE_MARKERS):
                    logger.error("Advisor request is over the model's limits, not retrying: %s", exc)
                    raise
                if attempt == _MAX_ATTEMPTS:
                    raise
                hint = _parse_retry_after(exc)
                delay = _jittered(max(hint or 0.0, _BASE_DELAY * 2 ** (attempt - 1)), floor=1.0)
                logger.warning(
                    "Advisor request throttled (attempt %d/%d, API hint %s), next try in %.1fs",
                    attempt, _MAX_ATTEMPTS, f"{hint:.1f}s" if hint is not None else "none", delay,
                )
            except (APIConnectionError, APITimeoutError) as exc:
                if attempt == _MAX_ATTEMPTS:
                    raise
                backoff = _BASE_DELAY * 2 ** min(attempt - 1, _CONNECTION_DOUBLINGS)
                delay = _jittered(backoff, floor=2.0)
                logger.warning(
                    "Could not reach the model API (attempt %d/%d): %s; next try in %.1fs",
                    attempt, _MAX_ATTEMPTS, exc, delay,
                )
            await asyncio.sleep(delay)

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        json_mode: bool = False,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        """Single request/response with no tools.

        When ``json_mode`` is True the OpenAI API guarantees the response is
        valid JSON. Off by default so the model can also answer in prose.
        """
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user_message},
            ],
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self._call_with_retry(**kwargs)
        usage = getattr(response, "usage", None)
        if on_tokens and usage:
            on_tokens(getattr(usage, "prompt_tokens", 0), getattr(usage, "completion_tokens", 0))
        return response.choices[0].message.content or ""


# ======================================================================
# Dry-run mock client, zero API calls
# ======================================================================

_DRY_RUN_COMPLETION = "```json\n" + json.dumps({
    "response": (
        "For a small full-stack web app, Next.js with TypeScript gives you one "
        "codebase for UI and API routes, Prisma keeps the database layer typed, "
        "and Vercel deploys it without any server management."
    ),
    "recommendations": [
        {
            "name": "Next.js",
            "category": "Framework",
            "url": "https://nextjs.org",
            "description": "React framework with file-based routing and API routes",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/nextdotjs.svg",
        },
        {
            "name": "TypeScript",
            "category": "Tool",
            "url": "https://www.typescriptlang.org",
            "description": "Typed superset of JavaScript",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/typescript.svg",
        },
        {
            "name": "PostgreSQL",
            "category": "Database",
            "url": "https://www.postgresql.org",
            "description": "Relational database",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/postgresql.svg",
        },
        {
            "name": "Prisma",
            "category": "Tool",
            "url": "https://www.prisma.io",
            "description": "Type-safe ORM for Node.js and TypeScript",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/prisma.svg",
        },
        {
            "name": "Tailwind CSS",
            "category": "UI Library",
            "url": "https://tailwindcss.com",
            "description": "Utility-first CSS framework",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/tailwindcss.svg",
        },
        {
            "name": "Vercel",
            "category": "Hosting",
            "url": "https://vercel.com",
            "description": "Zero-config hosting for Next.js",
            "iconUrl": "https://cdn.jsdelivr.net/npm/simple-icons@latest/icons/vercel.svg",
        },
    ],
    "claudePrompt": (
        "Build a todo app using Next.js 15, TypeScript, Prisma with PostgreSQL, "
        "and Tailwind CSS. Create: 1) A Next.js app with App Router 2) Prisma "
        "schema for todos 3) API routes for CRUD 4) UI with Tailwind CSS"
    ),
}, indent=2) + "\n```"

_DRY_RUN_PROSE = (
    "Happy to help! Tell me what you want to build, who it is for, and any "
    "technologies you already know you want to use."
)

_GREETINGS = {"hi", "hello", "hey", "help"}


class DryRunClient:
    """Drop-in replacement for LLMClient that makes zero API calls.

    Returns a fenced JSON recommendation for any project description and a
    short conversational reply for bare greetings, so both interpreter paths
    show up in a dry run.
    """

    model = "dry-run"
    max_tokens = DEFAULT_MAX_TOKENS

    async def simple_completion(
        self,
        *,
        system: str,
        user_message: str,
        json_mode: bool = False,
        on_tokens: TokensCallback | None = None,
    ) -> str:
        logger.info("[dry-run] completion for %d-char message", len(user_message))
        if user_message.strip().strip("!?.").lower() in _GREETINGS:
            return _DRY_RUN_PROSE
        return _DRY_RUN_COMPLETION
