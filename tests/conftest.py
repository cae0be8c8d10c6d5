"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from stackguider.schemas.recommendation import (
    Boilerplate,
    CodeFile,
    Recommendation,
    RecommendationResult,
)
from stackguider.shared.llm_client import LLMClient

PROMPT = (
    "Build a todo app using Next.js, Prisma, PostgreSQL. "
    "Create: 1) A Next.js app with App Router 2) Prisma schema for todos"
)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    cfg = tmp_path / "stackguider.yml"
    cfg.write_text(
        """\
model: "gpt-4o-mini"
prose_fallback_limit: 500
output_directory: "{out}"
""".format(out=str(tmp_path / "output"))
    )
    return cfg


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Return an LLMClient with a mocked OpenAI SDK underneath."""
    client = LLMClient.__new__(LLMClient)
    client._client = AsyncMock()
    client.model = "gpt-4o"
    client.max_tokens = 4000
    return client


def make_recommendation(name: str, category: str = "Framework", **kwargs) -> Recommendation:
    return Recommendation(
        name=name,
        category=category,
        url=kwargs.pop("url", f"https://{name.lower().replace(' ', '').replace('.', '')}.dev"),
        description=kwargs.pop("description", f"{name} description"),
        **kwargs,
    )


@pytest.fixture
def sample_result() -> RecommendationResult:
    return RecommendationResult(
        message="Use **Next.js** with Prisma.",
        recommendations=[
            make_recommendation("Next.js", "Framework", icon_url="https://cdn.example/nextdotjs.svg"),
            make_recommendation("Prisma", "Tool"),
            make_recommendation("PostgreSQL", "Database"),
            make_recommendation("Vercel", "Hosting"),
        ],
        implementation_prompt=PROMPT,
    )


@pytest.fixture
def sample_boilerplate() -> Boilerplate:
    return Boilerplate(
        project_name="todo-app",
        description="Starter Next.js todo app",
        files=[
            CodeFile(path="package.json", content='{"name": "todo-app"}', language="json"),
            CodeFile(path="src/app/page.tsx", content="export default function Page() {}", language="tsx"),
        ],
        setup=["npm install", "npm run dev"],
    )
