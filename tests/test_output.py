"""Tests for the Markdown and JSON exports."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from stackguider.output.json_export import render_stack_json
from stackguider.output.markdown import (
    boilerplate_filename,
    export_filename,
    group_by_category,
    render_boilerplate_markdown,
    render_stack_markdown,
)
from stackguider.schemas.recommendation import Recommendation

PROMPT = "Build a todo app using Next.js, Prisma. Create: 1) pages 2) schema"


def _rec(name: str, category: str = "Framework") -> Recommendation:
    return Recommendation(name=name, category=category, url=f"https://{name.lower()}.dev", description=f"{name} description")


class TestExportFilename:
    def test_default_title(self) -> None:
        assert export_filename("My Tech Stack", "md") == "my-tech-stack-stack.md"

    def test_whitespace_collapsed(self) -> None:
        assert export_filename("  Todo   App ", "json") == "todo-app-stack.json"


class TestBoilerplateFilename:
    @pytest.mark.parametrize(
        ("project_name", "expected"),
        [
            ("todo-app", "todo-app-boilerplate.md"),
            ("My App v1.2", "My-App-v1.2-boilerplate.md"),
            ("../escaped", "escaped-boilerplate.md"),
            ("acme/todo", "acme-todo-boilerplate.md"),
            ("C:\\Users\\x", "C-Users-x-boilerplate.md"),
            ("..", "boilerplate-boilerplate.md"),
            ("", "boilerplate-boilerplate.md"),
        ],
    )
    def test_unsafe_characters_replaced(self, project_name: str, expected: str) -> None:
        assert boilerplate_filename(project_name) == expected


class TestGroupByCategory:
    def test_first_appearance_order(self) -> None:
        recs = [
            _rec("Next.js", "Framework"),
            _rec("PostgreSQL", "Database"),
            _rec("Remix", "Framework"),
        ]
        groups = group_by_category(recs)
        assert list(groups) == ["Framework", "Database"]
        assert [r.name for r in groups["Framework"]] == ["Next.js", "Remix"]


class TestStackMarkdown:
    def test_sections(self, sample_result) -> None:
        md = render_stack_markdown(sample_result.recommendations, PROMPT, title="Todo App")

        assert md.startswith("# Todo App\n")
        assert "## Recommended Stack" in md
        assert "### Framework" in md
        assert "### Hosting" in md
        assert "- **[Next.js](https://nextjs.dev)** - Next.js description" in md
        assert "## Implementation Prompt" in md
        assert f"```\n{PROMPT}\n```" in md
        assert md.endswith("\n")

    def test_cost_table(self, sample_result) -> None:
        md = render_stack_markdown(sample_result.recommendations)

        assert "## Estimated Monthly Cost" in md
        assert "| Neon | Database | Scale | $19 |" in md
        assert "| Vercel Pro | Hosting | Pro | $20 |" in md
        assert "**Total:** $39/month ($468/year, 2 paid service(s))" in md

    def test_costs_can_be_left_out(self, sample_result) -> None:
        md = render_stack_markdown(sample_result.recommendations, include_costs=False)
        assert "Estimated Monthly Cost" not in md

    def test_unpriced_stack_has_no_cost_section(self) -> None:
        md = render_stack_markdown([_rec("Phoenix")])
        assert "Estimated Monthly Cost" not in md

    def test_no_prompt_section_without_prompt(self, sample_result) -> None:
        md = render_stack_markdown(sample_result.recommendations, None)
        assert "Implementation Prompt" not in md


class TestBoilerplateMarkdown:
    def test_files_and_setup(self, sample_boilerplate) -> None:
        md = render_boilerplate_markdown(sample_boilerplate)

        assert md.startswith("# todo-app\n")
        assert "Starter Next.js todo app" in md
        assert "## package.json" in md
        assert '```json\n{"name": "todo-app"}\n```' in md
        assert "```tsx\nexport default function Page() {}\n```" in md
        assert "## Setup" in md
        assert "1. npm install\n2. npm run dev\n" in md


class TestStackJson:
    def test_shape(self, sample_result) -> None:
        exported_at = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        data = json.loads(
            render_stack_json(
                sample_result.recommendations, PROMPT, title="Todo App", exported_at=exported_at
            )
        )

        assert data["project"] == "Todo App"
        assert data["implementationPrompt"] == PROMPT
        assert data["exportedAt"] == "2025-01-02T03:04:05+00:00"
        assert [r["name"] for r in data["recommendations"]] == ["Next.js", "Prisma", "PostgreSQL", "Vercel"]

    def test_recommendations_use_wire_keys(self, sample_result) -> None:
        data = json.loads(render_stack_json(sample_result.recommendations))
        first, second = data["recommendations"][:2]
        assert first["iconUrl"] == "https://cdn.example/nextdotjs.svg"
        assert "iconUrl" not in second
        assert data["implementationPrompt"] is None
