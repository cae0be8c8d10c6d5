"""Tests for customize_prompt and its three rewrite tiers."""

from __future__ import annotations

import pytest

from stackguider.advisor.customizer import (
    customize_prompt,
    prepend_tech,
    replace_after_using,
    replace_tech_sentence,
)


class TestIdentity:
    @pytest.mark.parametrize(
        "prompt",
        [
            "",
            "Build a todo app using React, Express. 1) Create project 2) Add routes",
            "Build a todo app.",
            "no tech sentence at all",
        ],
    )
    def test_empty_selection_returns_prompt_unchanged(self, prompt: str) -> None:
        assert customize_prompt(prompt, []) == prompt


class TestTechSentence:
    def test_numbered_steps(self) -> None:
        prompt = "Build a todo app using React, Express. 1) Create project 2) Add routes"
        assert (
            customize_prompt(prompt, ["Vue", "Fastify"])
            == "Build a todo app using Vue, Fastify. 1) Create project 2) Add routes"
        )

    def test_create_keyword(self) -> None:
        prompt = (
            "Build a todo app using Next.js 15, TypeScript, and Prisma with PostgreSQL. "
            "Create: 1) A Next.js app with App Router 2) Prisma schema for todos"
        )
        assert customize_prompt(prompt, ["SvelteKit", "Drizzle"]) == (
            "Build a todo app using SvelteKit, Drizzle. "
            "Create: 1) A Next.js app with App Router 2) Prisma schema for todos"
        )

    def test_tech_list_spanning_lines(self) -> None:
        prompt = "Build a blog using Next.js,\nPrisma,\nPostgreSQL.\nSetup: 1) init\n2) migrate"
        assert customize_prompt(prompt, ["Astro"]) == "Build a blog using Astro. Setup: 1) init\n2) migrate"

    def test_case_insensitive(self) -> None:
        prompt = "build a CLI USING click, rich. steps: 1) scaffold 2) publish"
        assert customize_prompt(prompt, ["Typer"]) == "build a CLI using Typer. steps: 1) scaffold 2) publish"

    def test_keyword_also_in_description(self) -> None:
        """Instructions are taken from where the keyword matched, not its first occurrence."""
        prompt = "Build a todo app using React. Build: 1) components 2) state"
        assert customize_prompt(prompt, ["Vue"]) == "Build a todo app using Vue. Build: 1) components 2) state"

    def test_selection_order_kept(self) -> None:
        prompt = "Build a shop using A. Implementation: do it"
        assert customize_prompt(prompt, ["Zod", "Astro", "Bun"]) == "Build a shop using Zod, Astro, Bun. Implementation: do it"

    def test_description_whitespace_trimmed(self) -> None:
        prompt = "  Build a game   using Phaser. Step 1: assets"
        assert customize_prompt(prompt, ["Godot"]) == "Build a game using Godot. Step 1: assets"

    def test_no_match_returns_none(self) -> None:
        assert replace_tech_sentence("Build a todo app using React and Express", "Vue") is None


class TestUsingClauseFallback:
    def test_no_continuation_keyword(self) -> None:
        prompt = "Build a todo app using React and Express"
        assert customize_prompt(prompt, ["Vue"]) == "Build a todo app using Vue"

    def test_text_after_using_is_dropped(self) -> None:
        prompt = "Build a todo app using React. Then deploy it to the cloud."
        assert customize_prompt(prompt, ["Vue", "Netlify"]) == "Build a todo app using Vue, Netlify"

    def test_no_using_returns_none(self) -> None:
        assert replace_after_using("Build a todo app.", "Vue") is None


class TestPrependFallback:
    def test_no_using(self) -> None:
        assert customize_prompt("Build a todo app.", ["Vue"]) == "Using Vue: Build a todo app."

    def test_empty_prompt(self) -> None:
        assert customize_prompt("", ["Vue", "Vite"]) == "Using Vue, Vite: "

    def test_using_inside_word_does_not_count(self) -> None:
        assert customize_prompt("A confusing app.", ["Vue"]) == "Using Vue: A confusing app."

    def test_leading_using_needs_preceding_space(self) -> None:
        prompt = "Using React, build an app."
        assert customize_prompt(prompt, ["Vue"]) == "Using Vue: Using React, build an app."

    def test_prepend_tech(self) -> None:
        assert prepend_tech("x", "A, B") == "Using A, B: x"


def test_result_is_deterministic() -> None:
    prompt = "Build a todo app using React, Express. 1) Create project"
    assert customize_prompt(prompt, ["Vue"]) == customize_prompt(prompt, ["Vue"])
