"""Markdown exports: the recommended stack and the generated boilerplate."""

from __future__ import annotations

import re
from collections.abc import Sequence

from stackguider.advisor.cost import estimate_costs
from stackguider.schemas.recommendation import Boilerplate, Recommendation


def export_filename(title: str, ext: str) -> str:
    """``"My Tech Stack", "md"`` → ``"my-tech-stack-stack.md"``."""
    slug = re.sub(r"\s+", "-", title.strip().lower())
    return f"{slug}-stack.{ext}"


def boilerplate_filename(project_name: str) -> str:
    """File name for a boilerplate bundle, safe to join onto the export dir.

    ``project_name`` comes from the model, so path separators and other
    unsafe characters collapse to ``-``.
    """
    slug = re.sub(r"[^\w.-]+", "-", project_name.strip()).strip(".-")
    return f"{slug or 'boilerplate'}-boilerplate.md"


def group_by_category(
    recommendations: Sequence[Recommendation],
) -> dict[str, list[Recommendation]]:
    """Group recommendations by category, categories in first-appearance order."""
    groups: dict[str, list[Recommendation]] = {}
    for rec in recommendations:
        groups.setdefault(rec.category, []).append(rec)
    return groups


def render_stack_markdown(
    recommendations: Sequence[Recommendation],
    implementation_prompt: str | None = None,
    *,
    title: str = "My Tech Stack",
    include_costs: bool = True,
) -> str:
    """Render the recommended stack (and its prompt) as a Markdown document."""
    sections: list[str] = []

    sections.append(f"# {title}\n")
    sections.append("## Recommended Stack\n")

    for category, items in group_by_category(recommendations).items():
        sections.append(f"### {category}\n")
        for item in items:
            sections.append(f"- **[{item.name}]({item.url})** - {item.description}")
        sections.append("")

    if include_costs:
        estimate = estimate_costs(recommendations)
        if estimate:
            sections.append("## Estimated Monthly Cost\n")
            sections.append("| Service | Category | Tier | Monthly |")
            sections.append("|---------|----------|------|---------|")
            for cost in estimate.items:
                sections.append(
                    f"| {cost.service} | {cost.category} | {cost.tier} | ${cost.monthly_cost} |"
                )
            sections.append("")
            sections.append(
                f"**Total:** ${estimate.monthly_total}/month "
                f"(${estimate.annual_total}/year, {estimate.paid_services} paid service(s))\n"
            )

    if implementation_prompt:
        sections.append("## Implementation Prompt\n")
        sections.append(f"```\n{implementation_prompt}\n```")

    return "\n".join(sections) + "\n"


def render_boilerplate_markdown(boilerplate: Boilerplate) -> str:
    """Bundle every generated file into one Markdown document."""
    sections: list[str] = [f"# {boilerplate.project_name}\n"]
    if boilerplate.description:
        sections.append(f"{boilerplate.description}\n")

    for file in boilerplate.files:
        sections.append(f"## {file.path}\n")
        sections.append(f"```{file.language}\n{file.content}\n```\n")

    if boilerplate.setup:
        sections.append("## Setup\n")
        for i, step in enumerate(boilerplate.setup, 1):
            sections.append(f"{i}. {step}")

    return "\n".join(sections).rstrip("\n") + "\n"
