"""Static HTML share page: renders a RecommendationResult to a self-contained file."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from stackguider.advisor.cost import estimate_costs
from stackguider.output.markdown import group_by_category
from stackguider.schemas.recommendation import RecommendationResult

_TEMPLATE_DIR = Path(__file__).parent / "templates"


def _message_to_html(text: str) -> Markup:
    """Escape the advisor message, keep **bold**, and split paragraphs on blank lines."""
    escaped = str(escape(text))
    escaped = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", escaped)
    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", escaped) if p.strip()]
    return Markup("\n".join(f"<p>{p.replace(chr(10), '<br>')}</p>" for p in paragraphs))


def render_share_page(
    result: RecommendationResult,
    *,
    title: str = "My Tech Stack",
    selected: Iterable[str] = (),
    prompt: str | None = None,
) -> str:
    """Render ``result`` into a standalone HTML page.

    ``selected`` names are highlighted; ``prompt`` overrides the result's own
    implementation prompt (pass the customized one when there is a selection).
    """
    env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)
    template = env.get_template("share.html")

    estimate = estimate_costs(result.recommendations)

    return template.render(
        title=title,
        generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
        message_html=_message_to_html(result.message),
        categories=group_by_category(result.recommendations),
        selected=set(selected),
        prompt=prompt or result.implementation_prompt,
        boilerplate=result.boilerplate,
        costs=estimate,
    )
