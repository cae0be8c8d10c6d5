"""JSON export of a recommended stack."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone

from stackguider.schemas.recommendation import Recommendation


def render_stack_json(
    recommendations: Sequence[Recommendation],
    implementation_prompt: str | None = None,
    *,
    title: str = "My Tech Stack",
    exported_at: datetime | None = None,
) -> str:
    exported_at = exported_at or datetime.now(timezone.utc)
    return json.dumps(
        {
            "project": title,
            "recommendations": [
                rec.model_dump(by_alias=True, exclude_none=True) for rec in recommendations
            ],
            "implementationPrompt": implementation_prompt,
            "exportedAt": exported_at.isoformat(),
        },
        indent=2,
    )
