"""In-memory state for one user's conversation with the advisor."""

from __future__ import annotations

from stackguider.advisor.customizer import customize_prompt
from stackguider.schemas.recommendation import Recommendation, RecommendationResult


class StackSession:
    """Holds the current result and the technologies the user has picked from it.

    A new result supersedes the old one and clears the selection. The
    customized prompt is derived on every read and never stored.
    """

    def __init__(self) -> None:
        self._result: RecommendationResult | None = None
        self._selected: list[str] = []

    @property
    def result(self) -> RecommendationResult | None:
        return self._result

    def replace_result(self, result: RecommendationResult) -> None:
        self._result = result
        self._selected = []

    @property
    def selected(self) -> list[str]:
        """Selected names in the order they were toggled on."""
        return list(self._selected)

    @property
    def selected_recommendations(self) -> list[Recommendation]:
        if self._result is None:
            return []
        by_name = {rec.name: rec for rec in self._result.recommendations}
        return [by_name[name] for name in self._selected]

    def toggle(self, name: str) -> bool:
        """Flip ``name`` in or out of the selection; return True if now selected."""
        if self._result is None:
            raise ValueError("No recommendations to select from yet")
        if not any(rec.name == name for rec in self._result.recommendations):
            raise ValueError(f"Unknown technology: {name!r}")

        if name in self._selected:
            self._selected.remove(name)
            return False
        self._selected.append(name)
        return True

    def clear_selection(self) -> None:
        self._selected = []

    @property
    def customized_prompt(self) -> str | None:
        if self._result is None or not self._result.implementation_prompt:
            return None
        if not self._selected:
            return None
        return customize_prompt(self._result.implementation_prompt, self._selected)

    @property
    def active_prompt(self) -> str | None:
        """The prompt the user would copy right now."""
        if self._result is None:
            return None
        return self.customized_prompt or self._result.implementation_prompt
