"""YAML config loader: reads stackguider.yml into AdvisorConfig."""

from pathlib import Path

import yaml

from stackguider.schemas.config import AdvisorConfig


def load_config(path: str | Path | None = None) -> AdvisorConfig:
    """Load and validate a config file; ``None`` yields the defaults.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    if path is None:
        return AdvisorConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if raw is None:
        return AdvisorConfig()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # A list whose items are all commented out loads as None; normalize to empty
    # and drop blank items.
    if "cors_origins" in raw:
        if raw["cors_origins"] is None:
            raw["cors_origins"] = []
        elif isinstance(raw["cors_origins"], list):
            raw["cors_origins"] = [item for item in raw["cors_origins"] if item]

    return AdvisorConfig(**raw)
