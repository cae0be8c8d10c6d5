"""Configuration schema: validates stackguider.yml."""

from pydantic import BaseModel, field_validator


class AdvisorConfig(BaseModel):
    """Top-level configuration loaded from stackguider.yml.

    Every key is optional; secrets (``OPENAI_API_KEY``) come from the
    environment, never from this file.
    """

    # Model
    model: str = "gpt-4o"
    max_tokens: int = 4000
    json_mode: bool = False

    # Interpreter: completions shorter than this with no "{" are shown as prose
    prose_fallback_limit: int = 1000

    # Exports
    project_title: str = "My Tech Stack"
    output_directory: str = "./output"

    # HTTP API
    cors_origins: list[str] = ["*"]

    @field_validator("max_tokens", "prose_fallback_limit")
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("project_title")
    @classmethod
    def check_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("project_title must not be blank")
        return v
