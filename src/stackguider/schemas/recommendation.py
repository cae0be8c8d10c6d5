"""Pydantic models for an interpreted stack recommendation."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_MESSAGE = "Here are my recommendations for your project."


class _WireModel(BaseModel):
    """Accepts and emits the camelCase keys the model is asked to produce."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Recommendation(_WireModel):
    """One suggested technology. ``name`` is the key used for stack selection."""

    name: str
    category: str      # "Framework", "Database", "Authentication", ...
    url: str
    description: str
    icon_url: str | None = None


class CodeFile(_WireModel):
    path: str
    content: str
    language: str


class Boilerplate(_WireModel):
    """Generated starter files plus the shell steps to set them up."""

    project_name: str
    description: str = ""
    files: list[CodeFile] = []
    setup: list[str] = []


class RecommendationResult(_WireModel):
    """Validated output of interpreting one model completion."""

    message: str = DEFAULT_MESSAGE
    recommendations: list[Recommendation] = []
    implementation_prompt: str | None = None
    boilerplate: Boilerplate | None = None
