"""Request and response bodies for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from stackguider.schemas.recommendation import Boilerplate, Recommendation, RecommendationResult


class ChatRequest(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def check_message(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message is required")
        return v


class ChatResponse(BaseModel):
    """A RecommendationResult as the web client expects it (``response`` carries the message)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    response: str
    recommendations: list[Recommendation]
    implementation_prompt: str | None = None
    boilerplate: Boilerplate | None = None

    @classmethod
    def from_result(cls, result: RecommendationResult) -> "ChatResponse":
        return cls(
            response=result.message,
            recommendations=result.recommendations,
            implementation_prompt=result.implementation_prompt,
            boilerplate=result.boilerplate,
        )


class CustomizePromptRequest(BaseModel):
    prompt: str
    selected: list[str] = Field(default_factory=list)


class CustomizePromptResponse(BaseModel):
    prompt: str


class HealthResponse(BaseModel):
    status: str = "ok"
