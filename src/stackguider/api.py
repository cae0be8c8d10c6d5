"""
FastAPI application for the StackGuideR chat backend.

Endpoints:
- POST /api/chat: project description in, interpreted recommendation out
- POST /api/prompt/customize: rewrite an implementation prompt for a selection
- GET /health: liveness probe

The advisor (and the LLM client inside it) is built once by the caller and
injected through ``create_app``; handlers resolve it from ``app.state``.
"""

import logging
from collections.abc import Sequence

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stackguider.advisor.agent import StackAdvisor
from stackguider.advisor.customizer import customize_prompt
from stackguider.schemas.api import (
    ChatRequest,
    ChatResponse,
    CustomizePromptRequest,
    CustomizePromptResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)

CHAT_FAILURE_MESSAGE = "Failed to process chat message"


def get_advisor(request: Request) -> StackAdvisor:
    return request.app.state.advisor


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer invalid bodies with 400 and the first validation message."""
    errors = exc.errors()
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, errors)
    message = str(errors[0]["msg"]).removeprefix("Value error, ") if errors else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def chat(
    body: ChatRequest,
    advisor: StackAdvisor = Depends(get_advisor),
):
    try:
        result = await advisor.recommend(body.message)
    except Exception:
        logger.exception("Chat request failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": CHAT_FAILURE_MESSAGE},
        )
    return ChatResponse.from_result(result)


async def customize(body: CustomizePromptRequest) -> CustomizePromptResponse:
    return CustomizePromptResponse(prompt=customize_prompt(body.prompt, body.selected))


async def health() -> HealthResponse:
    return HealthResponse()


def create_app(advisor: StackAdvisor, *, cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """Build the FastAPI app around an already-constructed advisor."""
    app = FastAPI(
        title="StackGuideR API",
        description="Tech stack recommendations from a project description",
        version="0.1.0",
    )
    app.state.advisor = advisor

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_api_route(
        "/api/chat",
        chat,
        methods=["POST"],
        response_model=ChatResponse,
        summary="Get stack recommendations for a project description",
    )
    app.add_api_route(
        "/api/prompt/customize",
        customize,
        methods=["POST"],
        response_model=CustomizePromptResponse,
        summary="Rewrite an implementation prompt for selected technologies",
    )
    app.add_api_route("/health", health, methods=["GET"], response_model=HealthResponse)

    return app
