"""
Player Chat API - FastAPI backend for the football player chat service.

Provides REST endpoints for:
- /chat: direct lookup (name extraction + both data sources, template answer)
- /agent: tool-calling agent backed by a local LLM
- Health checks
"""

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from player_chat.config import API_HOST, API_PORT, CORS_ORIGINS, DEBUG, LOG_LEVEL, validate_config
from player_chat.agent.agent import PlayerChatAgent
from player_chat.agent.outcome import OrchestrationOutcome
from player_chat.lookup import PlayerLookup

logger = logging.getLogger(__name__)

NO_MESSAGE_ERROR = "No message provided"
INTERNAL_ERROR_MESSAGE = "Something went wrong while answering. Please try again later."


class UTF8JSONResponse(JSONResponse):
    """JSON with an explicit charset; non-ASCII text is left unescaped."""
    media_type = "application/json; charset=utf-8"


# =============================================================================
# Pydantic Models for Request/Response
# =============================================================================

class ChatRequest(BaseModel):
    """Request body for both chat endpoints."""
    message: Optional[str] = Field(default=None, description="The user's chat message")

    model_config = {
        "json_schema_extra": {
            "example": {"message": "Tell me about Lionel Messi"}
        }
    }


class PlayerData(BaseModel):
    """Raw data returned by the sources."""
    sports: Optional[dict[str, Any]] = None
    wiki: Optional[dict[str, Any]] = None


class ChatResponse(BaseModel):
    """Response from the direct lookup."""
    success: bool
    message: str
    data: Optional[PlayerData] = None


class AgentChatResponse(ChatResponse):
    """Response from the agent, with loop diagnostics."""
    state: str
    iterations: int
    tools_used: list[str]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    llm: bool
    model: str


# =============================================================================
# Application Setup
# =============================================================================

app = FastAPI(
    title="Player Chat API",
    description="""
    Ask about a football player and get an answer built from
    TheSportsDB and Wikipedia, either directly or through a local LLM
    (Ollama) that decides which sources to call.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    default_response_class=UTF8JSONResponse,
)

# CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Created on first use so importing the app never touches the network
_agent: Optional[PlayerChatAgent] = None
_lookup: Optional[PlayerLookup] = None


def get_agent() -> PlayerChatAgent:
    global _agent
    if _agent is None:
        _agent = PlayerChatAgent()
    return _agent


def get_lookup() -> PlayerLookup:
    global _lookup
    if _lookup is None:
        _lookup = PlayerLookup()
    return _lookup


# =============================================================================
# Helper Functions
# =============================================================================

def error_response(status_code: int, error: str) -> UTF8JSONResponse:
    return UTF8JSONResponse(status_code=status_code, content={"error": error})


def outcome_to_response(outcome: OrchestrationOutcome) -> ChatResponse:
    return ChatResponse(**outcome.to_dict())


def internal_error() -> UTF8JSONResponse:
    return UTF8JSONResponse(
        status_code=500,
        content={"success": False, "message": INTERNAL_ERROR_MESSAGE, "data": None},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same error shape as a missing message."""
    logger.info(f"Rejected request to {request.url.path}: {exc.errors()}")
    return error_response(400, NO_MESSAGE_ERROR)


# =============================================================================
# API Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
def root():
    """Root endpoint with API information."""
    return {
        "name": "Player Chat API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health", response_model=HealthResponse, tags=["Info"])
def health_check(agent: PlayerChatAgent = Depends(get_agent)):
    """Check whether the model endpoint is reachable and the model is pulled."""
    llm_ok = agent.is_available()
    return HealthResponse(
        status="healthy" if llm_ok else "degraded",
        llm=llm_ok,
        model=getattr(agent.llm, "model", "unknown"),
    )


@app.options("/chat", tags=["Chat"])
@app.options("/agent", tags=["Chat"])
def preflight():
    """Cross-origin preflight: empty 200."""
    return Response(status_code=200)


@app.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Chat"],
)
def chat(request: ChatRequest, lookup: PlayerLookup = Depends(get_lookup)):
    """
    Answer a message by looking the player up in both sources directly.

    No language model is involved: the name is guessed from the message.
    """
    message = (request.message or "").strip()
    if not message:
        return error_response(400, NO_MESSAGE_ERROR)

    try:
        outcome = lookup.run(message)
    except Exception:
        logger.exception("Direct lookup failed")
        return internal_error()

    return outcome_to_response(outcome)


@app.post(
    "/agent",
    response_model=AgentChatResponse,
    responses={400: {"model": ErrorResponse}},
    tags=["Chat"],
)
def agent_chat(request: ChatRequest, agent: PlayerChatAgent = Depends(get_agent)):
    """
    Answer a message with the tool-calling agent.

    The model picks which sources to query, then writes the answer.
    Failures (model unreachable, too many steps) come back with success=false.
    """
    message = (request.message or "").strip()
    if not message:
        return error_response(400, NO_MESSAGE_ERROR)

    try:
        outcome = agent.run(message)
    except Exception:
        logger.exception("Agent run failed")
        return internal_error()

    base = outcome_to_response(outcome)
    return AgentChatResponse(
        **base.model_dump(),
        state=outcome.state,
        iterations=outcome.iterations,
        tools_used=[tc["tool"] for tc in outcome.tool_calls],
    )


# =============================================================================
# Run with Uvicorn
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    if not validate_config():
        raise SystemExit(1)

    print(f"Starting Player Chat API on {API_HOST}:{API_PORT}")
    print(f"Documentation: http://localhost:{API_PORT}/docs")

    uvicorn.run(
        "player_chat.api.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=DEBUG,
    )
