"""Language model client for the player chat agent."""

from player_chat.llm.client import (
    OllamaChatClient,
    ModelResponse,
    ModelReply,
    ModelToolCalls,
    ModelFailure,
    FailureKind,
)

__all__ = [
    "OllamaChatClient",
    "ModelResponse",
    "ModelReply",
    "ModelToolCalls",
    "ModelFailure",
    "FailureKind",
]
