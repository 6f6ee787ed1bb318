"""
Error taxonomy for the player chat service.

Data sources and the model client raise these; the tool executor and the
agent turn them into tagged results so the HTTP layer always answers with
a normal JSON body.
"""

from typing import Optional


class PlayerChatError(Exception):
    """Base class for all service errors."""


class TransportError(PlayerChatError):
    """A remote service could not be reached, timed out, or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FormatError(PlayerChatError):
    """A remote service answered with a body that could not be parsed."""


class NotFoundError(PlayerChatError):
    """A data source was reached but had no matching record."""


class UnknownToolError(PlayerChatError):
    """The model asked for a tool that is not in the registry."""

    def __init__(self, tool_name: str, available: list[str]):
        super().__init__(f"Unknown tool: {tool_name}. Available: {available}")
        self.tool_name = tool_name
        self.available = available


class BudgetExhausted(PlayerChatError):
    """The agent used all of its model calls without producing an answer."""
