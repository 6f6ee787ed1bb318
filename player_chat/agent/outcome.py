"""
Terminal result of handling one chat message.

Both the agent and the direct lookup produce an OrchestrationOutcome;
the API serializes it as {success, message, data}.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from player_chat.agent.tools import DATA_KEYS, ToolResult


@dataclass
class OrchestrationOutcome:
    """
    Attributes:
        success: True when at least one tool returned data and the flow completed
        message: Natural language answer or user-facing error
        data: {"sports": ..., "wiki": ...} or None when nothing was found
        state: Terminal agent state ("done", "failed", "exhausted")
        iterations: Number of model calls made
        tool_calls: Trace of the tools run, in execution order
        total_time_ms: Wall time spent on the request
    """
    success: bool
    message: str
    data: Optional[dict] = None
    state: str = "done"
    iterations: int = 0
    tool_calls: list = field(default_factory=list)
    total_time_ms: float = 0.0

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message, "data": self.data}


def build_payload(results: Iterable[ToolResult]) -> Optional[dict]:
    """
    Group tool results by data slot.

    Results that carry no data (not found, error, unknown tool) leave their
    slot as None. Returns None when no slot was filled.
    """
    data = {key: None for key in DATA_KEYS}
    for result in results:
        if result.success and result.data_key in data:
            data[result.data_key] = result.data
    if all(value is None for value in data.values()):
        return None
    return data
