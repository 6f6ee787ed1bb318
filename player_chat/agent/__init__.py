"""
Football player chat agent.

Uses a local LLM with tool calling to answer questions about football
players. The model decides which tools to call:
- search_thesportsdb for the player's profile
- search_wikipedia for biography and career background
"""

from player_chat.agent.tools import (
    ToolDescriptor,
    ToolExecutor,
    ToolResult,
    ToolStatus,
    TOOL_REGISTRY,
    get_tool_schemas,
    get_tools_description,
)
from player_chat.agent.agent import PlayerChatAgent, AgentState

__all__ = [
    "PlayerChatAgent",
    "AgentState",
    "ToolDescriptor",
    "ToolExecutor",
    "ToolResult",
    "ToolStatus",
    "TOOL_REGISTRY",
    "get_tool_schemas",
    "get_tools_description",
]
