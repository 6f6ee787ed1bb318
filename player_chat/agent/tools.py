"""
Agent Tools for football player lookups.

Each tool has:
- name: Identifier the model uses to request it
- description: What the tool does (used by the model to decide when to use it)
- parameters: JSON schema of the arguments
- data_key: Slot of the response payload the tool's data fills ("sports" or "wiki")

Tools available:
- search_thesportsdb: Player profile from TheSportsDB
- search_wikipedia: Biography extract and image from Wikipedia

The registry is fixed at import time. ToolExecutor binds each tool name to a
data source and turns every outcome, including failures, into a ToolResult.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from player_chat.errors import FormatError, NotFoundError, TransportError, UnknownToolError

logger = logging.getLogger(__name__)


PLAYER_NAME_SCHEMA = {
    "type": "object",
    "properties": {
        "player_name": {
            "type": "string",
            "description": "The name of the football player to search for",
        }
    },
    "required": ["player_name"],
}


@dataclass(frozen=True)
class ToolDescriptor:
    """A tool the model may call."""
    name: str
    description: str
    parameters: dict
    data_key: str

    def to_schema(self) -> dict:
        """Function-calling schema sent to the model."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


SPORTSDB_TOOL = ToolDescriptor(
    name="search_thesportsdb",
    description=(
        "Search for football player information from TheSportsDB API. Returns player stats, "
        "team, nationality, position, height, weight, and biography."
    ),
    parameters=PLAYER_NAME_SCHEMA,
    data_key="sports",
)

WIKIPEDIA_TOOL = ToolDescriptor(
    name="search_wikipedia",
    description=(
        "Search for football player information from Wikipedia. Returns detailed biography, "
        "career information, and images."
    ),
    parameters=PLAYER_NAME_SCHEMA,
    data_key="wiki",
)

TOOL_REGISTRY: tuple[ToolDescriptor, ...] = (SPORTSDB_TOOL, WIKIPEDIA_TOOL)

# Response payload slots, in registry order
DATA_KEYS: tuple[str, ...] = tuple(tool.data_key for tool in TOOL_REGISTRY)


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Look up a descriptor by tool name."""
    for tool in TOOL_REGISTRY:
        if tool.name == name:
            return tool
    return None


def get_tool_schemas() -> list[dict]:
    """All tools in the function-calling format, in registry order."""
    return [tool.to_schema() for tool in TOOL_REGISTRY]


def get_tools_description() -> str:
    """Human-readable tool list for the system prompt."""
    return "\n".join(f"- {tool.name}: {tool.description}" for tool in TOOL_REGISTRY)


class ToolStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"
    UNKNOWN_TOOL = "unknown_tool"


@dataclass
class ToolResult:
    """Result from a tool execution."""
    tool_name: str
    status: ToolStatus
    data: Any = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == ToolStatus.OK

    @property
    def data_key(self) -> Optional[str]:
        tool = get_tool(self.tool_name)
        return tool.data_key if tool else None

    def to_string(self) -> str:
        """Format result for the model's context."""
        if self.status == ToolStatus.OK:
            return json.dumps(self.data, ensure_ascii=False, default=str)
        return json.dumps(
            {"status": self.status.value, "error": self.error},
            ensure_ascii=False,
        )


class ToolExecutor:
    """
    Runs tools against their data sources.

    Never raises for expected failures: a missing record, an unreachable
    source, an unreadable payload and an unknown tool name all come back as
    a tagged ToolResult so the caller can carry on with partial data.

    Example:
        executor = ToolExecutor(TheSportsDBClient(), WikipediaClient())
        result = executor.execute("search_wikipedia", {"player_name": "Lionel Messi"})
    """

    def __init__(self, sportsdb, wikipedia):
        """
        Args:
            sportsdb: Object with search_player(name) -> dict | None
            wikipedia: Object with search_player(name) -> dict | None
        """
        self._sources = {
            SPORTSDB_TOOL.name: sportsdb,
            WIKIPEDIA_TOOL.name: wikipedia,
        }

    @property
    def tool_names(self) -> list[str]:
        return list(self._sources)

    def execute(self, tool_name: str, arguments: Optional[dict] = None) -> ToolResult:
        """
        Execute a tool call and return the result.

        Args:
            tool_name: Registered tool name
            arguments: Tool arguments; passed through without schema validation

        Returns:
            ToolResult tagged ok / not_found / error / unknown_tool
        """
        arguments = arguments or {}
        logger.info(f"Executing tool: {tool_name} with args: {arguments}")

        source = self._sources.get(tool_name)
        if source is None:
            error = UnknownToolError(tool_name, self.tool_names)
            logger.warning(str(error))
            return ToolResult(tool_name, ToolStatus.UNKNOWN_TOOL, error=str(error))

        player_name = str(arguments.get("player_name") or "").strip()
        if not player_name:
            return ToolResult(tool_name, ToolStatus.ERROR, error="Missing argument: player_name")

        try:
            data = source.search_player(player_name)
        except (TransportError, FormatError) as e:
            logger.warning(f"Tool {tool_name} failed: {e}")
            return ToolResult(tool_name, ToolStatus.ERROR, error=str(e))

        if not data:
            error = NotFoundError(f"No information found for {player_name}")
            logger.info(f"Tool {tool_name} completed: {error}")
            return ToolResult(tool_name, ToolStatus.NOT_FOUND, error=str(error))

        logger.info(f"Tool {tool_name} completed: success=True")
        return ToolResult(tool_name, ToolStatus.OK, data=data)
