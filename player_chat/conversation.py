"""
Conversation model shared by the agent and the model client.

A Conversation starts with exactly one system turn followed by the user's
message. It is immutable: append() returns a new Conversation, so the
agent owns the only growing history and the model client just reads a
snapshot of it each turn.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolInvocation:
    """A tool call requested by the model."""
    tool_name: str
    arguments: dict = field(default_factory=dict)

    def to_message(self) -> dict:
        return {"function": {"name": self.tool_name, "arguments": self.arguments}}


@dataclass(frozen=True)
class ConversationTurn:
    """A single turn in the conversation."""
    role: Role
    content: str
    tool_calls: tuple[ToolInvocation, ...] = ()
    tool_name: Optional[str] = None  # set on tool turns

    def __post_init__(self):
        if self.tool_calls and self.role != Role.ASSISTANT:
            raise ValueError("Only assistant turns can carry tool calls")

    def to_message(self) -> dict:
        """Serialize for the chat API."""
        message = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_message() for call in self.tool_calls]
        if self.tool_name:
            message["tool_name"] = self.tool_name
        return message


@dataclass(frozen=True)
class Conversation:
    """Ordered, append-only sequence of turns headed by a single system turn."""
    turns: tuple[ConversationTurn, ...]

    def __post_init__(self):
        if not self.turns or self.turns[0].role != Role.SYSTEM:
            raise ValueError("A conversation must start with a system turn")
        if any(turn.role == Role.SYSTEM for turn in self.turns[1:]):
            raise ValueError("A conversation has exactly one system turn")

    @classmethod
    def start(cls, system_prompt: str, user_message: str) -> "Conversation":
        return cls((
            ConversationTurn(Role.SYSTEM, system_prompt),
            ConversationTurn(Role.USER, user_message),
        ))

    def append(self, turn: ConversationTurn) -> "Conversation":
        return Conversation(self.turns + (turn,))

    def with_assistant(self, content: str, tool_calls=()) -> "Conversation":
        return self.append(ConversationTurn(Role.ASSISTANT, content, tuple(tool_calls)))

    def with_tool_result(self, tool_name: str, payload) -> "Conversation":
        content = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False, default=str)
        return self.append(ConversationTurn(Role.TOOL, content, tool_name=tool_name))

    @property
    def system_turn(self) -> ConversationTurn:
        return self.turns[0]

    def to_messages(self) -> list[dict]:
        return [turn.to_message() for turn in self.turns]

    def __len__(self) -> int:
        return len(self.turns)
