"""Chat message variants exchanged with the chat model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MessageRole(str, Enum):
    """Message roles in a chat completion request."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class ToolCall:
    """A single tool invocation requested by the model.

    ``arguments`` is the raw JSON string exactly as the model produced it.
    """

    id: str
    name: str
    arguments: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass(frozen=True)
class SystemMessage:
    content: str
    role: MessageRole = field(default=MessageRole.SYSTEM, init=False)

    def to_payload(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class UserMessage:
    content: str
    role: MessageRole = field(default=MessageRole.USER, init=False)

    def to_payload(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class AssistantMessage:
    """Model output: text, tool calls, or both."""

    content: str | None = None
    tool_calls: tuple[ToolCall, ...] = ()
    role: MessageRole = field(default=MessageRole.ASSISTANT, init=False)

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            payload["tool_calls"] = [call.to_payload() for call in self.tool_calls]
        return payload


@dataclass(frozen=True)
class ToolMessage:
    """Result of one tool call, keyed back to the call that produced it."""

    content: str
    tool_call_id: str
    role: MessageRole = field(default=MessageRole.TOOL, init=False)

    def to_payload(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content, "tool_call_id": self.tool_call_id}


ChatMessage = SystemMessage | UserMessage | AssistantMessage | ToolMessage
