"""Models for conversation persistence."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from .message_models import AssistantMessage, MessageRole, UserMessage


class Thread(BaseModel):
    """A durable conversation identity."""

    thread_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class ThreadMessage:
    """A stored message of a thread."""

    role: MessageRole
    content: str
    timestamp: datetime | None = None

    def to_chat_message(self) -> UserMessage | AssistantMessage:
        """Map the stored message into the variant the agent loop replays."""
        if self.role == MessageRole.USER:
            return UserMessage(self.content)
        return AssistantMessage(self.content)
