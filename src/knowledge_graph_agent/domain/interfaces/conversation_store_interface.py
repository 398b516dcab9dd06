"""Repository interface for conversation persistence."""

from abc import ABC, abstractmethod

from knowledge_graph_agent.domain.models.conversation_models import ThreadMessage
from knowledge_graph_agent.domain.models.message_models import AssistantMessage, UserMessage


class IConversationStore(ABC):
    """Interface for thread and message persistence operations."""

    @abstractmethod
    async def create_thread(self) -> str:
        """Create a new thread and return its identifier."""
        pass

    @abstractmethod
    async def load_history(self, thread_id: str) -> list[UserMessage | AssistantMessage]:
        """Load a thread's messages oldest first; empty for unknown threads."""
        pass

    @abstractmethod
    async def append_turn(self, thread_id: str, question: str, answer: str) -> None:
        """Persist one question/answer pair atomically."""
        pass

    @abstractmethod
    async def thread_exists(self, thread_id: str) -> bool:
        """Check whether a thread with this identifier exists."""
        pass

    @abstractmethod
    async def get_thread_messages(self, thread_id: str) -> list[ThreadMessage]:
        """Load a thread's stored messages with their timestamps."""
        pass
