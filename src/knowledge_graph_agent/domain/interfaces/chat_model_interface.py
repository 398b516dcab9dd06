"""Chat model interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..models.message_models import AssistantMessage, ChatMessage
from ..tools.registry import ToolDefinition


class IChatModel(ABC):
    """A tool-calling chat completion backend."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model's name."""
        pass

    @abstractmethod
    async def complete(
        self,
        messages: Sequence[ChatMessage],
        tools: Sequence[ToolDefinition],
    ) -> AssistantMessage:
        """
        Request one completion with automatic tool choice and a text response format.

        Args:
            messages: Ordered request context
            tools: Tools the model may call

        Returns:
            The chosen assistant message (text and/or tool calls)

        Raises:
            ModelInvocationError: If the backend fails or returns no choice
        """
        pass
