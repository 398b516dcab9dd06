"""OpenAI / Azure OpenAI implementation of the chat model."""

import logging
from collections.abc import Sequence
from typing import Any

from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from knowledge_graph_agent.config import ModelConfig
from knowledge_graph_agent.domain.exceptions import ConfigurationError, ModelInvocationError
from knowledge_graph_agent.domain.interfaces import IChatModel
from knowledge_graph_agent.domain.models.message_models import AssistantMessage, ChatMessage, ToolCall
from knowledge_graph_agent.domain.tools.registry import ToolDefinition

logger = logging.getLogger(__name__)


class OpenAIChatModel(IChatModel):
    """Chat completions with tool calling over the OpenAI SDK."""

    def __init__(self, client: AsyncOpenAI, model_name: str):
        self._client = client
        self._model_name = model_name

    @classmethod
    def from_config(cls, config: ModelConfig, model_name: str | None = None) -> "OpenAIChatModel":
        """Create a model backed by Azure OpenAI or OpenAI depending on configuration."""
        if not config.is_configured:
            raise ConfigurationError(
                "Chat model is not configured. Please set OPENAI_API_KEY or "
                "AZURE_OPENAI_ENDPOINT/AZURE_OPENAI_API_KEY in your .env file."
            )

        if config.is_azure:
            client = AsyncAzureOpenAI(
                azure_endpoint=config.azure_endpoint,
                api_key=config.azure_api_key,
                api_version=config.api_version,
                timeout=config.request_timeout,
            )
        else:
            client = AsyncOpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.request_timeout,
            )
        return cls(client, model_name or config.model_name)

    @property
    def model_name(self) -> str:
        """Get the model's name."""
        return self._model_name

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        tools: Sequence[ToolDefinition],
    ) -> AssistantMessage:
        """Request one completion and return the first choice's message."""
        request: dict[str, Any] = {
            "model": self._model_name,
            "messages": [message.to_payload() for message in messages],
            "response_format": {"type": "text"},
        }
        if tools:
            request["tools"] = [tool.to_openai_tool() for tool in tools]
            request["tool_choice"] = "auto"

        try:
            response = await self._client.chat.completions.create(**request)
        except OpenAIError as e:
            logger.error("Chat completion failed for model '%s': %s", self._model_name, e)
            raise ModelInvocationError(f"Chat completion failed: {e}", model_name=self._model_name) from e

        if response is None or not response.choices:
            raise ModelInvocationError("Chat completion returned no choices", model_name=self._model_name)

        return self._to_assistant_message(response.choices[0].message)

    @staticmethod
    def _to_assistant_message(message: Any) -> AssistantMessage:
        tool_calls = tuple(
            ToolCall(id=call.id, name=call.function.name, arguments=call.function.arguments or "")
            for call in (message.tool_calls or [])
        )
        return AssistantMessage(content=message.content, tool_calls=tool_calls)
