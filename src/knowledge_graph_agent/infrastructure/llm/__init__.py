"""Chat model clients."""

from .openai_chat_model import OpenAIChatModel

__all__ = ["OpenAIChatModel"]
