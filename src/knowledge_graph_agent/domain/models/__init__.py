"""Domain models."""

from .agent_models import AgentConfig, AgentResponse, AskResult, LoopStatus
from .conversation_models import Thread, ThreadMessage
from .graph_models import GraphRecord, QueryResult
from .message_models import (
    AssistantMessage,
    ChatMessage,
    MessageRole,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
)

__all__ = [
    "AgentConfig",
    "AgentResponse",
    "AskResult",
    "AssistantMessage",
    "ChatMessage",
    "GraphRecord",
    "LoopStatus",
    "MessageRole",
    "QueryResult",
    "SystemMessage",
    "Thread",
    "ThreadMessage",
    "ToolCall",
    "ToolMessage",
    "UserMessage",
]
