"""Application services."""

from .agent_loop import AgentLoop
from .question_handler import QuestionHandler
from .tool_dispatcher import ToolDispatcher

__all__ = [
    "AgentLoop",
    "QuestionHandler",
    "ToolDispatcher",
]
