"""Domain exceptions and error handling."""

import time
from typing import Any


class KnowledgeGraphAgentError(Exception):
    """Base exception for all knowledge graph agent errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = time.time()

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "timestamp": self.timestamp,
        }


class ConfigurationError(KnowledgeGraphAgentError):
    """Raised when there's a configuration issue."""

    pass


class ValidationError(KnowledgeGraphAgentError):
    """Raised when caller input fails validation."""

    pass


class StoreError(KnowledgeGraphAgentError):
    """Raised when the conversation store cannot read or write."""

    def __init__(self, message: str, operation: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        if operation:
            self.details["operation"] = operation


class ThreadNotFoundError(StoreError):
    """Raised when a thread id does not match any stored thread."""

    def __init__(self, thread_id: str, **kwargs):
        super().__init__(f"Thread '{thread_id}' not found", error_code="THREAD_NOT_FOUND", **kwargs)
        self.thread_id = thread_id
        self.details["thread_id"] = thread_id


class ToolError(KnowledgeGraphAgentError):
    """Base exception for tool-related errors."""

    def __init__(self, message: str, tool_name: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.tool_name = tool_name
        if tool_name:
            self.details["tool_name"] = tool_name


class ToolArgumentError(ToolError):
    """Raised when a tool call carries arguments that do not match the tool's schema."""

    def __init__(self, message: str, tool_name: str | None = None, raw_arguments: str | None = None, **kwargs):
        super().__init__(message, tool_name=tool_name, error_code="INVALID_TOOL_ARGUMENTS", **kwargs)
        self.raw_arguments = raw_arguments
        if raw_arguments is not None:
            self.details["raw_arguments"] = raw_arguments


class ModelInvocationError(KnowledgeGraphAgentError):
    """Raised when the chat model fails to return a usable response."""

    def __init__(self, message: str, model_name: str | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.model_name = model_name
        if model_name:
            self.details["model_name"] = model_name
