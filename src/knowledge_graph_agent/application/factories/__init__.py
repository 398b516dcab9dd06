"""Factory implementations."""

from .handler_factory import HandlerFactory, create_question_handler

__all__ = [
    "HandlerFactory",
    "create_question_handler",
]
