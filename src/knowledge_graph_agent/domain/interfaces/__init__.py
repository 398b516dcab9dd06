"""Domain interfaces and abstract base classes."""

from .chat_model_interface import IChatModel
from .conversation_store_interface import IConversationStore
from .graph_client_interface import IGraphClient
from .service_interface import IService

__all__ = [
    "IChatModel",
    "IConversationStore",
    "IGraphClient",
    "IService",
]
