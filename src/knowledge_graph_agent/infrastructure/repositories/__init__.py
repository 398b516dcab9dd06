"""Repository implementations."""

from .neo4j_conversation_store import Neo4jConversationStore

__all__ = ["Neo4jConversationStore"]
