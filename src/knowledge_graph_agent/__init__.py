"""Knowledge Graph Agent - natural-language questions over a Neo4j graph."""

from knowledge_graph_agent.observability import setup_logging

from .config import settings

__all__ = ["settings", "setup_logging"]
