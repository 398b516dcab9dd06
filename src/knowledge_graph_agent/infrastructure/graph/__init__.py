"""Graph database clients."""

from .neo4j_client import Neo4jGraphClient

__all__ = ["Neo4jGraphClient"]
