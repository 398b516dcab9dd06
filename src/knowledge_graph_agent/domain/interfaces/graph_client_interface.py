"""Graph database client interface."""

from abc import abstractmethod
from typing import Any

from ..models.graph_models import QueryResult
from .service_interface import IService


class IGraphClient(IService):
    """Executes query text against one target graph database."""

    @property
    @abstractmethod
    def database(self) -> str:
        """Name of the database every query is sent to."""
        pass

    @abstractmethod
    async def execute_query(self, query: str, parameters: dict[str, Any] | None = None) -> QueryResult | None:
        """
        Execute a query verbatim with the given named parameters.

        Args:
            query: Query text, passed through unmodified
            parameters: Named parameter bindings

        Returns:
            The ordered rows, or None when the call failed to produce a response
        """
        pass

    @abstractmethod
    async def verify_connectivity(self) -> bool:
        """Check that the database is reachable."""
        pass
