"""Neo4j implementation of the graph client."""

import logging
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, RoutingControl
from neo4j.exceptions import DriverError, Neo4jError

from knowledge_graph_agent.domain.exceptions import ConfigurationError
from knowledge_graph_agent.domain.interfaces import IGraphClient
from knowledge_graph_agent.domain.models.graph_models import GraphRecord, QueryResult

logger = logging.getLogger(__name__)


class Neo4jGraphClient(IGraphClient):
    """Graph client backed by the async Neo4j driver."""

    def __init__(
        self,
        uri: str,
        username: str,
        password: str | None,
        database: str = "neo4j",
        connection_timeout: float = 30.0,
        driver: AsyncDriver | None = None,
    ):
        self._uri = uri
        self._username = username
        self._password = password
        self._database = database
        self._connection_timeout = connection_timeout
        self._driver = driver
        self._is_initialized = driver is not None

    @property
    def database(self) -> str:
        """Name of the database every query is sent to."""
        return self._database

    @property
    def is_initialized(self) -> bool:
        """Check if the driver has been created."""
        return self._is_initialized

    async def initialize(self) -> None:
        """Create the driver."""
        if self._is_initialized:
            return

        if not self._uri:
            raise ConfigurationError("Neo4j URI is not configured. Please set NEO4J_URI in your .env file.")

        auth = (self._username, self._password) if self._password is not None else None
        self._driver = AsyncGraphDatabase.driver(
            self._uri,
            auth=auth,
            connection_timeout=self._connection_timeout,
        )
        self._is_initialized = True
        logger.info("Neo4j driver created for %s (database=%s)", self._uri, self._database)

    async def cleanup(self) -> None:
        """Close the driver."""
        if self._driver is not None:
            await self._driver.close()
        self._driver = None
        self._is_initialized = False

    async def execute_query(self, query: str, parameters: dict[str, Any] | None = None) -> QueryResult | None:
        """
        Execute a query verbatim against the configured database.

        Driver and server errors are logged and reported as None so callers can
        tell a failed call apart from a query that matched nothing.
        """
        if not self._is_initialized:
            await self.initialize()

        try:
            records, _summary, keys = await self._driver.execute_query(
                query,
                parameters_=parameters or {},
                database_=self._database,
                routing_=RoutingControl.WRITE,
            )
        except (Neo4jError, DriverError) as e:
            logger.error("Neo4j query failed: %s", e)
            return None

        logger.debug("Neo4j query returned %d record(s)", len(records))
        return QueryResult(
            records=tuple(GraphRecord(keys=tuple(keys), values=tuple(record.values())) for record in records)
        )

    async def verify_connectivity(self) -> bool:
        """Check that the server is reachable with the configured credentials."""
        if not self._is_initialized:
            await self.initialize()

        try:
            await self._driver.verify_connectivity()
            return True
        except (Neo4jError, DriverError) as e:
            logger.warning("Neo4j connectivity check failed: %s", e)
            return False
