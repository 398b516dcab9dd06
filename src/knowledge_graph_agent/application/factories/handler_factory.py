"""Wires question handlers from configuration."""

import logging

from knowledge_graph_agent.application.services.question_handler import QuestionHandler
from knowledge_graph_agent.application.services.tool_dispatcher import ToolDispatcher
from knowledge_graph_agent.config import Settings
from knowledge_graph_agent.config import settings as default_settings
from knowledge_graph_agent.domain.interfaces import IChatModel, IGraphClient
from knowledge_graph_agent.domain.models import AgentConfig
from knowledge_graph_agent.domain.tools.registry import ToolRegistry
from knowledge_graph_agent.infrastructure.graph import Neo4jGraphClient
from knowledge_graph_agent.infrastructure.llm import OpenAIChatModel
from knowledge_graph_agent.infrastructure.repositories import Neo4jConversationStore

logger = logging.getLogger(__name__)


class HandlerFactory:
    """Builds a question handler and owns the graph connection behind it."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or default_settings
        self._graph_client: IGraphClient | None = None

    @property
    def graph_client(self) -> IGraphClient | None:
        return self._graph_client

    def create_graph_client(self, database: str | None = None) -> IGraphClient:
        """Create the Neo4j client, reusing it across handlers."""
        if self._graph_client is None:
            neo4j_config = self._settings.neo4j
            self._graph_client = Neo4jGraphClient(
                uri=neo4j_config.uri,
                username=neo4j_config.username,
                password=neo4j_config.password,
                database=database or neo4j_config.database,
                connection_timeout=neo4j_config.connection_timeout,
            )
        return self._graph_client

    def create_model(self, model_name: str | None = None) -> IChatModel:
        return OpenAIChatModel.from_config(self._settings.model, model_name)

    def create_question_handler(
        self,
        config: AgentConfig | None = None,
        model: IChatModel | None = None,
    ) -> QuestionHandler:
        """
        Create a question handler.

        Args:
            config: Explicit agent configuration, built from settings if None
            model: Chat model, built from settings if None

        Returns:
            QuestionHandler wired to Neo4j and the chat model
        """
        config = config or AgentConfig.from_settings(self._settings)
        graph_client = self.create_graph_client(config.database)

        handler = QuestionHandler(
            config=config,
            model=model or self.create_model(config.model_name),
            store=Neo4jConversationStore(graph_client),
            dispatcher=ToolDispatcher(graph_client),
            registry=ToolRegistry.default(),
        )
        logger.debug("Created question handler (model=%s, database=%s)", config.model_name, config.database)
        return handler

    async def cleanup(self) -> None:
        """Close the graph connection."""
        if self._graph_client is not None:
            await self._graph_client.cleanup()
            self._graph_client = None


def create_question_handler(settings: Settings | None = None) -> tuple[QuestionHandler, HandlerFactory]:
    """Create a handler from settings; the factory is returned so callers can clean up."""
    factory = HandlerFactory(settings)
    return factory.create_question_handler(), factory
