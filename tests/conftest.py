"""Pytest configuration and fixtures for the Knowledge Graph Agent tests."""

import itertools
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock

import pytest

from knowledge_graph_agent.domain.interfaces import IChatModel, IGraphClient
from knowledge_graph_agent.domain.models import (
    AgentConfig,
    AssistantMessage,
    ChatMessage,
    GraphRecord,
    QueryResult,
    ToolCall,
)
from knowledge_graph_agent.domain.tools.registry import ToolDefinition
from knowledge_graph_agent.infrastructure.repositories.neo4j_conversation_store import (
    APPEND_TURN_QUERY,
    CREATE_THREAD_QUERY,
    THREAD_EXISTS_QUERY,
    THREAD_MESSAGES_QUERY,
)


class InMemoryGraphClient(IGraphClient):
    """Graph client that understands the conversation store's queries."""

    def __init__(self):
        self.threads: dict[str, datetime] = {}
        self.messages: dict[str, list[dict[str, Any]]] = {}
        self.queries: list[tuple[str, dict[str, Any]]] = []
        self.fail = False
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    @property
    def database(self) -> str:
        return "neo4j"

    @property
    def is_initialized(self) -> bool:
        return True

    async def initialize(self) -> None:
        pass

    async def cleanup(self) -> None:
        pass

    async def verify_connectivity(self) -> bool:
        return not self.fail

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def execute_query(self, query: str, parameters: dict[str, Any] | None = None) -> QueryResult | None:
        parameters = parameters or {}
        self.queries.append((query, parameters))
        if self.fail:
            return None

        if query == CREATE_THREAD_QUERY:
            thread_id = f"thread-{next(self._ids)}"
            self.threads[thread_id] = self._tick()
            self.messages[thread_id] = []
            return QueryResult.from_rows([{"thread_id": thread_id}])

        if query == THREAD_EXISTS_QUERY:
            return QueryResult.from_rows([{"exists": parameters["thread_id"] in self.threads}])

        if query == THREAD_MESSAGES_QUERY:
            stored = sorted(
                self.messages.get(parameters["thread_id"], []),
                key=lambda m: (m["datetime"], m["position"]),
            )
            return QueryResult.from_rows(
                [{"role": m["role"], "content": m["content"], "datetime": m["datetime"]} for m in stored]
            )

        if query == APPEND_TURN_QUERY:
            thread_id = parameters["thread_id"]
            if thread_id not in self.threads:
                return QueryResult()
            now = self._tick()
            self.messages[thread_id].extend(
                [
                    {"role": "user", "content": parameters["question"], "datetime": now, "position": 0},
                    {"role": "assistant", "content": parameters["answer"], "datetime": now, "position": 1},
                ]
            )
            return QueryResult.from_rows([{"thread_id": thread_id}])

        return QueryResult()


class ScriptedChatModel(IChatModel):
    """Chat model that replays a fixed list of replies and records every request."""

    def __init__(self, replies: Sequence[AssistantMessage] | None = None, repeat_last: bool = False):
        self._replies = list(replies or [])
        self._repeat_last = repeat_last
        self.requests: list[list[ChatMessage]] = []
        self.tools_seen: list[list[ToolDefinition]] = []

    @property
    def model_name(self) -> str:
        return "scripted-model"

    async def complete(self, messages, tools) -> AssistantMessage:
        self.requests.append(list(messages))
        self.tools_seen.append(list(tools))
        index = len(self.requests) - 1
        if index < len(self._replies):
            return self._replies[index]
        if self._repeat_last and self._replies:
            return self._replies[-1]
        raise AssertionError("ScriptedChatModel ran out of replies")


def tool_reply(*calls: tuple[str, str], prefix: str = "call") -> AssistantMessage:
    """Assistant message requesting the given (name, arguments) tool calls."""
    return AssistantMessage(
        content=None,
        tool_calls=tuple(
            ToolCall(id=f"{prefix}_{i}", name=name, arguments=arguments) for i, (name, arguments) in enumerate(calls)
        ),
    )


@pytest.fixture
def graph_client():
    """Create an in-memory graph client."""
    return InMemoryGraphClient()


@pytest.fixture
def mock_graph_client():
    """Create a mock graph client for dispatcher tests."""
    client = AsyncMock(spec=IGraphClient)
    client.execute_query.return_value = QueryResult()
    return client


@pytest.fixture
def agent_config():
    """Create a sample agent configuration for testing."""
    return AgentConfig(
        model_name="scripted-model",
        database="neo4j",
        system_prompt="You answer questions about the graph.",
        iteration_limit=3,
    )


@pytest.fixture
def sample_records():
    """Create sample query rows."""
    return QueryResult(
        records=(
            GraphRecord(keys=("name", "born"), values=("Keanu Reeves", 1964)),
            GraphRecord(keys=("name", "born"), values=("Carrie-Anne Moss", None)),
        )
    )


# Test configuration
pytest_plugins = []


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
