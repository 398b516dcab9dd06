"""Tests for the Neo4j and OpenAI adapters and configuration."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from neo4j import RoutingControl
from neo4j.exceptions import ServiceUnavailable
from openai import AsyncAzureOpenAI, AsyncOpenAI, OpenAIError

from knowledge_graph_agent.config import AgentLoopConfig, ApplicationConfig, ModelConfig, Neo4jConfig
from knowledge_graph_agent.domain.exceptions import ConfigurationError, ModelInvocationError
from knowledge_graph_agent.domain.models import (
    AssistantMessage,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from knowledge_graph_agent.domain.tools.registry import ToolRegistry
from knowledge_graph_agent.infrastructure.graph import Neo4jGraphClient
from knowledge_graph_agent.infrastructure.llm import OpenAIChatModel


def make_record(**values):
    record = MagicMock()
    record.values.return_value = list(values.values())
    return record


@pytest.fixture
def driver():
    """Create a mock async Neo4j driver."""
    driver = AsyncMock()
    driver.execute_query.return_value = ([], MagicMock(), [])
    return driver


class TestNeo4jGraphClient:
    """Test cases for Neo4jGraphClient."""

    @pytest.mark.asyncio
    async def test_execute_query_maps_records(self, driver):
        driver.execute_query.return_value = (
            [make_record(name="Keanu Reeves", born=1964)],
            MagicMock(),
            ["name", "born"],
        )
        client = Neo4jGraphClient("neo4j://db", "neo4j", "pw", database="movies", driver=driver)

        result = await client.execute_query("MATCH (p) RETURN p.name AS name, p.born AS born")

        assert result.records[0].to_line() == "name: Keanu Reeves, born: 1964"
        driver.execute_query.assert_awaited_once_with(
            "MATCH (p) RETURN p.name AS name, p.born AS born",
            parameters_={},
            database_="movies",
            routing_=RoutingControl.WRITE,
        )

    @pytest.mark.asyncio
    async def test_execute_query_passes_parameters(self, driver):
        client = Neo4jGraphClient("neo4j://db", "neo4j", "pw", driver=driver)

        result = await client.execute_query("MATCH (t {id: $id}) RETURN t", {"id": "t1"})

        assert result.is_empty
        assert driver.execute_query.await_args.kwargs["parameters_"] == {"id": "t1"}

    @pytest.mark.asyncio
    async def test_execute_query_failure_returns_none(self, driver):
        driver.execute_query.side_effect = ServiceUnavailable("connection refused")
        client = Neo4jGraphClient("neo4j://db", "neo4j", "pw", driver=driver)

        assert await client.execute_query("RETURN 1") is None

    @pytest.mark.asyncio
    async def test_verify_connectivity(self, driver):
        client = Neo4jGraphClient("neo4j://db", "neo4j", "pw", driver=driver)
        assert await client.verify_connectivity()

        driver.verify_connectivity.side_effect = ServiceUnavailable("down")
        assert not await client.verify_connectivity()

    @pytest.mark.asyncio
    async def test_cleanup_closes_driver(self, driver):
        client = Neo4jGraphClient("neo4j://db", "neo4j", "pw", driver=driver)

        await client.cleanup()

        driver.close.assert_awaited_once()
        assert not client.is_initialized

    @pytest.mark.asyncio
    async def test_missing_uri(self):
        client = Neo4jGraphClient("", "neo4j", "pw")

        with pytest.raises(ConfigurationError):
            await client.initialize()


def make_completion(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def openai_client():
    """Create a mock OpenAI client."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_completion(content="Hello"))
    return client


class TestOpenAIChatModel:
    """Test cases for OpenAIChatModel."""

    @pytest.mark.asyncio
    async def test_complete_text_reply(self, openai_client):
        model = OpenAIChatModel(openai_client, "gpt-4o")

        reply = await model.complete([SystemMessage("sys"), UserMessage("Hi")], ToolRegistry.default().definitions())

        assert reply == AssistantMessage("Hello")
        request = openai_client.chat.completions.create.await_args.kwargs
        assert request["model"] == "gpt-4o"
        assert request["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "Hi"},
        ]
        assert request["tool_choice"] == "auto"
        assert [tool["function"]["name"] for tool in request["tools"]] == ["get_schema", "execute_query"]
        assert request["response_format"] == {"type": "text"}

    @pytest.mark.asyncio
    async def test_complete_without_tools(self, openai_client):
        await OpenAIChatModel(openai_client, "gpt-4o").complete([UserMessage("Hi")], [])

        request = openai_client.chat.completions.create.await_args.kwargs
        assert "tools" not in request
        assert "tool_choice" not in request

    @pytest.mark.asyncio
    async def test_tool_calls_are_mapped(self, openai_client):
        openai_client.chat.completions.create.return_value = make_completion(
            tool_calls=[
                SimpleNamespace(id="call_1", function=SimpleNamespace(name="get_schema", arguments=None)),
                SimpleNamespace(
                    id="call_2", function=SimpleNamespace(name="execute_query", arguments='{"query": "RETURN 1"}')
                ),
            ]
        )

        reply = await OpenAIChatModel(openai_client, "gpt-4o").complete([UserMessage("Hi")], [])

        assert reply.content is None
        assert reply.tool_calls == (
            ToolCall(id="call_1", name="get_schema", arguments=""),
            ToolCall(id="call_2", name="execute_query", arguments='{"query": "RETURN 1"}'),
        )

    @pytest.mark.asyncio
    async def test_tool_round_trip_payload(self, openai_client):
        last = AssistantMessage(tool_calls=(ToolCall(id="call_1", name="get_schema", arguments="{}"),))

        await OpenAIChatModel(openai_client, "gpt-4o").complete([last, ToolMessage("schema", "call_1")], [])

        messages = openai_client.chat.completions.create.await_args.kwargs["messages"]
        assert messages[0]["tool_calls"][0]["function"] == {"name": "get_schema", "arguments": "{}"}
        assert messages[1] == {"role": "tool", "content": "schema", "tool_call_id": "call_1"}

    @pytest.mark.asyncio
    async def test_sdk_error_raises_model_invocation_error(self, openai_client):
        openai_client.chat.completions.create.side_effect = OpenAIError("rate limited")

        with pytest.raises(ModelInvocationError) as exc_info:
            await OpenAIChatModel(openai_client, "gpt-4o").complete([UserMessage("Hi")], [])

        assert exc_info.value.model_name == "gpt-4o"

    @pytest.mark.asyncio
    async def test_empty_choices(self, openai_client):
        openai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])

        with pytest.raises(ModelInvocationError):
            await OpenAIChatModel(openai_client, "gpt-4o").complete([UserMessage("Hi")], [])

    def test_from_config_openai(self):
        config = ModelConfig(_env_file=None, OPENAI_API_KEY="sk-test", AZURE_OPENAI_ENDPOINT=None)

        model = OpenAIChatModel.from_config(config, "gpt-4o-mini")

        assert model.model_name == "gpt-4o-mini"
        assert isinstance(model._client, AsyncOpenAI)
        assert not isinstance(model._client, AsyncAzureOpenAI)

    def test_from_config_azure(self):
        config = ModelConfig(
            _env_file=None,
            AZURE_OPENAI_ENDPOINT="https://example.openai.azure.com",
            AZURE_OPENAI_API_KEY="azure-key",
            MODEL_NAME="my-deployment",
        )

        model = OpenAIChatModel.from_config(config)

        assert model.model_name == "my-deployment"
        assert isinstance(model._client, AsyncAzureOpenAI)

    def test_from_config_unconfigured(self):
        config = ModelConfig(_env_file=None, OPENAI_API_KEY=None, AZURE_OPENAI_ENDPOINT=None)

        with pytest.raises(ConfigurationError):
            OpenAIChatModel.from_config(config)


class TestConfiguration:
    """Test cases for settings groups."""

    def test_neo4j_env_prefix(self, monkeypatch):
        monkeypatch.setenv("NEO4J_URI", "neo4j+s://graph.example.com")
        monkeypatch.setenv("NEO4J_DATABASE", "movies")

        config = Neo4jConfig(_env_file=None)

        assert config.uri == "neo4j+s://graph.example.com"
        assert config.database == "movies"

    def test_azure_endpoint_trailing_slash(self):
        config = ModelConfig(_env_file=None, AZURE_OPENAI_ENDPOINT="https://example.openai.azure.com")

        assert config.azure_endpoint == "https://example.openai.azure.com/"
        assert config.is_azure

    def test_agent_loop_defaults(self, monkeypatch):
        monkeypatch.delenv("AGENT_ITERATION_LIMIT", raising=False)
        monkeypatch.delenv("AGENT_VALIDATE_THREAD_IDS", raising=False)

        config = AgentLoopConfig(_env_file=None)

        assert config.iteration_limit == 10
        assert config.validate_thread_ids is False

    def test_agent_loop_rejects_zero_limit(self, monkeypatch):
        monkeypatch.setenv("AGENT_ITERATION_LIMIT", "0")

        with pytest.raises(ValueError):
            AgentLoopConfig(_env_file=None)

    def test_log_level_normalized(self):
        assert ApplicationConfig(_env_file=None, log_level="debug").log_level == "DEBUG"
