"""Maps model tool calls onto graph operations."""

import logging

from pydantic import ValidationError as PydanticValidationError

from knowledge_graph_agent.domain.exceptions import ToolArgumentError
from knowledge_graph_agent.domain.interfaces import IGraphClient
from knowledge_graph_agent.domain.models.graph_models import QueryResult
from knowledge_graph_agent.domain.models.message_models import ToolCall
from knowledge_graph_agent.domain.tools.registry import (
    EXECUTE_QUERY_TOOL,
    GET_SCHEMA_TOOL,
    ExecuteQueryArguments,
)

logger = logging.getLogger(__name__)

SCHEMA_ERROR = "Error getting schema."
QUERY_ERROR = "Error executing query."
NO_RESULTS = "Query returned no results."

SCHEMA_QUERY = """
CALL apoc.meta.data()
YIELD label, elementType, type, property
WHERE elementType = 'node'
WITH collect({label: label, property: property, propertyType: type}) AS nodes
CALL apoc.meta.data()
YIELD label, other, elementType, type, property
WHERE elementType = 'relationship'
WITH nodes, label AS relType, other AS endNodeLabel,
     collect({property: property, propertyType: type}) AS relProperties
WITH nodes, collect({relationshipType: relType, endNodeLabel: endNodeLabel, properties: relProperties}) AS relationships
RETURN {nodes: nodes, relationships: relationships} AS schema
"""


def decode_arguments(tool_name: str, raw_arguments: str) -> ExecuteQueryArguments:
    """
    Decode the raw argument string of a query-execution call.

    Raises:
        ToolArgumentError: If the payload is not a JSON object with exactly one string ``query``
    """
    try:
        return ExecuteQueryArguments.model_validate_json(raw_arguments or "")
    except PydanticValidationError as e:
        reasons = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}" for error in e.errors()
        )
        raise ToolArgumentError(reasons, tool_name=tool_name, raw_arguments=raw_arguments) from e


def format_result(result: QueryResult, skip_empty: bool = False) -> str:
    """Flatten every row and join them with newlines."""
    lines = [record.to_line() for record in result]
    if skip_empty:
        lines = [line for line in lines if line]
    return "\n".join(lines)


class ToolDispatcher:
    """Executes the registered tools against the graph database."""

    def __init__(self, graph_client: IGraphClient):
        self._graph = graph_client

    async def dispatch(self, tool_call: ToolCall) -> str:
        """
        Run one tool call and return its textual result.

        Unknown tool names yield an empty string. Collaborator failures and
        malformed arguments come back as sentinel strings, never exceptions.
        """
        if tool_call.name == GET_SCHEMA_TOOL:
            return await self.get_schema()

        if tool_call.name == EXECUTE_QUERY_TOOL:
            try:
                arguments = decode_arguments(tool_call.name, tool_call.arguments)
            except ToolArgumentError as e:
                logger.warning("Rejected arguments for %s: %s", tool_call.name, e.message)
                return f"Invalid arguments for tool '{tool_call.name}': {e.message}"
            return await self.execute_query(arguments.query)

        logger.warning("Ignoring call to unknown tool '%s'", tool_call.name)
        return ""

    async def get_schema(self) -> str:
        """Describe node labels, relationship types and their properties."""
        result = await self._graph.execute_query(SCHEMA_QUERY)
        if result is None:
            return SCHEMA_ERROR
        return format_result(result)

    async def execute_query(self, query: str) -> str:
        """Run model-written query text verbatim, without parameter binding."""
        logger.info("Executing model query: %s", query)
        result = await self._graph.execute_query(query)
        if result is None:
            return QUERY_ERROR
        return format_result(result, skip_empty=True) or NO_RESULTS
