"""Declarations of the tools the model may call.

The registry is purely descriptive: it names each tool, says what it is for
and, where the tool takes input, carries the JSON schema of its arguments.
Executing a tool is the dispatcher's job.

USAGE:
    registry = ToolRegistry.default()
    registry.names()          # ["get_schema", "execute_query"]
    registry.to_openai_tools()  # payload for chat.completions "tools"
"""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

from .params import ObjectParam, StringParam

GET_SCHEMA_TOOL = "get_schema"
EXECUTE_QUERY_TOOL = "execute_query"


class ExecuteQueryArguments(BaseModel):
    """Decoded arguments of the query-execution tool."""

    model_config = ConfigDict(extra="forbid", strict=True)

    query: str


@dataclass(frozen=True)
class ToolDefinition:
    """A tool as the model sees it."""

    name: str
    description: str
    parameters: dict[str, Any] | None = None
    strict: bool = False

    def to_openai_tool(self) -> dict[str, Any]:
        function: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "strict": self.strict,
        }
        if self.parameters is not None:
            function["parameters"] = self.parameters
        return {"type": "function", "function": function}


def get_schema_tool() -> ToolDefinition:
    """Zero-argument schema inspection tool."""
    return ToolDefinition(
        name=GET_SCHEMA_TOOL,
        description="Retrieve the database schema including node labels, relationship types, and properties.",
    )


def execute_query_tool() -> ToolDefinition:
    """Query execution tool taking exactly one required string, ``query``."""
    param = ObjectParam()
    param.add_required_property("query", StringParam("The Cypher query to execute"))
    return ToolDefinition(
        name=EXECUTE_QUERY_TOOL,
        description="Execute a Cypher query against the Neo4j database and return the results.",
        parameters=param.to_schema(),
        strict=True,
    )


class ToolRegistry:
    """Ordered collection of tool definitions."""

    def __init__(self, tools: list[ToolDefinition] | None = None):
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register(tool)

    @classmethod
    def default(cls) -> "ToolRegistry":
        """Registry holding the schema-inspection and query-execution tools."""
        return cls([get_schema_tool(), execute_query_tool()])

    def register(self, tool: ToolDefinition) -> None:
        """Register a tool. Re-registering a name replaces the previous definition."""
        self._tools[tool.name] = tool

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    def to_openai_tools(self) -> list[dict[str, Any]]:
        return [tool.to_openai_tool() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
