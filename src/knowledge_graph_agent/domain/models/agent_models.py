"""Domain models for the agent loop and question handling."""

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..prompts.neo4j_prompt import NEO4J_QUERY_PROMPT

if TYPE_CHECKING:
    from knowledge_graph_agent.config import Settings


class LoopStatus(Enum):
    """How an agent loop run ended."""

    ANSWERED = "answered"
    ITERATION_LIMIT = "iteration_limit"


class AgentConfig(BaseModel):
    """Explicit configuration handed to a question handler at construction."""

    model_config = ConfigDict(use_enum_values=True, frozen=True)

    model_name: str = "gpt-4o"
    database: str = "neo4j"
    system_prompt: str = NEO4J_QUERY_PROMPT
    iteration_limit: int = Field(default=10, ge=1)
    validate_thread_ids: bool = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "AgentConfig":
        """Build an agent configuration from environment-backed settings."""
        return cls(
            model_name=settings.model.model_name,
            database=settings.neo4j.database,
            system_prompt=settings.agent.system_prompt or NEO4J_QUERY_PROMPT,
            iteration_limit=settings.agent.iteration_limit,
            validate_thread_ids=settings.agent.validate_thread_ids,
        )


class AgentResponse(BaseModel):
    """Final answer of one agent loop run plus its trace."""

    model_config = ConfigDict(use_enum_values=True)

    response: str
    logs: list[str] = Field(default_factory=list)
    status: LoopStatus = Field(default=LoopStatus.ANSWERED, validate_default=True)
    iterations: int = 0


class AskResult(BaseModel):
    """What a question handler returns to its caller."""

    answer: str
    trace: list[str] = Field(default_factory=list)
    thread_id: str
