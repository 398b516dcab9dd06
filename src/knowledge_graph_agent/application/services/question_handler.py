"""Entry point that answers a question within a persisted thread."""

import logging

from knowledge_graph_agent.application.services.agent_loop import AgentLoop, TraceCallback
from knowledge_graph_agent.application.services.tool_dispatcher import ToolDispatcher
from knowledge_graph_agent.domain.exceptions import ThreadNotFoundError, ValidationError
from knowledge_graph_agent.domain.interfaces import IChatModel, IConversationStore
from knowledge_graph_agent.domain.models import AgentConfig, AskResult, ThreadMessage
from knowledge_graph_agent.domain.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class QuestionHandler:
    """Resolves the thread, runs the agent loop and records the turn."""

    def __init__(
        self,
        config: AgentConfig,
        model: IChatModel,
        store: IConversationStore,
        dispatcher: ToolDispatcher,
        registry: ToolRegistry | None = None,
    ):
        self._config = config
        self._store = store
        self._dispatcher = dispatcher
        self._registry = registry or ToolRegistry.default()
        self._loop = AgentLoop(model)

    @property
    def config(self) -> AgentConfig:
        """Get the handler's configuration."""
        return self._config

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def ask(
        self,
        question: str,
        thread_id: str | None = None,
        on_trace: TraceCallback | None = None,
    ) -> AskResult:
        """
        Answer a question, creating a thread when none is given.

        Args:
            question: The user's question
            thread_id: Existing thread to continue
            on_trace: Receives each trace line as the loop records it

        Returns:
            AskResult with the answer, the loop trace and the thread id

        Raises:
            ValidationError: If the question is empty
            ThreadNotFoundError: If thread validation is enabled and the thread is unknown
            StoreError: If the thread cannot be created, read or written
            ModelInvocationError: If the chat model fails
        """
        if not question or not question.strip():
            raise ValidationError("Question must not be empty")

        if thread_id is None:
            thread_id = await self._store.create_thread()
        elif self._config.validate_thread_ids and not await self._store.thread_exists(thread_id):
            raise ThreadNotFoundError(thread_id)

        previous_messages = await self._store.load_history(thread_id)
        logger.info("Answering question in thread %s (%d prior message(s))", thread_id, len(previous_messages))

        response = await self._loop.run(
            tools=self._registry.definitions(),
            system_prompt=self._config.system_prompt,
            question=question,
            dispatch=self._dispatcher.dispatch,
            iteration_limit=self._config.iteration_limit,
            prior_messages=previous_messages,
            on_trace=on_trace,
        )

        await self._store.append_turn(thread_id, question, response.response)

        return AskResult(answer=response.response, trace=response.logs, thread_id=thread_id)

    async def create_thread(self) -> str:
        """Start a new, empty thread."""
        return await self._store.create_thread()

    async def get_history(self, thread_id: str) -> list[ThreadMessage]:
        """Stored messages of a thread, oldest first."""
        if self._config.validate_thread_ids and not await self._store.thread_exists(thread_id):
            raise ThreadNotFoundError(thread_id)
        return await self._store.get_thread_messages(thread_id)
