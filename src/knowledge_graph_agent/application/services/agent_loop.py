"""Bounded tool-calling loop between the chat model and the tool dispatcher."""

import logging
from collections.abc import Awaitable, Callable, Sequence

from knowledge_graph_agent.domain.exceptions import ValidationError
from knowledge_graph_agent.domain.interfaces import IChatModel
from knowledge_graph_agent.domain.models import (
    AgentResponse,
    AssistantMessage,
    ChatMessage,
    LoopStatus,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from knowledge_graph_agent.domain.tools.registry import ToolDefinition

logger = logging.getLogger(__name__)

ITERATION_LIMIT_RESPONSE = "Unable to generate response within iteration limit."
ITERATION_LIMIT_LOG = "Hit iteration limit without final response."

DispatchFn = Callable[[ToolCall], Awaitable[str]]
TraceCallback = Callable[[str], None]


def build_context(
    system_prompt: str,
    question: str,
    prior_messages: Sequence[UserMessage | AssistantMessage] = (),
    last_message: AssistantMessage | None = None,
    tool_messages: Sequence[ToolMessage] = (),
) -> list[ChatMessage]:
    """
    Assemble the request context for one model call.

    Order: system prompt, thread history, current question, then the previous
    iteration's assistant message and its tool results.
    """
    messages: list[ChatMessage] = [SystemMessage(system_prompt)]
    messages.extend(prior_messages)
    messages.append(UserMessage(question))
    if last_message is not None:
        messages.append(last_message)
    messages.extend(tool_messages)
    return messages


class AgentLoop:
    """Runs model → tools → model rounds until an answer or the iteration limit."""

    def __init__(self, model: IChatModel):
        self._model = model

    async def run(
        self,
        tools: Sequence[ToolDefinition],
        system_prompt: str,
        question: str,
        dispatch: DispatchFn,
        iteration_limit: int = 10,
        prior_messages: Sequence[UserMessage | AssistantMessage] = (),
        on_trace: TraceCallback | None = None,
    ) -> AgentResponse:
        """
        Answer one question, letting the model call tools along the way.

        Args:
            tools: Tools offered to the model on every call
            system_prompt: Fixed instructions sent first
            question: The user's question
            dispatch: Executes one tool call and returns its text result
            iteration_limit: Maximum number of tool-calling rounds
            prior_messages: Earlier turns of the thread, oldest first
            on_trace: Receives each trace line as soon as it is recorded

        Returns:
            AgentResponse with the final answer, or the fallback message when
            the limit is reached, plus the ordered trace
        """
        if iteration_limit < 1:
            raise ValidationError(f"iteration_limit must be at least 1, got {iteration_limit}")

        logs: list[str] = []

        def trace(line: str) -> None:
            logs.append(line)
            if on_trace is not None:
                on_trace(line)

        last_message: AssistantMessage | None = None
        tool_messages: list[ToolMessage] = []
        loops = 0

        while loops < iteration_limit:
            context = build_context(system_prompt, question, prior_messages, last_message, tool_messages)
            logger.debug("Iteration %d: sending %d message(s) to %s", loops + 1, len(context), self._model.model_name)

            message = await self._model.complete(context, tools)
            last_message = message

            if not message.has_tool_calls:
                return AgentResponse(
                    response=message.content or "",
                    logs=logs,
                    status=LoopStatus.ANSWERED,
                    iterations=loops + 1,
                )

            trace(f"Iteration {loops + 1}:")
            current_tool_messages: list[ToolMessage] = []
            for tool_call in message.tool_calls:
                trace(f"Calling tool: {tool_call.name} with args: {tool_call.arguments}")
                logger.info("Dispatching tool %s", tool_call.name)

                tool_response = await dispatch(tool_call)
                current_tool_messages.append(ToolMessage(tool_response, tool_call.id))

                trace(f"Tool response: {tool_response}")

            # Only the latest round of tool results is sent back.
            tool_messages = current_tool_messages
            loops += 1

        logger.warning("Iteration limit of %d reached without a final answer", iteration_limit)
        trace(ITERATION_LIMIT_LOG)
        return AgentResponse(
            response=ITERATION_LIMIT_RESPONSE,
            logs=logs,
            status=LoopStatus.ITERATION_LIMIT,
            iterations=loops,
        )
