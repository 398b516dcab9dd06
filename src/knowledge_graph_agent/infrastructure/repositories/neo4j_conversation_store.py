"""Neo4j-backed conversation store.

Threads are ``(:Thread {id, created})`` nodes and each message is a
``(:Message {role, content, datetime, position})`` node linked from its thread
by ``HAS_MESSAGE``.
"""

import logging
from datetime import datetime
from typing import Any

from knowledge_graph_agent.domain.exceptions import StoreError
from knowledge_graph_agent.domain.interfaces import IConversationStore, IGraphClient
from knowledge_graph_agent.domain.models.conversation_models import ThreadMessage
from knowledge_graph_agent.domain.models.message_models import AssistantMessage, MessageRole, UserMessage

logger = logging.getLogger(__name__)

CREATE_THREAD_QUERY = """
CREATE (t:Thread {created: datetime(), id: randomUUID()})
RETURN t.id AS thread_id
"""

THREAD_EXISTS_QUERY = """
MATCH (t:Thread {id: $thread_id})
RETURN count(t) > 0 AS exists
"""

THREAD_MESSAGES_QUERY = """
MATCH (t:Thread)-[:HAS_MESSAGE]->(m:Message)
WHERE t.id = $thread_id
RETURN m.role AS role, m.content AS content, m.datetime AS datetime
ORDER BY m.datetime, m.position
"""

# Both messages share the statement timestamp; position keeps the pair ordered.
APPEND_TURN_QUERY = """
MATCH (t:Thread)
WHERE t.id = $thread_id
CREATE (t)-[:HAS_MESSAGE]->(um:Message {role: 'user', content: $question, datetime: datetime(), position: 0}),
       (t)-[:HAS_MESSAGE]->(am:Message {role: 'assistant', content: $answer, datetime: datetime(), position: 1})
RETURN t.id AS thread_id
"""


def _to_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if hasattr(value, "to_native"):
        return value.to_native()
    return None


class Neo4jConversationStore(IConversationStore):
    """Conversation store persisting threads in the same graph it answers questions about."""

    def __init__(self, graph_client: IGraphClient):
        self._graph = graph_client

    async def create_thread(self) -> str:
        """Create a thread node and return its server-generated identifier."""
        result = await self._graph.execute_query(CREATE_THREAD_QUERY)
        if result is None or result.is_empty:
            raise StoreError("Failed to create thread", operation="create_thread")

        thread_id = str(result.records[0].values[0])
        logger.info("Created thread %s", thread_id)
        return thread_id

    async def thread_exists(self, thread_id: str) -> bool:
        """Check whether a thread with this identifier exists."""
        result = await self._graph.execute_query(THREAD_EXISTS_QUERY, {"thread_id": thread_id})
        if result is None:
            raise StoreError(f"Failed to look up thread '{thread_id}'", operation="thread_exists")
        return bool(result.records and result.records[0].get("exists"))

    async def get_thread_messages(self, thread_id: str) -> list[ThreadMessage]:
        """Load the stored messages of a thread, oldest first."""
        result = await self._graph.execute_query(THREAD_MESSAGES_QUERY, {"thread_id": thread_id})
        if result is None:
            raise StoreError(f"Failed to load messages for thread '{thread_id}'", operation="load_history")

        messages = []
        for record in result:
            role = MessageRole.USER if str(record.get("role")) == MessageRole.USER.value else MessageRole.ASSISTANT
            messages.append(
                ThreadMessage(
                    role=role,
                    content=str(record.get("content", "")),
                    timestamp=_to_datetime(record.get("datetime")),
                )
            )
        return messages

    async def load_history(self, thread_id: str) -> list[UserMessage | AssistantMessage]:
        """
        Load a thread's history as replayable chat messages.

        Unknown or empty threads yield an empty list rather than an error.
        """
        messages = await self.get_thread_messages(thread_id)
        logger.debug("Loaded %d message(s) for thread %s", len(messages), thread_id)
        return [message.to_chat_message() for message in messages]

    async def append_turn(self, thread_id: str, question: str, answer: str) -> None:
        """Persist the user question and assistant answer in a single query."""
        result = await self._graph.execute_query(
            APPEND_TURN_QUERY,
            {"thread_id": thread_id, "question": question, "answer": answer},
        )
        if result is None:
            raise StoreError(f"Failed to save turn for thread '{thread_id}'", operation="append_turn")

        if result.is_empty:
            logger.warning("Thread %s did not match any node; turn was not recorded", thread_id)
        else:
            logger.debug("Saved turn for thread %s", thread_id)
