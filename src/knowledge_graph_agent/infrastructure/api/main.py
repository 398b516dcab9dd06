import logging
import platform
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

import psutil
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from knowledge_graph_agent.application.factories import HandlerFactory
from knowledge_graph_agent.application.services import QuestionHandler
from knowledge_graph_agent.config import settings
from knowledge_graph_agent.domain.exceptions import (
    ConfigurationError,
    KnowledgeGraphAgentError,
    ModelInvocationError,
    StoreError,
    ThreadNotFoundError,
    ToolArgumentError,
    ValidationError,
)
from knowledge_graph_agent.observability import setup_logging

from .models import (
    AskRequest,
    AskResponse,
    MessageView,
    ThreadMessagesResponse,
    ThreadResponse,
)

logger = logging.getLogger(__name__)

# Application version
API_VERSION = "0.1.0"

# Global service instances
_factory: HandlerFactory | None = None
_question_handler: QuestionHandler | None = None
_startup_time: datetime | None = None


async def get_question_handler() -> QuestionHandler:
    """Dependency injection for the question handler."""
    global _factory, _question_handler
    if _question_handler is None:
        _factory = HandlerFactory()
        _question_handler = _factory.create_question_handler()

    return _question_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events for the API."""
    global _startup_time, _factory, _question_handler

    setup_logging(settings.app.log_level, settings.app.log_file)
    _startup_time = datetime.now(UTC)
    logger.info("Knowledge Graph Agent API starting on %s:%s", settings.app.api_host, settings.app.api_port)
    logger.info("Environment: %s", settings.app.environment.value)

    yield

    if _factory is not None:
        await _factory.cleanup()
    _factory = None
    _question_handler = None
    logger.info("Knowledge Graph Agent API shutdown complete")


app = FastAPI(
    title="Knowledge Graph Agent API",
    description="Ask natural-language questions about a Neo4j graph",
    version=API_VERSION,
    docs_url="/docs",
    lifespan=lifespan,
)


# Middleware to track response times
@app.middleware("http")
async def track_response_time(request: Request, call_next):
    """Add the processing time header to every response."""
    start_time = time.time()
    response = await call_next(request)
    response.headers["X-Process-Time"] = str(time.time() - start_time)
    return response


def _error_response(status_code: int, exc: KnowledgeGraphAgentError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": exc.to_dict()})


@app.exception_handler(ThreadNotFoundError)
async def thread_not_found_exception_handler(request: Request, exc: ThreadNotFoundError):
    return _error_response(404, exc)


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return _error_response(400, exc)


@app.exception_handler(ToolArgumentError)
async def tool_argument_exception_handler(request: Request, exc: ToolArgumentError):
    return _error_response(400, exc)


@app.exception_handler(ModelInvocationError)
async def model_invocation_exception_handler(request: Request, exc: ModelInvocationError):
    logger.error("Model invocation failed: %s", exc.message)
    return _error_response(502, exc)


@app.exception_handler(StoreError)
async def store_exception_handler(request: Request, exc: StoreError):
    logger.error("Conversation store failure: %s", exc.message)
    return _error_response(503, exc)


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    logger.error("Configuration error: %s", exc.message)
    return _error_response(500, exc)


@app.exception_handler(KnowledgeGraphAgentError)
async def agent_exception_handler(request: Request, exc: KnowledgeGraphAgentError):
    logger.error("Unhandled agent error: %s", exc.message)
    return _error_response(500, exc)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Welcome to the Knowledge Graph Agent API",
        "version": API_VERSION,
        "environment": settings.app.environment.value,
        "documentation": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check() -> dict[str, Any]:
    """
    Health check endpoint.

    Does not require the graph connection or the chat model, so it is
    suitable for container health checks.
    """
    current_time = datetime.now(UTC)

    uptime_seconds = None
    if _startup_time:
        uptime_seconds = (current_time - _startup_time).total_seconds()

    system_status: dict[str, Any] = {}
    try:
        memory = psutil.virtual_memory()
        system_status = {
            "cpu": {
                "usage_percent": round(psutil.cpu_percent(interval=None), 2),
                "count": psutil.cpu_count(),
            },
            "memory": {
                "usage_percent": round(memory.percent, 2),
                "available_mb": round(memory.available / (1024 * 1024), 2),
            },
            "platform": {
                "system": platform.system(),
                "python_version": platform.python_version(),
            },
        }
    except (OSError, RuntimeError) as e:
        system_status = {"error": f"Unable to collect system metrics: {e}"}

    status = "healthy"
    if system_status.get("cpu", {}).get("usage_percent", 0) > 90:
        status = "degraded"
    elif system_status.get("memory", {}).get("usage_percent", 0) > 90:
        status = "degraded"

    return {
        "status": status,
        "timestamp": current_time.isoformat(),
        "uptime_seconds": uptime_seconds,
        "version": API_VERSION,
        "environment": settings.app.environment.value,
        "handler_initialized": _question_handler is not None,
        "system_status": system_status,
    }


@app.post("/ask", response_model=AskResponse)
async def ask(
    request: AskRequest,
    handler: QuestionHandler = Depends(get_question_handler),  # noqa: B008
) -> AskResponse:
    """Answer a question, creating a thread when none is given."""
    result = await handler.ask(request.question, request.thread_id)
    return AskResponse(answer=result.answer, trace=result.trace, thread_id=result.thread_id)


@app.post("/threads", response_model=ThreadResponse)
async def create_thread(
    handler: QuestionHandler = Depends(get_question_handler),  # noqa: B008
) -> ThreadResponse:
    """Create an empty thread."""
    return ThreadResponse(thread_id=await handler.create_thread())


@app.get("/threads/{thread_id}/messages", response_model=ThreadMessagesResponse)
async def get_thread_messages(
    thread_id: str,
    handler: QuestionHandler = Depends(get_question_handler),  # noqa: B008
) -> ThreadMessagesResponse:
    """Stored messages of a thread, oldest first."""
    messages = await handler.get_history(thread_id)
    return ThreadMessagesResponse(
        thread_id=thread_id,
        messages=[
            MessageView(role=message.role.value, content=message.content, timestamp=message.timestamp)
            for message in messages
        ],
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.app.api_host, port=settings.app.api_port)
