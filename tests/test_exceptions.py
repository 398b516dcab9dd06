"""Unit tests for domain exceptions."""

from knowledge_graph_agent.domain.exceptions import (
    ConfigurationError,
    KnowledgeGraphAgentError,
    ModelInvocationError,
    StoreError,
    ThreadNotFoundError,
    ToolArgumentError,
    ToolError,
    ValidationError,
)


class TestExceptions:
    """Test cases for domain exceptions."""

    def test_base_error(self):
        """Test base KnowledgeGraphAgentError."""
        error = KnowledgeGraphAgentError("Base error")
        assert str(error) == "Base error"
        assert error.details == {}
        assert isinstance(error, Exception)

    def test_configuration_and_validation_errors(self):
        assert isinstance(ConfigurationError("Config issue"), KnowledgeGraphAgentError)
        assert isinstance(ValidationError("Bad input"), KnowledgeGraphAgentError)

    def test_store_error_records_operation(self):
        """Test StoreError with operation details."""
        error = StoreError("write failed", operation="append_turn")

        assert error.operation == "append_turn"
        assert error.details["operation"] == "append_turn"

    def test_thread_not_found_is_store_error(self):
        """Test ThreadNotFoundError."""
        error = ThreadNotFoundError("abc")

        assert isinstance(error, StoreError)
        assert str(error) == "Thread 'abc' not found"
        assert error.thread_id == "abc"
        assert error.error_code == "THREAD_NOT_FOUND"

    def test_tool_argument_error(self):
        """Test ToolArgumentError carries the tool and raw payload."""
        error = ToolArgumentError("query: Field required", tool_name="execute_query", raw_arguments="{}")

        assert isinstance(error, ToolError)
        assert error.tool_name == "execute_query"
        assert error.details == {"tool_name": "execute_query", "raw_arguments": "{}"}
        assert error.error_code == "INVALID_TOOL_ARGUMENTS"

    def test_model_invocation_error(self):
        error = ModelInvocationError("no choices", model_name="gpt-4o")
        assert error.details["model_name"] == "gpt-4o"

    def test_to_dict(self):
        """Test exception serialization."""
        error = StoreError("write failed", operation="create_thread", error_code="STORE_001")
        data = error.to_dict()

        assert data["error_type"] == "StoreError"
        assert data["message"] == "write failed"
        assert data["error_code"] == "STORE_001"
        assert data["details"] == {"operation": "create_thread"}
        assert isinstance(data["timestamp"], float)
