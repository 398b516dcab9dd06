"""Configuration management with proper validation and environment handling."""

from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Neo4jConfig(BaseSettings):
    """Neo4j connection configuration."""

    model_config = SettingsConfigDict(env_prefix="NEO4J_", env_file=".env", extra="ignore")

    uri: str = Field(default="neo4j://localhost:7687", description="Bolt/Neo4j URI of the graph server")
    username: str = Field(default="neo4j", description="Neo4j user name")
    password: str | None = Field(default=None, description="Neo4j password")
    database: str = Field(default="neo4j", description="Target database for every query")
    connection_timeout: float = Field(default=30.0, description="Connection timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Check if Neo4j credentials are present."""
        return bool(self.uri and self.password)


class ModelConfig(BaseSettings):
    """Chat model configuration (OpenAI or Azure OpenAI)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    api_key: str | None = Field(default=None, alias="OPENAI_API_KEY", description="OpenAI API key")
    base_url: str | None = Field(
        default=None,
        alias="OPENAI_BASE_URL",
        description="OpenAI-compatible base URL",
    )
    azure_endpoint: str | None = Field(
        default=None,
        alias="AZURE_OPENAI_ENDPOINT",
        description="Azure OpenAI endpoint URL",
    )
    azure_api_key: str | None = Field(
        default=None,
        alias="AZURE_OPENAI_API_KEY",
        description="Azure OpenAI API key",
    )
    api_version: str = Field(
        default="2024-06-01",
        alias="AZURE_OPENAI_API_VERSION",
        description="Azure OpenAI API version",
    )
    model_name: str = Field(
        default="gpt-4o",
        alias="MODEL_NAME",
        description="Model name, or deployment name on Azure",
    )
    request_timeout: float = Field(
        default=60.0,
        alias="MODEL_REQUEST_TIMEOUT",
        description="Chat completion request timeout in seconds",
    )

    @property
    def is_azure(self) -> bool:
        """Check if requests should go to Azure OpenAI."""
        return self.azure_endpoint is not None

    @property
    def is_configured(self) -> bool:
        """Check if the chat model has credentials."""
        if self.is_azure:
            return self.azure_api_key is not None
        return self.api_key is not None

    @field_validator("azure_endpoint")
    @classmethod
    def validate_endpoint(cls, v: str | None) -> str | None:
        """Ensure endpoint ends with /."""
        if v:
            return v if v.endswith("/") else v + "/"
        return v


class AgentLoopConfig(BaseSettings):
    """Agent loop and question handling configuration."""

    model_config = SettingsConfigDict(env_prefix="AGENT_", env_file=".env", extra="ignore")

    iteration_limit: int = Field(default=10, ge=1, description="Maximum model round-trips per question")
    validate_thread_ids: bool = Field(
        default=False,
        description="Reject caller-supplied thread ids that do not exist",
    )
    system_prompt: str | None = Field(default=None, description="Override for the default system prompt")


class ApplicationConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Application environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path")

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v: str) -> Environment:
        """Parse environment from string."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


class Settings:
    """Centralized settings management."""

    def __init__(self):
        self._app: ApplicationConfig | None = None
        self._neo4j: Neo4jConfig | None = None
        self._model: ModelConfig | None = None
        self._agent: AgentLoopConfig | None = None

    @property
    def app(self) -> ApplicationConfig:
        """Get application configuration."""
        if self._app is None:
            self._app = ApplicationConfig()
        return self._app

    @property
    def neo4j(self) -> Neo4jConfig:
        """Get Neo4j configuration."""
        if self._neo4j is None:
            self._neo4j = Neo4jConfig()
        return self._neo4j

    @property
    def model(self) -> ModelConfig:
        """Get chat model configuration."""
        if self._model is None:
            self._model = ModelConfig()
        return self._model

    @property
    def agent(self) -> AgentLoopConfig:
        """Get agent loop configuration."""
        if self._agent is None:
            self._agent = AgentLoopConfig()
        return self._agent

    def reload(self) -> None:
        """Reload all configurations."""
        self._app = None
        self._neo4j = None
        self._model = None
        self._agent = None


# Global settings instance
settings = Settings()
