"""Configuration settings for the agent core."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pydantic settings class for the agent core."""

    # Define the settings with default values and types
    # These will be loaded from environment variables or a .env file if not provided
    API_PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"  # Options: debug, info, warning, error, critical

    # Model routing
    MODEL_OVERRIDE_PREFIX: str = "Q8"  # Q8_CODER_MODEL, Q8_ROUTER_MODEL, ...
    OPENAI_API_KEY: str | None = None
    ANTHROPIC_API_KEY: str | None = None
    GOOGLE_GENERATIVE_AI_KEY: str | None = None
    PERPLEXITY_API_KEY: str | None = None
    XAI_API_KEY: str | None = None

    # Tool execution
    DEFAULT_TOOL_TIMEOUT_MS: int = 10000
    CANCEL_TIMED_OUT_TOOLS: bool = True

    # Tool servers (POST <url>/execute)
    GITHUB_MCP_URL: str = "http://localhost:3001"
    GOOGLE_MCP_URL: str = "http://localhost:3002"
    SUPABASE_MCP_URL: str = "http://localhost:3003"
    HOME_ASSISTANT_MCP_URL: str = "http://localhost:3004"
    SPOTIFY_MCP_URL: str = "http://localhost:3005"
    MCP_REQUEST_TIMEOUT: float = 30.0  # seconds

    class Config:
        """Configuration for Pydantic settings."""

        # Load environment variables from a .env file
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
