"""Configuration management using pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Anthropic / Pydantic AI
    anthropic_api_key: str = Field(
        default="",
        description="Anthropic API key for Claude",
    )

    # LLM Settings
    llm_model: str = Field(
        default="claude-sonnet-4-5",
        description="Default model for prompt flows and the catalog agent",
    )
    llm_vision_model: str = Field(
        default="",
        description="Model used for image analysis (falls back to llm_model when empty)",
    )
    llm_max_tokens: int = Field(
        default=1024,
        description="Max tokens for LLM responses",
    )
    llm_temperature: float = Field(
        default=0.3,
        description="LLM temperature",
    )

    # Shopify Admin API. Missing values are reported on first catalog use.
    shopify_shop_domain: str = Field(
        default="",
        description="Shopify store domain (e.g. my-shop.myshopify.com)",
    )
    shopify_admin_access_token: str = Field(
        default="",
        description="Shopify Admin API access token",
    )
    shopify_api_version: str = Field(
        default="2024-07",
        description="Shopify Admin GraphQL API version",
    )
    shopify_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for Shopify Admin API calls",
    )

    # Conversation
    session_welcome_enabled: bool = Field(
        default=True,
        description="Seed new sessions with the welcome message",
    )
    max_suggested_steps: int = Field(
        default=4,
        description="Maximum number of next-step suggestions shown to the admin",
    )
    max_sessions: int = Field(
        default=1000,
        ge=1,
        description="Sessions kept in memory; the oldest is evicted beyond this",
    )

    # API Settings
    api_title: str = Field(
        default="Store Admin Assistant",
        description="API title",
    )
    api_version: str = Field(
        default="0.1.0",
        description="API version",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins for the chat front-end",
    )

    # Observability
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=True,
        description="Enable JSON structured logging",
    )
    service_name: str = Field(
        default="admin-assistant",
        description="Service name for telemetry",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
