# python
# app/core/config.py
"""Configuration settings for the Chatbot Microservice.

Uses Pydantic BaseSettings for environment variable management.
"""
from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Provider request parameters are part of the service contract, not tunables.
COMPLETION_TEMPERATURE = 0.7
COMPLETION_MAX_TOKENS = 1000


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormatEnum(str, Enum):
    simple = "simple"
    json = "json"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Chatbot Microservice", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Database Settings =====
    database_url: str | None = Field(default=None, description="Database connection URL")
    test_database_url: str | None = Field(default=None, description="Test database URL")
    auto_create_tables: bool = Field(
        default=True, description="Create missing tables on startup"
    )

    # ===== Completion Provider (OpenRouter) =====
    openrouter_api_key: str | None = Field(default=None, description="OpenRouter API key")
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1", description="OpenRouter API base URL"
    )
    openrouter_model: str = Field(
        default="openai/gpt-3.5-turbo", description="Chat completion model identifier"
    )
    openrouter_http_referer: str = Field(
        default="http://localhost:3000", description="HTTP-Referer sent for provider analytics"
    )
    openrouter_app_title: str = Field(
        default="Chatbot Microservice", description="X-Title sent for provider analytics"
    )
    completion_timeout: float = Field(
        default=60.0, description="Outbound completion request timeout in seconds"
    )

    # Retries are opt-in; the default of 0 issues exactly one request.
    completion_max_retries: int = Field(
        default=0, ge=0, description="Extra attempts on retryable provider failures"
    )
    completion_retry_min_wait: float = Field(default=1.0, description="Minimum backoff seconds")
    completion_retry_max_wait: float = Field(default=10.0, description="Maximum backoff seconds")

    # ===== CORS Settings =====
    allowed_origins: str = Field(default="*", description="Allowed CORS origins (comma-separated)")

    @property
    def allowed_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")
    log_format: LogFormatEnum = Field(default=LogFormatEnum.simple, description="Log format")

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the server")
    port: int = Field(default=3000, description="Port to bind the server")

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def has_ai_enabled(self) -> bool:
        return bool(self.openrouter_api_key)

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
            if lv in ["test"]:
                return "testing"
            return lv
        return v

    @field_validator("openrouter_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


settings = Settings()


def get_config_summary() -> dict:
    return {
        "app_name": settings.app_name,
        "version": settings.version,
        "environment": settings.environment.value,
        "debug": settings.debug,
        "database_configured": bool(settings.database_url),
        "ai_enabled": settings.has_ai_enabled,
        "model": settings.openrouter_model,
        "completion_max_retries": settings.completion_max_retries,
    }


__all__ = [
    "settings",
    "Settings",
    "get_config_summary",
    "EnvironmentEnum",
    "LogLevelEnum",
    "LogFormatEnum",
    "COMPLETION_TEMPERATURE",
    "COMPLETION_MAX_TOKENS",
]
