"""
TaskScore Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_JUDGE_MODEL = "anthropic/claude-3.5-haiku"


class TaskScoreConfig(BaseSettings):
    """
    Configuration for the scoring pipeline.

    Reads from environment variables with TASKSCORE_ prefix. The judge API key
    is also picked up from OPENROUTER_API_KEY.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Judge Settings
    judge_provider: Literal["openrouter", "openai", "anthropic", "none"] = Field(
        default="openrouter",
        description="LLM provider backing the judge ('none' disables scoring)",
    )
    judge_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("TASKSCORE_JUDGE_API_KEY", "OPENROUTER_API_KEY"),
        description="API key for the judge provider; scoring is disabled when unset",
    )
    judge_model: str = Field(
        default=DEFAULT_JUDGE_MODEL,
        description="Model identifier sent to the judge provider",
    )
    judge_base_url: str | None = Field(
        default=None,
        description="Override for the provider endpoint (OpenRouter URL by default)",
    )
    judge_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Request timeout for the judge call (transport default when unset)",
    )
    judge_max_tokens: int = Field(
        default=1024,
        ge=1,
        description="Maximum completion tokens (Anthropic judge only)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the CLI",
    )

    @property
    def scoring_enabled(self) -> bool:
        """True when a judge can be built from this configuration."""
        return self.judge_provider != "none" and bool(self.judge_api_key)

    def resolved_base_url(self) -> str | None:
        """Endpoint for OpenAI-compatible providers."""
        if self.judge_base_url:
            return self.judge_base_url
        if self.judge_provider == "openrouter":
            return OPENROUTER_BASE_URL
        return None
