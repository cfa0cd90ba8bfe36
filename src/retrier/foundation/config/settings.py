"""Environment-based configuration using pydantic-settings.

Example:
    >>> from retrier.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.delay_unit
    0.001
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # RETRIER_RETRY_DELAY_UNIT=1.0     (delays in seconds instead of milliseconds)
    # RETRIER_LOG_LEVEL=DEBUG
    # RETRIER_LOG_FORMAT=json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors on/off (None = auto)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class RetrySettings(BaseSettings):
    """Retry timing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_RETRY_",
        extra="ignore",
    )

    delay_unit: PositiveFloat = Field(
        default=0.001,
        description="Seconds per policy delay unit (default: milliseconds)",
    )


class RetrierSettings(BaseSettings):
    """Root settings for retrier.

    Loads configuration from environment variables with RETRIER_ prefix.

    Example environment variables:
        RETRIER_LOG_LEVEL=DEBUG
        RETRIER_LOG_FORMAT=json
        RETRIER_RETRY_DELAY_UNIT=0.001
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)


@lru_cache(maxsize=1)
def get_settings() -> RetrierSettings:
    """Get the global settings instance (cached)."""
    return RetrierSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() reloads from environment."""
    get_settings.cache_clear()
