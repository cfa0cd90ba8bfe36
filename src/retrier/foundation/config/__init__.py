"""Configuration: environment-driven settings via pydantic-settings."""

from .settings import (
    LoggingSettings,
    RetrierSettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "RetrierSettings",
    "LoggingSettings",
    "RetrySettings",
    "get_settings",
    "clear_settings_cache",
]
