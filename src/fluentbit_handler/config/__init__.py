"""
Configuration Module.

Each sub-module represents an independent concern with its own environment
variable prefix:

    FLUENTBIT_      handler options (url, content_type, level, enable_async, timeout)
    FLUENTBIT_LOG_  structlog pipeline (level, sinks, format)

Usage:
    from fluentbit_handler.config import settings

    settings.handler.url
    settings.logging.sinks
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .handler import HandlerSettings, LogLevel
from .logging import LogFormat, LoggingSettings


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def handler(self) -> HandlerSettings:
        return HandlerSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "HandlerSettings",
    "LoggingSettings",
    "LogLevel",
    "LogFormat",
]
