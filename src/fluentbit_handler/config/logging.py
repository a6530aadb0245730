"""
Logging Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .handler import LogLevel


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Structlog pipeline configuration. Prefix: FLUENTBIT_LOG_"""

    model_config = SettingsConfigDict(
        env_prefix="FLUENTBIT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    sinks: str = Field(default="stdio", description="Comma-separated sink names (stdio, fluentbit)")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format of the stdio sink")
