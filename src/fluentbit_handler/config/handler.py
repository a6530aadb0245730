"""
Handler Configuration.
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class HandlerSettings(BaseSettings):
    """Fluent Bit handler configuration. Prefix: FLUENTBIT_"""

    model_config = SettingsConfigDict(
        env_prefix="FLUENTBIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    url: str = Field(default="", description="URL of the Fluent Bit HTTP listener")
    content_type: str = Field(default="application/json", description="Content-Type header sent with each record")
    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum level written to the listener")
    enable_async: bool = Field(default=False, description="Post records from background threads")
    timeout: float = Field(default=5.0, gt=0, description="HTTP timeout in seconds for the default client")
