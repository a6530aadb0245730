"""
Structlog integration.

Provides structured logging with multiple sink support:
- stdio: Standard output (console/json format)
- fluentbit: Forwards events to a FluentBitHandler

and a stdlib ``logging.Handler`` bridging ``logging`` records into a
FluentBitHandler.

Library: structlog + orjson.
"""

from .core import configure_logging, get_logger, shutdown_logging
from .interceptors import FluentBitLoggingHandler

__all__ = ["configure_logging", "get_logger", "shutdown_logging", "FluentBitLoggingHandler"]
