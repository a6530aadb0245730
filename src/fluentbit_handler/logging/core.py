"""
Core logging configuration and initialization logic.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .sinks import BaseSink, FluentBitSink, LogFormat, StdioSink

if TYPE_CHECKING:
    from ..handler import FluentBitHandler

# =============================================================================
# Global State
# =============================================================================

_sinks: list[BaseSink] = []


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "root")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def multi_sink_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks. Returns empty to suppress default output."""
    for sink in _sinks:
        try:
            sink.emit(event_dict)
        except Exception:
            pass  # Fail silently to avoid breaking the application
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


def _initialize_sinks(sinks: str, fmt: str, handler: FluentBitHandler | None) -> None:
    """Initialize configured sinks based on input."""
    close_sinks()

    log_format: LogFormat = "json" if fmt.lower() == "json" else "console"

    sink_names = [s.strip().lower() for s in sinks.split(",") if s.strip()]
    for name in sink_names:
        if name == "stdio":
            _sinks.append(StdioSink(fmt=log_format, stream=sys.stdout))
        elif name == "fluentbit":
            if handler is None:
                from ..handler import FluentBitHandler

                handler = FluentBitHandler.from_settings()
            _sinks.append(FluentBitSink(handler))
        else:
            raise ValueError(f"unknown log sink: {name!r}")


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def _configure_structlog(level: str) -> None:
    """Configure structlog processors and factory."""
    shared_processors = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_logger_name,
        rename_event_key,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [multi_sink_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str | None = None,
    sinks: str | None = None,
    fmt: str | None = None,
    handler: FluentBitHandler | None = None,
) -> None:
    """
    Configure the structlog pipeline.

    Unset arguments fall back to ``settings.logging`` (``FLUENTBIT_LOG_*``).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        sinks: Comma-separated sink names (stdio, fluentbit)
        fmt: Output format for stdio sink (console, json)
        handler: Handler used by the fluentbit sink. Built from
            ``FLUENTBIT_*`` settings when omitted.
    """
    from ..config import settings

    level = level or settings.logging.level.value
    sinks = sinks or settings.logging.sinks
    fmt = fmt or settings.logging.format.value

    _initialize_sinks(sinks, fmt, handler)
    _configure_structlog(level)


def close_sinks() -> None:
    """Close and forget every configured sink.

    Sinks are detached before closing, so events logged while a sink drains
    do not reach it again.
    """
    sinks = list(_sinks)
    _sinks.clear()
    for sink in sinks:
        sink.close()


def shutdown_logging() -> None:
    """Drain pending records and reset structlog to its defaults."""
    close_sinks()
    structlog.reset_defaults()
