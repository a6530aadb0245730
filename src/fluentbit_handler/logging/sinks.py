"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Literal

from structlog.typing import EventDict

from ..attrs import attrs_from
from ..formatters import orjson_dumps
from ..record import Record, parse_level
from .formatters import ConsoleFormatter

if TYPE_CHECKING:
    from ..handler import FluentBitHandler

LogFormat = Literal["console", "json"]

_RESERVED_KEYS = {"level", "message", "event", "timestamp"}


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (colored human-readable) or "json"
        stream: Output stream (default: stderr)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream or sys.stderr

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict, default=str).decode()
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)

        self._stream.write(output + "\n")
        self._stream.flush()

    def close(self) -> None:
        pass


class FluentBitSink(BaseSink):
    """Forwards structlog events to a :class:`FluentBitHandler`.

    ``level``, ``message`` and ``timestamp`` become the record's level,
    message and time; every other key becomes an attribute. Closing the sink
    drains the handler's background posts.
    """

    def __init__(self, handler: FluentBitHandler):
        self._handler = handler

    @property
    def handler(self) -> FluentBitHandler:
        return self._handler

    @staticmethod
    def to_record(event_dict: EventDict) -> Record:
        level = parse_level(str(event_dict.get("level", "info")))
        message = event_dict.get("message", event_dict.get("event", ""))
        timestamp = event_dict.get("timestamp")
        try:
            time = datetime.fromisoformat(str(timestamp).replace("Z", "+00:00")) if timestamp else None
        except ValueError:
            time = None
        extras = {k: v for k, v in event_dict.items() if k not in _RESERVED_KEYS}
        return Record(
            time=time or datetime.now(timezone.utc),
            level=level,
            message=str(message),
            attrs=attrs_from(extras),
        )

    def emit(self, event_dict: EventDict) -> None:
        record = self.to_record(event_dict)
        if self._handler.enabled(record.level):
            self._handler.handle(record)

    def close(self) -> None:
        self._handler.shutdown(continue_on_error=True)
