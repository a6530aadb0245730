"""
Console rendering for the stdio sink.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict

_RESET = "\x1b[0m"

COLORS = {
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "CRITICAL": "\x1b[1;31m",
    "timestamp": "\x1b[90m",
    "logger": "\x1b[35m",
    "key": "\x1b[34m",
    "value": "\x1b[2m",
}


def colorize(text: str, color: str, use_color: bool = True) -> str:
    """Apply ANSI color to text."""
    if not use_color or color not in COLORS:
        return text
    return f"{COLORS[color]}{text}{_RESET}"


class ConsoleFormatter:
    """Renders an event dict as one aligned, optionally colored line."""

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 32
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if len(text) > width > 3:
            text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "root"))

        extras = [
            f"{colorize(k, 'key', use_color)}={colorize(str(v), 'value', use_color)}"
            for k, v in event_dict.items()
            if k not in cls.EXCLUDED_KEYS
        ]
        if extras:
            message = f"{message} " + " ".join(extras)

        timestamp = cls._format_timestamp(event_dict.get("timestamp"))
        return cls.SEPARATOR.join(
            [
                colorize(cls._fit_right(timestamp, cls.TIMESTAMP_WIDTH), "timestamp", use_color),
                colorize(cls._fit_right(level, cls.LEVEL_WIDTH), level, use_color),
                colorize(cls._fit_right(logger_name, cls.LOGGER_WIDTH), "logger", use_color),
                message,
            ]
        )
