"""
Record formatters.

A formatter turns a consolidated record into the bytes posted to the
listener. Formatters must be safe to call from several threads at once.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import orjson

from .exceptions import FormatError
from .record import CallerInfo, level_name

if TYPE_CHECKING:
    from .options import HandlerOptions


@runtime_checkable
class BufferFormatter(Protocol):
    """Formatter contract consumed by the handler."""

    def format_record(
        self,
        time: datetime,
        level: int,
        caller: CallerInfo | None,
        message: str,
        attrs: Mapping[str, Any],
        *,
        options: HandlerOptions | None = None,
    ) -> bytes: ...


def orjson_dumps(v: Any, *, default: Any = None) -> bytes:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC)


class JSONFormatter:
    """Formats a record as a single JSON object.

    Output keys are ``time``, ``level``, ``msg``, ``source`` (when caller
    information is enabled and present), followed by the attribute tree.
    The record's own fields win: a top-level attribute whose key matches one
    of them is dropped. Values orjson cannot serialize natively fall back to
    ``str()``.
    """

    def __init__(
        self,
        *,
        time_key: str = "time",
        level_key: str = "level",
        message_key: str = "msg",
        source_key: str = "source",
        include_source: bool = False,
    ) -> None:
        self.time_key = time_key
        self.level_key = level_key
        self.message_key = message_key
        self.source_key = source_key
        self.include_source = include_source

    def format_record(
        self,
        time: datetime,
        level: int,
        caller: CallerInfo | None,
        message: str,
        attrs: Mapping[str, Any],
        *,
        options: HandlerOptions | None = None,
    ) -> bytes:
        payload: dict[str, Any] = {
            self.time_key: time,
            self.level_key: level_name(level),
            self.message_key: message,
        }
        if self.include_source and caller is not None:
            payload[self.source_key] = {
                "file": caller.pathname,
                "line": caller.lineno,
                "function": caller.function,
            }
        for key, value in attrs.items():
            payload.setdefault(key, value)
        try:
            return orjson_dumps(payload, default=str)
        except orjson.JSONEncodeError as exc:
            raise FormatError(formatter=type(self).__name__, reason=str(exc)) from exc


class TextFormatter:
    """Formats a record as one aligned text line.

    Nested attributes are flattened to dotted keys:
    ``2024-05-01T10:00:00+00:00 |     INFO | request served http.status=200``
    """

    LEVEL_WIDTH = 8
    SEPARATOR = " | "

    def __init__(self, *, level_width: int | None = None, separator: str | None = None) -> None:
        self.level_width = level_width or self.LEVEL_WIDTH
        self.separator = self.SEPARATOR if separator is None else separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            if width <= 3:
                text = text[-width:]
            else:
                text = "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _flatten(cls, attrs: Mapping[str, Any], prefix: str = "") -> list[str]:
        pairs = []
        for key, value in attrs.items():
            name = f"{prefix}{key}"
            if isinstance(value, Mapping):
                pairs.extend(cls._flatten(value, f"{name}."))
            else:
                pairs.append(f"{name}={value}")
        return pairs

    def format_record(
        self,
        time: datetime,
        level: int,
        caller: CallerInfo | None,
        message: str,
        attrs: Mapping[str, Any],
        *,
        options: HandlerOptions | None = None,
    ) -> bytes:
        text = message
        extras = self._flatten(attrs)
        if extras:
            text = f"{text} " + " ".join(extras)
        line = self.separator.join(
            [time.isoformat(), self._fit_right(level_name(level), self.level_width), text]
        )
        try:
            return (line + "\n").encode("utf-8")
        except UnicodeEncodeError as exc:
            raise FormatError(formatter=type(self).__name__, reason=str(exc)) from exc
