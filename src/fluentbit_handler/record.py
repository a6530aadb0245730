"""
Log record passed from a logging front-end to the handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .attrs import Attr, attrs_from


@dataclass(frozen=True, slots=True)
class CallerInfo:
    """Source location that produced a record."""

    pathname: str
    lineno: int
    function: str | None = None


@dataclass(frozen=True, slots=True)
class Record:
    """A single log event.

    ``level`` uses the stdlib :mod:`logging` scale (``logging.INFO`` is 20).
    """

    time: datetime
    level: int
    message: str
    attrs: tuple[Attr, ...] = ()
    caller: CallerInfo | None = None

    @classmethod
    def create(cls, level: int | str, message: str, *attrs: Attr, **values: Any) -> Record:
        """Create a record stamped with the current UTC time."""
        return cls(
            time=datetime.now(timezone.utc),
            level=parse_level(level),
            message=message,
            attrs=attrs_from(attrs) + attrs_from(values),
        )


def parse_level(level: int | str) -> int:
    """Convert a level name or number into a stdlib level number.

    Raises:
        ValueError: if ``level`` is a name the logging module does not know.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"unknown log level: {level!r}")
    return value


def level_name(level: int) -> str:
    """Name of a level, ``"LEVEL+N"`` for levels between the named ones."""
    name = logging.getLevelName(level)
    if not name.startswith("Level "):
        return name
    for base in (logging.CRITICAL, logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG):
        if level > base:
            return f"{logging.getLevelName(base)}+{level - base}"
    return f"DEBUG{level - logging.DEBUG:+d}"
