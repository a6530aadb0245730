"""
Bridge from the standard library ``logging`` module.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ..attrs import attrs_from
from ..record import CallerInfo, Record

if TYPE_CHECKING:
    from ..handler import FluentBitHandler

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class FluentBitLoggingHandler(logging.Handler):
    """
    Send standard library logging records to a FluentBitHandler.

    Fields passed through ``extra`` become record attributes and the logger
    name is added as ``logger``. Records below the handler's level are
    dropped before any formatting happens.

    Example:
        fb = FluentBitHandler(HandlerOptions(url="http://localhost:9880/app"))
        logging.getLogger().addHandler(FluentBitLoggingHandler(fb))
        logging.getLogger("orders").info("created", extra={"order_id": 7})
    """

    def __init__(self, handler: FluentBitHandler, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.handler = handler

    def emit(self, record: logging.LogRecord) -> None:
        if not self.handler.enabled(record.levelno):
            return
        try:
            self.handler.handle(self.to_record(record))
        except Exception:
            self.handleError(record)

    @staticmethod
    def to_record(record: logging.LogRecord) -> Record:
        extras = {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS and not k.startswith("_")}
        extras["logger"] = record.name
        if record.exc_info:
            extras["exception"] = logging.Formatter().formatException(record.exc_info)
        return Record(
            time=datetime.fromtimestamp(record.created, tz=timezone.utc),
            level=record.levelno,
            message=record.getMessage(),
            attrs=attrs_from(extras),
            caller=CallerInfo(pathname=record.pathname, lineno=record.lineno, function=record.funcName),
        )

    def close(self) -> None:
        try:
            self.handler.shutdown(continue_on_error=True)
        finally:
            super().close()
