"""
Handler options and their propagation through ``contextvars``.
"""

from __future__ import annotations

import contextvars
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .formatters import BufferFormatter, JSONFormatter
from .transport import HTTPClient, default_http_client

if TYPE_CHECKING:
    from .config.handler import HandlerSettings

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_LEVEL = logging.INFO

_current_options: contextvars.ContextVar[HandlerOptions | None] = contextvars.ContextVar(
    "fluentbit_handler_options", default=None
)

_default_options: HandlerOptions | None = None
_default_lock = threading.Lock()


@dataclass(frozen=True)
class HandlerOptions:
    """Options for :class:`~fluentbit_handler.handler.FluentBitHandler`.

    Attributes:
        url: URL of the Fluent Bit HTTP listener. Required.
        content_type: MIME type sent with each request. Defaults to
            ``application/json`` since the default formatter emits JSON.
        level: Minimum level to write, as a number or a level name.
            Defaults to ``logging.INFO``.
        enable_async: Post records from a background thread. Call
            ``shutdown()`` before exiting so pending records are written.
        http_client: Client used to post records. Defaults to an
            ``httpx.Client``.
        record_formatter: Formatter turning a record into the request body.
            Defaults to :class:`~fluentbit_handler.formatters.JSONFormatter`.
    """

    url: str = ""
    content_type: str = ""
    level: int | str | None = None
    enable_async: bool = False
    http_client: HTTPClient | None = None
    record_formatter: BufferFormatter | None = None

    @classmethod
    def default(cls) -> HandlerOptions:
        """Default option set. The URL is left empty."""
        return cls(
            content_type=DEFAULT_CONTENT_TYPE,
            level=DEFAULT_LEVEL,
            http_client=default_http_client(),
            record_formatter=JSONFormatter(),
        )

    @classmethod
    def from_settings(cls, settings: HandlerSettings) -> HandlerOptions:
        return cls(
            url=settings.url,
            content_type=settings.content_type,
            level=settings.level.value,
            enable_async=settings.enable_async,
            http_client=default_http_client(timeout=settings.timeout),
        )

    def with_defaults(self) -> HandlerOptions:
        """Return a copy with every unset field backfilled."""
        return replace(
            self,
            content_type=self.content_type or DEFAULT_CONTENT_TYPE,
            level=DEFAULT_LEVEL if self.level is None else self.level,
            http_client=self.http_client if self.http_client is not None else default_http_client(),
            record_formatter=self.record_formatter if self.record_formatter is not None else JSONFormatter(),
        )


def _shared_defaults() -> HandlerOptions:
    global _default_options
    with _default_lock:
        if _default_options is None:
            _default_options = HandlerOptions.default()
        return _default_options


def current_options() -> HandlerOptions:
    """Options bound to the current context, or the defaults if none are.

    The fallback defaults are built once and shared, so their HTTP client is
    reused across calls.
    """
    options = _current_options.get()
    if options is None:
        return _shared_defaults()
    return options


def bind_options(options: HandlerOptions) -> contextvars.Token[HandlerOptions | None]:
    """Bind ``options`` to the current context. Pair with ``reset_options``."""
    return _current_options.set(options)


def reset_options(token: contextvars.Token[HandlerOptions | None]) -> None:
    _current_options.reset(token)


@contextmanager
def options_context(options: HandlerOptions) -> Iterator[HandlerOptions]:
    """Bind ``options`` for the duration of a ``with`` block."""
    token = bind_options(options)
    try:
        yield options
    finally:
        reset_options(token)
