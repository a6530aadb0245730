"""
Fluent Bit HTTP handler.

Posts log records to a Fluent Bit HTTP input. A handler can be specialized
with ``with_attrs``/``with_group``; both return a new handler and leave the
receiver untouched.

Example:
    handler = FluentBitHandler(HandlerOptions(url="http://localhost:9880/app"))
    request_handler = handler.with_group("request").with_attrs({"id": "abc"})
    request_handler.handle(Record.create("INFO", "served", status=200))
    # posts {"time": ..., "level": "INFO", "msg": "served",
    #        "request": {"id": "abc", "status": 200}}
"""

from __future__ import annotations

import contextvars
import threading
from collections.abc import Iterable, Mapping
from concurrent.futures import Future
from typing import Any

import httpx

from .attrs import Attr, Group, attrs_from
from .config.handler import HandlerSettings
from .consolidation import consolidate_attrs
from .exceptions import ConfigurationError, DeliveryError, TransportError
from .logging.core import get_logger
from .options import HandlerOptions, bind_options
from .record import Record, parse_level

logger = get_logger(__name__)


class FluentBitHandler:
    """Log handler that writes records to a Fluent Bit HTTP listener.

    When ``enable_async`` is set, :meth:`handle` returns immediately and the
    record is posted from a background thread. Failures of background posts
    are not raised from :meth:`handle`; they surface from :meth:`shutdown`.
    """

    def __init__(self, options: HandlerOptions) -> None:
        if not options.url:
            raise ConfigurationError(
                option="url", reason="URL is required and cannot be empty", code="MISSING_URL"
            )
        options = options.with_defaults()
        try:
            level = parse_level(options.level)
        except ValueError as exc:
            raise ConfigurationError(option="level", reason=str(exc), code="INVALID_LEVEL") from exc

        self._options = HandlerOptions(
            url=options.url,
            content_type=options.content_type,
            level=level,
            enable_async=options.enable_async,
            http_client=options.http_client,
            record_formatter=options.record_formatter,
        )
        self._level = level
        self._attrs: tuple[Attr, ...] = ()
        self._active_group = ""
        self._groups: tuple[str, ...] = ()
        self._futures: list[Future] = []
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: HandlerSettings | None = None) -> FluentBitHandler:
        """Create a handler configured from ``FLUENTBIT_*`` environment variables."""
        if settings is None:
            settings = HandlerSettings()
        return cls(HandlerOptions.from_settings(settings))

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def attrs(self) -> tuple[Attr, ...]:
        return self._attrs

    @property
    def active_group(self) -> str:
        return self._active_group

    @property
    def groups(self) -> tuple[str, ...]:
        return self._groups

    def enabled(self, level: int) -> bool:
        """Whether records at ``level`` are written by this handler."""
        return level >= self._level

    def handle(self, record: Record) -> None:
        """Post ``record`` to the HTTP listener.

        Any attributes duplicated between the handler and the record, including
        within groups, are removed; the last value found wins.
        """
        ctx = contextvars.copy_context()
        ctx.run(bind_options, self._options)
        if not self._options.enable_async:
            ctx.run(self._emit, record)
            return

        future: Future = Future()
        thread = threading.Thread(
            target=self._run_background,
            args=(future, ctx, record),
            name="fluentbit-handler",
            daemon=True,
        )
        with self._lock:
            self._futures.append(future)
        try:
            thread.start()
        except RuntimeError as exc:
            # Surfaces from shutdown() like any other background failure.
            future.set_exception(exc)

    def shutdown(self, continue_on_error: bool = False) -> None:
        """Wait for every background post started by this handler.

        All pending posts are waited on, in the order they were started. If
        any failed, the first failure is raised unless ``continue_on_error``
        is set, in which case failures are only logged.
        """
        with self._lock:
            futures, self._futures = self._futures, []

        errors = []
        for future in futures:
            exc = future.exception()
            if exc is not None:
                errors.append(exc)

        if not errors:
            return
        if not continue_on_error:
            raise errors[0]
        for exc in errors:
            logger.warning("async_dispatch_failed", url=self._options.url, error=str(exc))

    def with_attrs(self, attrs: Mapping[str, Any] | Iterable[Attr]) -> FluentBitHandler:
        """Create a new handler with ``attrs`` added to every record."""
        new_attrs = attrs_from(attrs)
        if not new_attrs:
            return self
        if self._active_group:
            added = (Attr(self._active_group, Group(new_attrs)),)
        else:
            added = new_attrs
        return self._derive(attrs=self._attrs + added)

    def with_group(self, name: str) -> FluentBitHandler:
        """Create a new handler whose subsequent attributes are nested in ``name``."""
        if not name:
            return self._derive()
        return self._derive(groups=self._groups + (name,), active_group=name)

    def _derive(
        self,
        *,
        attrs: tuple[Attr, ...] | None = None,
        groups: tuple[str, ...] | None = None,
        active_group: str | None = None,
    ) -> FluentBitHandler:
        child = object.__new__(type(self))
        child._options = self._options
        child._level = self._level
        child._attrs = self._attrs if attrs is None else attrs
        child._groups = self._groups if groups is None else groups
        child._active_group = self._active_group if active_group is None else active_group
        child._futures = []
        child._lock = threading.Lock()
        return child

    def _run_background(self, future: Future, ctx: contextvars.Context, record: Record) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            ctx.run(self._emit, record)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(None)

    def _emit(self, record: Record) -> None:
        options = self._options
        attrs = consolidate_attrs(self._attrs, self._active_group, record)

        buf = options.record_formatter.format_record(
            record.time,
            record.level,
            record.caller,
            record.message,
            attrs,
            options=options,
        )

        try:
            response = options.http_client.post(
                options.url,
                content=buf,
                headers={"Content-Type": options.content_type},
            )
        except httpx.HTTPError as exc:
            raise TransportError(url=options.url, reason=str(exc)) from exc

        if response.status_code >= 400:
            raise DeliveryError(url=options.url, status_code=response.status_code)
