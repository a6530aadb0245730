"""
Handler options and context propagation.
"""

from __future__ import annotations

import logging

import httpx

from fluentbit_handler import HandlerOptions, JSONFormatter, current_options, options_context
from fluentbit_handler.config import HandlerSettings, LogLevel


class TestHandlerOptions:
    def test_default_option_set(self) -> None:
        options = HandlerOptions.default()
        assert options.url == ""
        assert options.content_type == "application/json"
        assert options.level == logging.INFO
        assert isinstance(options.http_client, httpx.Client)
        assert isinstance(options.record_formatter, JSONFormatter)

    def test_with_defaults_keeps_explicit_values(self) -> None:
        formatter = JSONFormatter(include_source=True)
        options = HandlerOptions(url="http://x", level=logging.ERROR, record_formatter=formatter).with_defaults()
        assert options.level == logging.ERROR
        assert options.record_formatter is formatter
        assert options.content_type == "application/json"

    def test_from_settings(self) -> None:
        settings = HandlerSettings(
            url="http://fluentbit:9880/app",
            content_type="text/plain",
            level=LogLevel.WARNING,
            enable_async=True,
            timeout=2.5,
        )
        options = HandlerOptions.from_settings(settings)
        assert options.url == "http://fluentbit:9880/app"
        assert options.content_type == "text/plain"
        assert options.level == "WARNING"
        assert options.enable_async is True
        assert options.http_client.timeout.read == 2.5


class TestContextPropagation:
    def test_falls_back_to_defaults(self) -> None:
        assert current_options().content_type == "application/json"

    def test_bound_options_are_visible_inside_block_only(self) -> None:
        options = HandlerOptions(url="http://x")
        with options_context(options) as bound:
            assert bound is options
            assert current_options() is options
        assert current_options() is not options

    def test_fallback_defaults_are_shared(self) -> None:
        first = current_options()
        second = current_options()
        assert first is second
        assert first.http_client is second.http_client
