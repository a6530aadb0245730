"""
Fluent Bit HTTP log handler.

Delivers structured log records to a Fluent Bit HTTP input, synchronously or
from background threads, with attribute/group specialization of handlers.
"""

from .attrs import Attr, Group, attrs_from, group
from .exceptions import (
    ConfigurationError,
    DeliveryError,
    FluentBitHandlerError,
    FormatError,
    TransportError,
)
from .formatters import BufferFormatter, JSONFormatter, TextFormatter
from .handler import FluentBitHandler
from .options import HandlerOptions, current_options, options_context
from .record import CallerInfo, Record
from .transport import HTTPClient, default_http_client

__all__ = [
    "Attr",
    "Group",
    "attrs_from",
    "group",
    "Record",
    "CallerInfo",
    "FluentBitHandler",
    "HandlerOptions",
    "current_options",
    "options_context",
    "BufferFormatter",
    "JSONFormatter",
    "TextFormatter",
    "HTTPClient",
    "default_http_client",
    "FluentBitHandlerError",
    "ConfigurationError",
    "FormatError",
    "TransportError",
    "DeliveryError",
]
