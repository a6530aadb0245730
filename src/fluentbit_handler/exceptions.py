"""
Exception hierarchy for the Fluent Bit handler.

Errors are split by the stage that produced them: construction
(configuration), formatting, transport and delivery. Every error carries a
machine-readable ``code`` and a ``details`` dict so callers can branch on
them without parsing messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FluentBitHandlerError(Exception):
    """Root of all handler errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(FluentBitHandlerError):
    """Handler options are missing or invalid.

    Raised only while constructing a handler.
    """

    def __init__(self, *, option: str, reason: str, code: str = "INVALID_OPTION") -> None:
        message = f"Invalid handler option '{option}': {reason}"
        super().__init__(message, code=code, details={"option": option, "reason": reason})


class FormatError(FluentBitHandlerError):
    """The record formatter could not produce a buffer."""

    def __init__(self, *, formatter: str, reason: str) -> None:
        message = f"Formatter {formatter} failed: {reason}"
        details = {"formatter": formatter, "reason": reason}
        super().__init__(message, code="FORMAT_FAILED", details=details)


class TransportError(FluentBitHandlerError):
    """The HTTP request could not be completed."""

    def __init__(self, *, url: str, reason: str) -> None:
        message = f"Failed to post log record to {url}: {reason}"
        super().__init__(message, code="TRANSPORT_FAILED", details={"url": url, "reason": reason})


class DeliveryError(FluentBitHandlerError):
    """The HTTP listener answered with an error status (>= 400)."""

    def __init__(self, *, url: str, status_code: int) -> None:
        message = f"failed to write message - HTTP status code {status_code}"
        details = {"url": url, "status_code": status_code}
        super().__init__(message, code="DELIVERY_FAILED", details=details)
        self.status_code = status_code
