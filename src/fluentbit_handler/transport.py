"""
HTTP transport contract.

Anything exposing ``post(url, *, content, headers)`` and returning an object
with an integer ``status_code`` can deliver records. ``httpx.Client``
satisfies this directly and is the default.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

import httpx

DEFAULT_TIMEOUT = 5.0


@runtime_checkable
class HTTPResponse(Protocol):
    status_code: int


@runtime_checkable
class HTTPClient(Protocol):
    def post(self, url: str, *, content: bytes, headers: Mapping[str, str]) -> HTTPResponse: ...


def default_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """Create the default client used when none is configured."""
    return httpx.Client(timeout=timeout)
