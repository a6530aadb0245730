import threading
import typing as t
from types import SimpleNamespace

import pytest

from fluentbit_handler import FluentBitHandler, HandlerOptions


class StubClient:
    """HTTP client stub recording every post."""

    def __init__(self, status_code: int = 200, error: Exception | None = None, delay: float = 0.0):
        self.status_code = status_code
        self.error = error
        self.delay = delay
        self.calls: list[dict[str, t.Any]] = []
        self._lock = threading.Lock()
        self.release = threading.Event()
        self.release.set()

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self.calls)

    def post(self, url, *, content, headers):
        self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        with self._lock:
            self.calls.append({"url": url, "content": content, "headers": dict(headers)})
        return SimpleNamespace(status_code=self.status_code)


class StubFormatter:
    """Formatter stub returning a fixed buffer and remembering its input."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict[str, t.Any]] = []

    def format_record(self, time, level, caller, message, attrs, *, options=None):
        if self.error is not None:
            raise self.error
        self.calls.append(
            {"time": time, "level": level, "caller": caller, "message": message, "attrs": attrs, "options": options}
        )
        return b"{}"


@pytest.fixture
def client() -> StubClient:
    return StubClient()


@pytest.fixture
def formatter() -> StubFormatter:
    return StubFormatter()


@pytest.fixture
def make_handler(client, formatter):
    """Factory building handlers wired to the stub collaborators."""

    def _make(**overrides: t.Any) -> FluentBitHandler:
        fields: dict[str, t.Any] = {
            "url": "http://fluentbit.test:9880/app",
            "http_client": client,
            "record_formatter": formatter,
        }
        fields.update(overrides)
        return FluentBitHandler(HandlerOptions(**fields))

    return _make
