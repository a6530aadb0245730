"""
End-to-end delivery through a real httpx.Client backed by MockTransport.
"""

from __future__ import annotations

import httpx
import orjson
import pytest

from fluentbit_handler import DeliveryError, FluentBitHandler, HandlerOptions, HTTPClient, Record, TransportError
from fluentbit_handler.transport import default_http_client


def _handler(handler_fn, **overrides) -> FluentBitHandler:
    client = httpx.Client(transport=httpx.MockTransport(handler_fn))
    return FluentBitHandler(HandlerOptions(url="http://fluentbit.test/app", http_client=client, **overrides))


class TestHttpxDelivery:
    def test_posts_json_body(self) -> None:
        requests: list[httpx.Request] = []

        def respond(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201)

        _handler(respond).with_attrs({"service": "orders"}).handle(Record.create("INFO", "created", id=7))

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://fluentbit.test/app"
        assert request.headers["Content-Type"] == "application/json"
        body = orjson.loads(request.content)
        assert body["msg"] == "created"
        assert body["service"] == "orders"
        assert body["id"] == 7

    def test_error_status(self) -> None:
        with pytest.raises(DeliveryError) as exc_info:
            _handler(lambda request: httpx.Response(500)).handle(Record.create("ERROR", "m"))
        assert exc_info.value.details == {"url": "http://fluentbit.test/app", "status_code": 500}

    def test_network_failure(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _handler(fail).handle(Record.create("INFO", "m"))
        assert exc_info.value.code == "TRANSPORT_FAILED"

    def test_async_delivery(self) -> None:
        received = []

        def respond(request: httpx.Request) -> httpx.Response:
            received.append(orjson.loads(request.content)["msg"])
            return httpx.Response(200)

        handler = _handler(respond, enable_async=True)
        for i in range(3):
            handler.handle(Record.create("INFO", f"m{i}"))
        handler.shutdown()

        assert sorted(received) == ["m0", "m1", "m2"]


def test_default_client_satisfies_protocol() -> None:
    client = default_http_client(timeout=1.0)
    try:
        assert isinstance(client, HTTPClient)
    finally:
        client.close()
