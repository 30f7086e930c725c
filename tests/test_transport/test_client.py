"""Tests for httpx-backed transports."""

import httpx
import pytest

from crptapi.errors.exceptions import TransportError
from crptapi.transport.client import AsyncHttpxTransport, HttpxTransport
from crptapi.types import TransportRequest


def _request():
    return TransportRequest(
        url="https://api.example.test/create",
        headers={"Content-Type": "application/json"},
        body=b'{"a": 1}',
    )


class TestHttpxTransport:
    def test_sends_method_headers_and_body(self, make_transport, recorded_requests):
        transport = make_transport(200, '{"value": "ok"}')
        response = transport.send(_request())

        assert response.status_code == 200
        assert response.body == '{"value": "ok"}'
        sent = recorded_requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://api.example.test/create"
        assert sent.headers["content-type"] == "application/json"
        assert sent.content == b'{"a": 1}'

    def test_non_200_is_returned_not_raised(self, make_transport):
        response = make_transport(400, "invalid inn").send(_request())
        assert response.status_code == 400
        assert response.body == "invalid inn"

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(TransportError) as exc_info:
            transport.send(_request())
        assert isinstance(exc_info.value.original, httpx.ConnectError)
        assert exc_info.value.url == "https://api.example.test/create"

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))
        with pytest.raises(TransportError):
            transport.send(_request())

    def test_injected_client_not_closed(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        HttpxTransport(client=client).close()
        assert not client.is_closed

    def test_owned_client_closed(self):
        transport = HttpxTransport(timeout=1.0)
        transport.close()
        assert transport._client.is_closed


class TestAsyncHttpxTransport:
    async def test_sends_request(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text="created")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = AsyncHttpxTransport(client=client)
        response = await transport.send(_request())

        assert response.status_code == 200
        assert response.body == "created"
        assert seen[0].content == b'{"a": 1}'
        await client.aclose()

    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = AsyncHttpxTransport(client=client)
        with pytest.raises(TransportError):
            await transport.send(_request())
        await client.aclose()
