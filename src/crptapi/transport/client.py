"""HTTP transports for the document API, backed by httpx."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from crptapi.errors.exceptions import TransportError
from crptapi.types import TransportRequest, TransportResponse

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Sends one request and returns its status code and body."""

    def send(self, request: TransportRequest) -> TransportResponse: ...


class AsyncTransport(Protocol):
    async def send(self, request: TransportRequest) -> TransportResponse: ...


class HttpxTransport:
    """Blocking transport over a shared ``httpx.Client``.

    The client is reused across submissions; pass one in to control
    connection pooling, proxies or to mock the network in tests.
    """

    def __init__(self, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, request: TransportRequest) -> TransportResponse:
        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            raise _transport_error(request, exc) from exc

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.text)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncHttpxTransport:
    """Async transport over a shared ``httpx.AsyncClient``."""

    def __init__(self, timeout: float = 30.0, client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, request: TransportRequest) -> TransportResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as exc:
            raise _transport_error(request, exc) from exc

        logger.debug("%s %s -> %d", request.method, request.url, response.status_code)
        return TransportResponse(status_code=response.status_code, body=response.text)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _transport_error(request: TransportRequest, exc: httpx.HTTPError) -> TransportError:
    logger.error("%s %s failed: %s", request.method, request.url, exc)
    return TransportError(
        f"{request.method} {request.url} failed: {exc}",
        url=request.url,
        original=exc,
    )
