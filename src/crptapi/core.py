"""Top-level entry points: DocumentSubmitter, AsyncDocumentSubmitter."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any

from pydantic import ValidationError

from crptapi.concurrency.rate_limiter import RateLimiter
from crptapi.config.defaults import (
    DEFAULT_API_URL,
    DEFAULT_REQUEST_LIMIT,
    DEFAULT_TIMEOUT,
    METADATA_KEYS,
)
from crptapi.config.hierarchy import load_config_hierarchy
from crptapi.errors.exceptions import Misconfiguration, RemoteRejected
from crptapi.transport.client import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
)
from crptapi.types import (
    DOC_TYPE,
    Description,
    DocumentMetadata,
    DocumentRequest,
    Product,
    SubmissionResult,
    TimeUnit,
    TransportRequest,
    TransportResponse,
)

logger = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json"}

DescriptionLike = Description | Mapping[str, Any]
ProductLike = Product | Mapping[str, Any]


def build_request(
    metadata: DocumentMetadata,
    description: DescriptionLike,
    products: Sequence[ProductLike],
) -> DocumentRequest:
    """Combine protocol metadata with the caller's description and products.

    Raises Misconfiguration when the description or a product does not
    validate, including unknown field names.
    """
    try:
        return DocumentRequest(
            **metadata.model_dump(),
            description=description,
            products=tuple(products),
        )
    except ValidationError as e:
        raise Misconfiguration(f"Invalid document: {e}", setting="document") from e


def _transport_request(url: str, document: DocumentRequest) -> TransportRequest:
    return TransportRequest(
        url=url,
        method="POST",
        headers=dict(_HEADERS),
        body=document.model_dump_json().encode("utf-8"),
    )


def _check_response(response: TransportResponse) -> SubmissionResult:
    if response.status_code != 200:
        logger.warning(
            "Document rejected with HTTP %d: %s", response.status_code, response.body
        )
        raise RemoteRejected(
            f"Failed to create document: {response.body}",
            status_code=response.status_code,
            body=response.body,
        )
    logger.info("Document created (HTTP %d)", response.status_code)
    return SubmissionResult(status_code=response.status_code, body=response.body)


def _settings_from_config(**overrides: Any) -> dict[str, Any]:
    config = load_config_hierarchy(**overrides)
    try:
        metadata = DocumentMetadata(**{k: config[k] for k in METADATA_KEYS if k in config})
    except ValueError as e:
        raise Misconfiguration(f"Invalid document metadata: {e}") from e
    try:
        timeout = float(config["timeout"])
    except (TypeError, ValueError):
        raise Misconfiguration(
            f"Invalid timeout: {config['timeout']!r}", setting="timeout"
        ) from None
    try:
        request_limit = int(config["request_limit"])
    except (TypeError, ValueError):
        raise Misconfiguration(
            f"Invalid request limit: {config['request_limit']!r}", setting="request_limit"
        ) from None
    return {
        "time_unit": config["time_unit"],
        "request_limit": request_limit,
        "url": config["api_url"],
        "metadata": metadata,
        "timeout": timeout,
    }


class DocumentSubmitter:
    """Rate-limited client for the document-creation endpoint.

    Owns a RateLimiter built from ``time_unit`` and ``request_limit`` unless
    one is injected, and an httpx transport unless one is injected. Owned
    resources are released by ``close()``; injected ones are left alone.
    """

    def __init__(
        self,
        time_unit: TimeUnit | str = TimeUnit.MINUTES,
        request_limit: int = DEFAULT_REQUEST_LIMIT,
        *,
        url: str = DEFAULT_API_URL,
        metadata: DocumentMetadata | None = None,
        transport: Transport | None = None,
        rate_limiter: RateLimiter | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = url
        self._metadata = metadata or DocumentMetadata()

        self._owns_rate_limiter = rate_limiter is None
        self._rate_limiter = rate_limiter or RateLimiter.per(time_unit, request_limit)

        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(timeout=timeout)

    @classmethod
    def from_config(cls, **overrides: Any) -> DocumentSubmitter:
        """Build a submitter from the merged configuration hierarchy."""
        return cls(**_settings_from_config(**overrides))

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    @property
    def url(self) -> str:
        return self._url

    @property
    def metadata(self) -> DocumentMetadata:
        return self._metadata

    def build_request(
        self, description: DescriptionLike, products: Sequence[ProductLike]
    ) -> DocumentRequest:
        return build_request(self._metadata, description, products)

    def build_payload(
        self, description: DescriptionLike, products: Sequence[ProductLike]
    ) -> bytes:
        """Serialized request body, as it would be sent."""
        return self.build_request(description, products).model_dump_json().encode("utf-8")

    def submit(
        self,
        description: DescriptionLike,
        products: Sequence[ProductLike],
        cancel_event: threading.Event | None = None,
    ) -> SubmissionResult:
        """Create one document, waiting for rate-limit admission first.

        Raises:
            Misconfiguration: the description or products do not validate;
                raised before any admission is taken.
            Cancelled: waiting for admission was cancelled.
            RemoteRejected: the API answered with a non-200 status.
            TransportError: no response was received.
        """
        # Invalid input fails here, before it can consume an admission
        document = self.build_request(description, products)

        self._rate_limiter.acquire(cancel_event)

        logger.info(
            "Submitting %s document with %d product(s) to %s",
            DOC_TYPE,
            len(document.products),
            self._url,
        )
        response = self._transport.send(_transport_request(self._url, document))
        return _check_response(response)

    def close(self) -> None:
        if self._owns_rate_limiter:
            self._rate_limiter.shutdown()
        if self._owns_transport:
            self._transport.close()  # type: ignore[attr-defined]

    def __enter__(self) -> DocumentSubmitter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class AsyncDocumentSubmitter:
    """asyncio counterpart of DocumentSubmitter."""

    def __init__(
        self,
        time_unit: TimeUnit | str = TimeUnit.MINUTES,
        request_limit: int = DEFAULT_REQUEST_LIMIT,
        *,
        url: str = DEFAULT_API_URL,
        metadata: DocumentMetadata | None = None,
        transport: AsyncTransport | None = None,
        rate_limiter: RateLimiter | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = url
        self._metadata = metadata or DocumentMetadata()

        self._owns_rate_limiter = rate_limiter is None
        self._rate_limiter = rate_limiter or RateLimiter.per(time_unit, request_limit)

        self._owns_transport = transport is None
        self._transport: AsyncTransport = transport or AsyncHttpxTransport(timeout=timeout)

    @classmethod
    def from_config(cls, **overrides: Any) -> AsyncDocumentSubmitter:
        return cls(**_settings_from_config(**overrides))

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._rate_limiter

    def build_request(
        self, description: DescriptionLike, products: Sequence[ProductLike]
    ) -> DocumentRequest:
        return build_request(self._metadata, description, products)

    async def submit(
        self,
        description: DescriptionLike,
        products: Sequence[ProductLike],
    ) -> SubmissionResult:
        """Create one document; see DocumentSubmitter.submit."""
        document = self.build_request(description, products)

        await self._rate_limiter.acquire_async()

        logger.info(
            "Submitting %s document with %d product(s) to %s",
            DOC_TYPE,
            len(document.products),
            self._url,
        )
        response = await self._transport.send(_transport_request(self._url, document))
        return _check_response(response)

    async def aclose(self) -> None:
        if self._owns_rate_limiter:
            self._rate_limiter.shutdown()
        if self._owns_transport:
            await self._transport.close()  # type: ignore[attr-defined]

    async def __aenter__(self) -> AsyncDocumentSubmitter:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
