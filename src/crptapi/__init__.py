"""crptapi — rate-limited client for the goods-tracking document API."""

from crptapi.concurrency.rate_limiter import RateLimiter
from crptapi.core import AsyncDocumentSubmitter, DocumentSubmitter
from crptapi.errors.exceptions import (
    Cancelled,
    CrptApiError,
    Misconfiguration,
    RemoteRejected,
    TransportError,
)
from crptapi.types import (
    Description,
    DocumentMetadata,
    DocumentRequest,
    Product,
    SubmissionResult,
    TimeUnit,
)

__all__ = [
    "AsyncDocumentSubmitter",
    "Cancelled",
    "CrptApiError",
    "Description",
    "DocumentMetadata",
    "DocumentRequest",
    "DocumentSubmitter",
    "Misconfiguration",
    "Product",
    "RateLimiter",
    "RemoteRejected",
    "SubmissionResult",
    "TimeUnit",
    "TransportError",
]
