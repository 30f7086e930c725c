"""Error handling — exception hierarchy for submissions and rate limiting."""

from crptapi.errors.exceptions import (
    Cancelled,
    CrptApiError,
    Misconfiguration,
    RemoteRejected,
    TransportError,
)

__all__ = [
    "CrptApiError",
    "Misconfiguration",
    "RemoteRejected",
    "TransportError",
    "Cancelled",
]
