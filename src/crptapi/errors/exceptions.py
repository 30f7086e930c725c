"""Custom exception hierarchy for crptapi."""

from __future__ import annotations

from typing import Any


class CrptApiError(Exception):
    """Base exception for all crptapi errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class Misconfiguration(CrptApiError):
    """Invalid configuration, detected when a component is built.

    Examples: non-positive window, negative limit, unknown time unit,
    malformed config or document file, a document whose fields do not
    validate.
    """

    def __init__(self, message: str = "", setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting


class RemoteRejected(CrptApiError):
    """The API answered with a status other than 200.

    The response body is kept verbatim for diagnostics.
    """

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class TransportError(CrptApiError):
    """The request never produced a response (connection error, timeout)."""

    def __init__(
        self,
        message: str = "",
        url: str | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.original = original


class Cancelled(CrptApiError):
    """Waiting for rate-limit admission was cancelled.

    ``reason`` is ``"cancelled"`` when the caller's cancel event fired and
    ``"shutdown"`` when the limiter was shut down. No admission is consumed.
    """

    def __init__(self, message: str = "", reason: str = "cancelled") -> None:
        super().__init__(message)
        self.reason = reason
