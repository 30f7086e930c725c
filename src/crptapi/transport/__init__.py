"""Transport — the HTTP collaborator that carries submissions."""

from crptapi.transport.client import (
    AsyncHttpxTransport,
    AsyncTransport,
    HttpxTransport,
    Transport,
)

__all__ = ["Transport", "AsyncTransport", "HttpxTransport", "AsyncHttpxTransport"]
