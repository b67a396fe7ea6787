"""
Transport protocol abstraction for the HelloSign API.

Defines the interface that HTTP transports must implement. The client
depends on this protocol, not on concrete implementations, so callers can
inject their own connection pooling, proxies, or test doubles.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

__all__ = ["HTTPRequest", "HTTPResponse", "HTTPTransport"]


@dataclass(frozen=True)
class HTTPRequest:
    """A fully encoded request, ready to be sent."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class HTTPResponse:
    """Raw response as received from the wire."""

    status_code: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


class HTTPTransport(Protocol):
    """Protocol for HTTP-capable transports.

    Implementations own connection handling, TLS, and authentication.
    They must return a response for every status code the server sends
    (including 4xx/5xx) so that structured error bodies reach the
    response parsers.
    """

    def send(self, request: HTTPRequest, timeout: int) -> HTTPResponse:
        """
        Send a request and return the raw response.

        Args:
            request: Encoded request.
            timeout: Request timeout in seconds.

        Returns:
            HTTPResponse carrying status code and body bytes.

        Raises:
            TransportError: On connection issues or timeouts.
        """
        ...
