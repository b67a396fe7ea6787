"""
Default HTTP transport for the HelloSign API.

Standard HTTPS via ``urllib.request`` with HTTP Basic auth (API key as
username, empty password). Non-2xx responses are returned, not raised,
so the response parsers can read structured error bodies.

There is no retry logic here; callers that want retries wrap the
transport or inject their own.
"""

from __future__ import annotations

__all__ = ["UrllibTransport", "basic_auth_header"]

import base64
import logging
import urllib.error
import urllib.request
from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlparse

from ..constants import BYTES_PER_MB, MAX_RESPONSE_SIZE, RECV_BUFFER_SIZE, USER_AGENT
from ..errors import ConfigError, TransportError
from .protocol import HTTPRequest, HTTPResponse

if TYPE_CHECKING:
    import http.client

_logger = logging.getLogger(__name__)


def _require_https_url(url: str) -> None:
    """Reject non-HTTPS URLs to prevent API key leakage over plaintext.

    Raises:
        TransportError: If the URL scheme is not https.
    """
    scheme = urlparse(url).scheme.lower()
    if scheme != "https":
        raise TransportError(
            f"Only HTTPS URLs are allowed (got {scheme}://). "
            "The API key must not be sent over unencrypted connections."
        )


class _Readable(Protocol):
    def read(self, amt: int = ...) -> bytes: ...


def _read_with_limit(response: _Readable, url: str) -> bytes:
    """Read an HTTP response body with size limit to prevent memory exhaustion."""
    chunks: list[bytes] = []
    total_size = 0
    while True:
        chunk = response.read(RECV_BUFFER_SIZE)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > MAX_RESPONSE_SIZE:
            raise TransportError(
                f"Response from {url} exceeds {MAX_RESPONSE_SIZE // BYTES_PER_MB} MB limit"
            )
        chunks.append(chunk)
    return b"".join(chunks)


class _SafeRedirectHandler(urllib.request.HTTPRedirectHandler):
    """Redirect handler that refuses HTTPS to HTTP downgrades."""

    def redirect_request(  # type: ignore[override]  # urllib stubs use incompatible signature
        self,
        req: urllib.request.Request,
        fp: http.client.HTTPResponse,
        code: int,
        msg: str,
        headers: http.client.HTTPMessage,
        newurl: str,
    ) -> urllib.request.Request | None:
        parsed_orig = urlparse(req.full_url)
        parsed_new = urlparse(newurl)
        if parsed_orig.scheme == "https" and parsed_new.scheme == "http":
            raise TransportError(f"Refused redirect from HTTPS to HTTP: {newurl}")
        return super().redirect_request(req, fp, code, msg, headers, newurl)


_safe_opener = urllib.request.build_opener(_SafeRedirectHandler)


def _safe_urlopen(req: urllib.request.Request, *, timeout: int) -> http.client.HTTPResponse:
    """Open a Request with safe redirect handling.

    Refuses HTTPS to HTTP downgrades. Thin wrapper to simplify testing.
    """
    return _safe_opener.open(req, timeout=timeout)


def basic_auth_header(api_key: str) -> str:
    """HTTP Basic credentials with the API key as username and no password."""
    token = base64.b64encode(f"{api_key}:".encode()).decode("ascii")
    return f"Basic {token}"


class UrllibTransport:
    """HTTPTransport implementation backed by urllib.

    Holds only the API key, so one instance can be shared across threads.
    """

    def __init__(self, api_key: str) -> None:
        """
        Initialize the transport.

        Args:
            api_key: HelloSign API key used for HTTP Basic auth.
        """
        if not api_key:
            raise ConfigError("API key is required for the default transport.")
        self._auth_header = basic_auth_header(api_key)

    def _build_request(self, request: HTTPRequest) -> urllib.request.Request:
        req = urllib.request.Request(  # noqa: S310 -- URL is validated as HTTPS by caller
            request.url, data=request.body, method=request.method
        )
        req.add_header("Authorization", self._auth_header)
        req.add_header("User-Agent", USER_AGENT)
        req.add_header("Accept", "application/json")
        for k, v in request.headers.items():
            req.add_header(k, v)
        return req

    def send(self, request: HTTPRequest, timeout: int) -> HTTPResponse:
        """Send a request; 4xx/5xx responses are returned with their body."""
        _require_https_url(request.url)
        body_size = len(request.body) if request.body else 0
        _logger.debug(
            "%s %s (urllib, timeout=%ds, %d bytes)", request.method, request.url, timeout, body_size
        )
        req = self._build_request(request)
        try:
            with _safe_urlopen(req, timeout=timeout) as response:
                data = _read_with_limit(response, request.url)
                status = response.status
                headers = dict(response.headers.items())
        except urllib.error.HTTPError as exc:
            # Error statuses still carry a JSON body worth decoding.
            try:
                data = _read_with_limit(exc, request.url)
            finally:
                exc.close()
            status = exc.code
            headers = dict(exc.headers.items()) if exc.headers else {}
        except urllib.error.URLError as exc:
            raise TransportError(
                f"HTTP {request.method} failed: {request.url}: {exc.reason}", retryable=True
            ) from exc
        except TimeoutError as exc:
            raise TransportError(
                f"Connection timed out after {timeout}s: {request.url}", retryable=True
            ) from exc

        _logger.debug("%s %s -> HTTP %d, %d bytes", request.method, request.url, status, len(data))
        return HTTPResponse(status_code=status, body=data, headers=headers)
