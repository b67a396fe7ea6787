"""
Client facade for the HelloSign embedded-signing API.

Each operation is a straight composition: check identifiers, encode the
request, send it through the transport, decode the response. The client
keeps no per-call state, so one instance can be shared across threads as
long as its transport can.
"""

from __future__ import annotations

__all__ = ["Client"]

import dataclasses
import logging
from urllib.parse import quote, urlencode

from .config import get_client_config
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    PATH_CANCEL,
    PATH_CREATE_EMBEDDED,
    PATH_EMBEDDED_SIGN_URL,
    PATH_GET,
    PATH_LIST,
    PATH_UPDATE,
)
from .errors import ConfigError, EncodingError
from .models import (
    CancelResult,
    EmbeddedRequest,
    EmbeddedSignURL,
    SignatureRequest,
    SignatureRequestList,
)
from .network.form_encoder import build_embedded_form, build_update_form, encode_urlencoded
from .network.multipart import encode_multipart
from .network.protocol import HTTPRequest, HTTPResponse, HTTPTransport
from .network.response_parsers import (
    parse_cancel_response,
    parse_embedded_sign_url_response,
    parse_signature_request_list_response,
    parse_signature_request_response,
)
from .network.transport import UrllibTransport

_logger = logging.getLogger(__name__)


def _require_id(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise EncodingError(f"{name} must be a non-empty string")
    return value


def _require_positive_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise EncodingError(f"{name} must be a positive integer, got {value!r}")
    return value


class Client:
    """HelloSign API client.

    Either pass an ``api_key`` (the default urllib transport is used) or
    inject any object implementing
    :class:`~hellosign_embedded.network.protocol.HTTPTransport`.
    A ``client_id`` given here is used for embedded requests that leave
    their own ``client_id`` empty.

    Raises:
        ConfigError: If neither an API key nor a transport is given.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        transport: HTTPTransport | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        client_id: str | None = None,
    ) -> None:
        if transport is None:
            if not api_key:
                raise ConfigError(
                    "No API key configured. Pass api_key='...', inject a transport, "
                    "or set HELLOSIGN_API_KEY."
                )
            transport = UrllibTransport(api_key)
        self.transport = transport
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client_id = client_id or None

    @classmethod
    def from_config(cls, transport: HTTPTransport | None = None) -> Client:
        """Build a client from HELLOSIGN_* environment variables and the keychain."""
        config = get_client_config()
        return cls(
            config.api_key,
            transport=transport,
            base_url=config.base_url,
            timeout=config.timeout,
            client_id=config.client_id,
        )

    # ── Plumbing ─────────────────────────────────────────────────────

    def _url(self, path: str, resource_id: str | None = None, query: str = "") -> str:
        if resource_id is not None:
            path = path.format(id=quote(resource_id, safe=""))
        url = f"{self.base_url}{path}"
        return f"{url}?{query}" if query else url

    def _send(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        content_type: str | None = None,
    ) -> HTTPResponse:
        headers = {"Content-Type": content_type} if content_type else {}
        _logger.debug("%s %s (%d bytes)", method, url, len(body) if body else 0)
        response = self.transport.send(
            HTTPRequest(method=method, url=url, headers=headers, body=body), self.timeout
        )
        _logger.debug("%s %s -> HTTP %d", method, url, response.status_code)
        return response

    # ── Operations ───────────────────────────────────────────────────

    def create_embedded_signature_request(self, request: EmbeddedRequest) -> SignatureRequest:
        """
        Create a signature request for embedded signing.

        The request is fully encoded (files read, signer indices checked)
        before anything is sent.

        Raises:
            EncodingError: If the request is inconsistent or a file is unreadable.
            TransportError: On connection issues.
            APIError: If the service rejected the request.
            DecodingError: If the response cannot be decoded.
        """
        if not request.client_id and self.client_id:
            request = dataclasses.replace(request, client_id=self.client_id)
        body, content_type = encode_multipart(build_embedded_form(request))
        response = self._send("POST", self._url(PATH_CREATE_EMBEDDED), body, content_type)
        result = parse_signature_request_response(response.status_code, response.body)
        _logger.info("Created embedded signature request %s", result.signature_request_id)
        return result

    def get_signature_request(self, signature_request_id: str) -> SignatureRequest:
        """Fetch the current status of a signature request."""
        _require_id(signature_request_id, "signature_request_id")
        response = self._send("GET", self._url(PATH_GET, signature_request_id))
        return parse_signature_request_response(response.status_code, response.body)

    def list_signature_requests(
        self, page: int | None = None, page_size: int | None = None
    ) -> SignatureRequestList:
        """List signature requests, optionally selecting a page and page size."""
        params: list[tuple[str, int]] = []
        if page is not None:
            params.append(("page", _require_positive_int(page, "page")))
        if page_size is not None:
            params.append(("page_size", _require_positive_int(page_size, "page_size")))
        response = self._send("GET", self._url(PATH_LIST, query=urlencode(params)))
        return parse_signature_request_list_response(response.status_code, response.body)

    def get_embedded_sign_url(self, signature_id: str) -> EmbeddedSignURL:
        """Fetch a short-lived URL for one signer's embedded signing UI."""
        _require_id(signature_id, "signature_id")
        response = self._send("GET", self._url(PATH_EMBEDDED_SIGN_URL, signature_id))
        return parse_embedded_sign_url_response(response.status_code, response.body)

    def cancel_signature_request(self, signature_request_id: str) -> CancelResult:
        """
        Cancel an incomplete signature request.

        Returns:
            CancelResult carrying the 2xx status code.

        Raises:
            APIError: Non-2xx response with a structured error body.
            TransportError: Non-2xx response without one, or connection issues.
        """
        _require_id(signature_request_id, "signature_request_id")
        response = self._send("POST", self._url(PATH_CANCEL, signature_request_id))
        result = parse_cancel_response(response.status_code, response.body)
        _logger.info("Cancelled signature request %s", signature_request_id)
        return result

    def update_signature_request(
        self, signature_request_id: str, signature_id: str, email_address: str
    ) -> SignatureRequest:
        """Change the email address of one signer on an in-flight request."""
        _require_id(signature_request_id, "signature_request_id")
        _require_id(signature_id, "signature_id")
        _require_id(email_address, "email_address")
        body, content_type = encode_urlencoded(build_update_form(signature_id, email_address))
        response = self._send(
            "POST", self._url(PATH_UPDATE, signature_request_id), body, content_type
        )
        return parse_signature_request_response(response.status_code, response.body)
