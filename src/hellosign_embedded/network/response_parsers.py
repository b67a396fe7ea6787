"""JSON response parsers for the HelloSign API."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..constants import JSON_PREVIEW_LENGTH
from ..errors import APIError, DecodingError, TransportError
from ..models import (
    CancelResult,
    EmbeddedSignURL,
    ErrorPayload,
    ListInfo,
    SignatureRequest,
    SignatureRequestList,
    SignatureStatus,
)

__all__ = [
    "is_success_status",
    "load_payload",
    "parse_cancel_response",
    "parse_embedded_sign_url_response",
    "parse_error_payload",
    "parse_signature_request",
    "parse_signature_request_list_response",
    "parse_signature_request_response",
]

_logger = logging.getLogger(__name__)


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code < 300


def _preview(body: bytes | str) -> str:
    """Truncated, printable preview of a response body for error messages."""
    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
    return text[:JSON_PREVIEW_LENGTH]


# ── Typed field access ───────────────────────────────────────────────


def _require_object(data: dict[str, Any], key: str, context: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise DecodingError(f"{context}: expected object at '{key}'")
    return value


def _require_str(data: dict[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodingError(f"{context}: expected string at '{key}'")
    return value


def _require_int(data: dict[str, Any], key: str, context: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodingError(f"{context}: expected integer at '{key}', got {value!r}")
    return value


def _optional_str(data: dict[str, Any], key: str, context: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodingError(f"{context}: expected string or null at '{key}'")


def _optional_int(data: dict[str, Any], key: str, context: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodingError(f"{context}: expected integer or null at '{key}'")
    return value


def _flag(data: dict[str, Any], key: str, context: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DecodingError(f"{context}: expected boolean at '{key}'")
    return value


# ── Payload discrimination ───────────────────────────────────────────


def parse_error_payload(payload: dict[str, Any]) -> ErrorPayload | None:
    """Return the structured error carried by a payload, or None.

    Raises:
        DecodingError: If an ``error`` member is present but malformed.
    """
    error = payload.get("error")
    if error is None:
        return None
    if not isinstance(error, dict):
        raise DecodingError("Malformed error payload: 'error' is not an object")
    name = error.get("error_name")
    msg = error.get("error_msg")
    if not isinstance(name, str) or not isinstance(msg, str):
        raise DecodingError("Malformed error payload: missing error_name/error_msg")
    return ErrorPayload(error_name=name, error_msg=msg)


def load_payload(status_code: int, body: bytes | str) -> dict[str, Any]:
    """
    Parse a response body and discriminate success from error payloads.

    The body's shape decides the outcome, not the HTTP status: the service
    may return error bodies on nominally successful status codes.

    Returns:
        The parsed top-level JSON object (success payload).

    Raises:
        DecodingError: If the body is not a JSON object.
        APIError: If the body carries an ``error`` object.
    """
    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodingError(
            f"Invalid JSON response (HTTP {status_code}): {e}\nRaw: {_preview(body)}"
        ) from e
    if not isinstance(payload, dict):
        raise DecodingError(
            f"Expected a JSON object (HTTP {status_code}), got {type(payload).__name__}"
        )

    error = parse_error_payload(payload)
    if error is not None:
        _logger.debug("API error (HTTP %d): %s", status_code, error.error_name)
        raise APIError(error.error_name, error.error_msg, status_code=status_code)
    return payload


# ── Resource parsers ─────────────────────────────────────────────────


def _parse_signature_status(data: Any, index: int) -> SignatureStatus:
    context = f"signatures[{index}]"
    if not isinstance(data, dict):
        raise DecodingError(f"{context}: expected object")
    return SignatureStatus(
        signature_id=_optional_str(data, "signature_id", context),
        signer_email_address=_optional_str(data, "signer_email_address", context),
        signer_name=_optional_str(data, "signer_name", context),
        order=_optional_int(data, "order", context),
        status_code=_optional_str(data, "status_code", context),
        signed_at=_optional_int(data, "signed_at", context),
        last_viewed_at=_optional_int(data, "last_viewed_at", context),
        last_reminded_at=_optional_int(data, "last_reminded_at", context),
        error=_optional_str(data, "error", context),
    )


def parse_signature_request(data: Any, context: str = "signature_request") -> SignatureRequest:
    """Build a SignatureRequest from its JSON object."""
    if not isinstance(data, dict):
        raise DecodingError(f"{context}: expected object")

    signatures = data.get("signatures") or []
    if not isinstance(signatures, list):
        raise DecodingError(f"{context}: expected list at 'signatures'")
    cc = data.get("cc_email_addresses") or []
    if not isinstance(cc, list) or not all(isinstance(a, str) for a in cc):
        raise DecodingError(f"{context}: expected list of strings at 'cc_email_addresses'")
    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise DecodingError(f"{context}: expected object at 'metadata'")

    return SignatureRequest(
        signature_request_id=_require_str(data, "signature_request_id", context),
        subject=_optional_str(data, "subject", context),
        title=_optional_str(data, "title", context),
        message=_optional_str(data, "message", context),
        test_mode=_flag(data, "test_mode", context),
        is_complete=_flag(data, "is_complete", context),
        is_declined=_flag(data, "is_declined", context),
        has_error=_flag(data, "has_error", context),
        signing_url=_optional_str(data, "signing_url", context),
        signing_redirect_url=_optional_str(data, "signing_redirect_url", context),
        details_url=_optional_str(data, "details_url", context),
        requester_email_address=_optional_str(data, "requester_email_address", context),
        cc_email_addresses=tuple(cc),
        metadata=dict(metadata),
        created_at=_optional_int(data, "created_at", context),
        signatures=tuple(_parse_signature_status(s, i) for i, s in enumerate(signatures)),
    )


def parse_signature_request_response(status_code: int, body: bytes | str) -> SignatureRequest:
    """
    Parse a ``{"signature_request": {...}}`` response.

    Raises:
        APIError: If the service returned an error payload.
        DecodingError: If the body is not JSON or lacks the resource.
    """
    payload = load_payload(status_code, body)
    if "signature_request" not in payload:
        raise DecodingError(f"Response missing 'signature_request' (HTTP {status_code})")
    request = parse_signature_request(payload["signature_request"])
    _logger.debug("Decoded signature request %s", request.signature_request_id)
    return request


def _parse_list_info(data: dict[str, Any]) -> ListInfo:
    # Decoded verbatim; not cross-checked against the returned sequence.
    context = "list_info"
    return ListInfo(
        page=_require_int(data, "page", context),
        num_pages=_require_int(data, "num_pages", context),
        num_results=_require_int(data, "num_results", context),
        page_size=_require_int(data, "page_size", context),
    )


def parse_signature_request_list_response(
    status_code: int, body: bytes | str
) -> SignatureRequestList:
    """
    Parse a ``{"signature_requests": [...], "list_info": {...}}`` response.

    Raises:
        APIError: If the service returned an error payload.
        DecodingError: If the body is not JSON or lacks either key.
    """
    payload = load_payload(status_code, body)
    items = payload.get("signature_requests")
    if not isinstance(items, list):
        raise DecodingError(f"Response missing 'signature_requests' list (HTTP {status_code})")
    list_info = _parse_list_info(_require_object(payload, "list_info", "response"))
    requests = tuple(
        parse_signature_request(item, f"signature_requests[{i}]") for i, item in enumerate(items)
    )
    _logger.debug(
        "Decoded %d signature requests (page %d/%d)",
        len(requests),
        list_info.page,
        list_info.num_pages,
    )
    return SignatureRequestList(signature_requests=requests, list_info=list_info)


def parse_embedded_sign_url_response(status_code: int, body: bytes | str) -> EmbeddedSignURL:
    """
    Parse a ``{"embedded": {"sign_url": ..., "expires_at": ...}}`` response.

    ``expires_at`` stays an integer Unix timestamp.

    Raises:
        APIError: If the service returned an error payload.
        DecodingError: If the body is not JSON or the fields are missing.
    """
    payload = load_payload(status_code, body)
    embedded = _require_object(payload, "embedded", "response")
    return EmbeddedSignURL(
        sign_url=_require_str(embedded, "sign_url", "embedded"),
        expires_at=_require_int(embedded, "expires_at", "embedded"),
    )


def parse_cancel_response(status_code: int, body: bytes | str) -> CancelResult:
    """
    Decode a cancel response by its status code.

    2xx responses carry no body and succeed. Anything else is decoded as
    an error body when possible.

    Raises:
        APIError: Non-2xx with a structured error body.
        TransportError: Non-2xx without a usable error body.
    """
    if is_success_status(status_code):
        return CancelResult(status_code=status_code)
    try:
        load_payload(status_code, body)
    except DecodingError as e:
        raise TransportError(f"HTTP {status_code}", status_code=status_code) from e
    raise TransportError(f"HTTP {status_code}", status_code=status_code)
