"""
Resource model for the embedded-signing API.

Request-side types are built by the caller and only read by the encoder.
Response-side types are built once per call by the response parsers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import BinaryIO, Union

__all__ = [
    "CancelResult",
    "DocumentFormField",
    "EmbeddedRequest",
    "EmbeddedSignURL",
    "ErrorPayload",
    "ListInfo",
    "Metadata",
    "SignatureRequest",
    "SignatureRequestList",
    "SignatureStatus",
    "Signer",
]

# Metadata may be a mapping (insertion-ordered) or explicit (key, value) pairs.
Metadata = Union[Mapping[str, str], Sequence[tuple[str, str]]]


# ── Request side ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Signer:
    """A person asked to sign; referenced positionally by form fields."""

    name: str
    email: str


@dataclass(frozen=True)
class DocumentFormField:
    """A placeable input on one document, assigned to one signer.

    Attributes:
        api_id: Caller-chosen external identifier for the field.
        name: Display name.
        type: Field type tag ("text", "checkbox", "signature", ...).
        x: Horizontal position on the page.
        y: Vertical position on the page.
        width: Field width.
        required: Whether the signer must fill the field.
        signer: 0-based index into ``EmbeddedRequest.signers``.
    """

    api_id: str
    name: str
    type: str
    x: int
    y: int
    width: int
    required: bool
    signer: int


@dataclass(frozen=True)
class EmbeddedRequest:
    """Parameters for creating an embedded signature request.

    ``files`` are readable binary streams owned by the caller; they are
    read but never closed. ``form_fields_per_document[i]`` holds the
    fields placed on the document read from ``files[i]``.
    """

    test_mode: bool = False
    client_id: str = ""
    files: Sequence[BinaryIO] = ()
    title: str = ""
    subject: str = ""
    message: str = ""
    signing_redirect_url: str | None = None
    signers: Sequence[Signer] = ()
    cc_email_addresses: Sequence[str] = ()
    use_text_tags: bool = False
    hide_text_tags: bool = False
    metadata: Metadata = ()
    form_fields_per_document: Sequence[Sequence[DocumentFormField]] = ()


# ── Response side ────────────────────────────────────────────────────


@dataclass(frozen=True)
class SignatureStatus:
    """Per-signer status record inside a signature request."""

    signature_id: str | None = None
    signer_email_address: str | None = None
    signer_name: str | None = None
    order: int | None = None
    status_code: str | None = None
    signed_at: int | None = None
    last_viewed_at: int | None = None
    last_reminded_at: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class SignatureRequest:
    """A signature request as reported by the service."""

    signature_request_id: str
    subject: str | None = None
    title: str | None = None
    message: str | None = None
    test_mode: bool = False
    is_complete: bool = False
    is_declined: bool = False
    has_error: bool = False
    signing_url: str | None = None
    signing_redirect_url: str | None = None
    details_url: str | None = None
    requester_email_address: str | None = None
    cc_email_addresses: tuple[str, ...] = ()
    metadata: dict[str, object] = field(default_factory=dict)
    created_at: int | None = None
    signatures: tuple[SignatureStatus, ...] = ()


@dataclass(frozen=True)
class ListInfo:
    """Pagination metadata, exactly as reported by the service."""

    page: int
    num_pages: int
    num_results: int
    page_size: int


@dataclass(frozen=True)
class SignatureRequestList:
    """One page of signature requests plus its pagination metadata."""

    signature_requests: tuple[SignatureRequest, ...]
    list_info: ListInfo


@dataclass(frozen=True)
class EmbeddedSignURL:
    """Short-lived URL for the embedded signing UI.

    ``expires_at`` is an absolute Unix timestamp in seconds; convert it
    with ``datetime.fromtimestamp(expires_at, tz=...)`` if needed.
    """

    sign_url: str
    expires_at: int


@dataclass(frozen=True)
class ErrorPayload:
    """Structured error body returned by the service."""

    error_name: str
    error_msg: str


@dataclass(frozen=True)
class CancelResult:
    """Successful cancellation; the service returns no body."""

    status_code: int
