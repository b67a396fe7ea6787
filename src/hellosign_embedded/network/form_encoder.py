"""
Flat form-field encoding for HelloSign API requests.

The API expects nested structures flattened into index-bracketed field
names, e.g. ``signers[0][email]`` or ``form_fields_per_document[1][0][x]``.
Builders here produce the ordered (name, value) list; rendering into a
request body lives in ``multipart.py``.
"""

from __future__ import annotations

import logging
import mimetypes
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import BinaryIO
from urllib.parse import urlencode

from ..constants import FALLBACK_CONTENT_TYPE, PDF_CONTENT_TYPE, PDF_MAGIC
from ..errors import EncodingError
from ..models import DocumentFormField, EmbeddedRequest, Metadata, Signer

__all__ = [
    "FORM_FIELD_ATTRIBUTES",
    "EncodedForm",
    "FilePart",
    "build_embedded_form",
    "build_update_form",
    "encode_urlencoded",
    "validate_embedded_request",
]

_logger = logging.getLogger(__name__)

_URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class FilePart:
    """One uploaded document, already read from the caller's stream."""

    name: str
    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class EncodedForm:
    """Ordered form fields plus file parts for a multipart body."""

    fields: tuple[tuple[str, str], ...]
    files: tuple[FilePart, ...] = ()


def _encode_bool(value: bool) -> str:
    return "1" if value else "0"


def _encode_number(value: int, label: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EncodingError(f"{label} must be a number, got {type(value).__name__}")
    return str(value)


# ── Validation ───────────────────────────────────────────────────────


def _check_signer_index(index: object, signer_count: int, label: str) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise EncodingError(f"{label}: signer must be an int index, got {type(index).__name__}")
    if not 0 <= index < signer_count:
        raise EncodingError(
            f"{label}: signer index {index} out of range for {signer_count} signer(s)"
        )


def validate_embedded_request(request: EmbeddedRequest) -> None:
    """Check cross-field consistency of an embedded request.

    Every form field must reference a valid position in ``signers`` and
    every document in ``form_fields_per_document`` must have a file.

    Raises:
        EncodingError: On the first inconsistency found.
    """
    doc_count = len(request.form_fields_per_document)
    file_count = len(request.files)
    if doc_count > file_count:
        raise EncodingError(
            f"form_fields_per_document describes {doc_count} document(s) "
            f"but only {file_count} file(s) were supplied"
        )
    signer_count = len(request.signers)
    for d, fields in enumerate(request.form_fields_per_document):
        for f, form_field in enumerate(fields):
            _check_signer_index(
                form_field.signer, signer_count, f"form_fields_per_document[{d}][{f}]"
            )


# ── Field builders ───────────────────────────────────────────────────


def _scalar_fields(request: EmbeddedRequest) -> list[tuple[str, str]]:
    fields = [("test_mode", _encode_bool(request.test_mode))]
    for name, value in (
        ("client_id", request.client_id),
        ("title", request.title),
        ("subject", request.subject),
        ("message", request.message),
        ("signing_redirect_url", request.signing_redirect_url),
    ):
        if value:
            fields.append((name, value))
    fields.append(("use_text_tags", _encode_bool(request.use_text_tags)))
    fields.append(("hide_text_tags", _encode_bool(request.hide_text_tags)))
    return fields


def _signer_fields(signers: Sequence[Signer]) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    for i, signer in enumerate(signers):
        fields.append((f"signers[{i}][name]", signer.name))
        fields.append((f"signers[{i}][email]", signer.email))
    return fields


def _cc_fields(addresses: Sequence[str]) -> list[tuple[str, str]]:
    return [(f"cc_email_addresses[{j}]", address) for j, address in enumerate(addresses)]


def _metadata_fields(metadata: Metadata) -> list[tuple[str, str]]:
    """Emit one ``metadata[<key>]`` field per key, in supplied order."""
    pairs = metadata.items() if isinstance(metadata, Mapping) else metadata
    seen: set[str] = set()
    fields: list[tuple[str, str]] = []
    for pair in pairs:
        try:
            key, value = pair
        except (TypeError, ValueError) as e:
            raise EncodingError(f"metadata entries must be (key, value) pairs: {pair!r}") from e
        if not isinstance(key, str) or not key:
            raise EncodingError(f"metadata keys must be non-empty strings, got {key!r}")
        if key in seen:
            raise EncodingError(f"Duplicate metadata key: {key!r}")
        seen.add(key)
        fields.append((f"metadata[{key}]", str(value)))
    return fields


def _encode_text(value: str, label: str) -> str:
    return value


def _encode_flag(value: bool, label: str) -> str:
    return _encode_bool(value)


def _encode_signer(value: int, label: str) -> str:
    return str(value)


# Wire formatter per DocumentFormField attribute, in wire order
_FORM_FIELD_FORMATTERS = {
    "api_id": _encode_text,
    "name": _encode_text,
    "type": _encode_text,
    "x": _encode_number,
    "y": _encode_number,
    "width": _encode_number,
    "required": _encode_flag,
    "signer": _encode_signer,
}
FORM_FIELD_ATTRIBUTES = tuple(_FORM_FIELD_FORMATTERS)


def _form_field_values(form_field: DocumentFormField, label: str) -> list[tuple[str, str]]:
    return [
        (attr, _FORM_FIELD_FORMATTERS[attr](getattr(form_field, attr), f"{label}[{attr}]"))
        for attr in FORM_FIELD_ATTRIBUTES
    ]


def _form_fields_per_document(
    documents: Sequence[Sequence[DocumentFormField]],
) -> list[tuple[str, str]]:
    fields: list[tuple[str, str]] = []
    for d, document_fields in enumerate(documents):
        for f, form_field in enumerate(document_fields):
            prefix = f"form_fields_per_document[{d}][{f}]"
            for attr, value in _form_field_values(form_field, prefix):
                fields.append((f"{prefix}[{attr}]", value))
    return fields


# ── File parts ───────────────────────────────────────────────────────


def _guess_filename(stream: BinaryIO, index: int, data: bytes) -> str:
    name = getattr(stream, "name", None)
    if isinstance(name, str) and name:
        base = os.path.basename(name)
        if base:
            return base
    return f"file{index}.pdf" if data.startswith(PDF_MAGIC) else f"file{index}"


def _guess_content_type(filename: str, data: bytes) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    if content_type:
        return content_type
    return PDF_CONTENT_TYPE if data.startswith(PDF_MAGIC) else FALLBACK_CONTENT_TYPE


def _read_file_part(index: int, stream: BinaryIO) -> FilePart:
    """Read a caller-owned stream into a file part. Never closes the stream."""
    read = getattr(stream, "read", None)
    if not callable(read):
        raise EncodingError(f"file[{index}] is not a readable stream")
    try:
        data = read()
    except (OSError, ValueError) as e:
        raise EncodingError(f"Cannot read file[{index}]: {e}") from e
    if not isinstance(data, bytes):
        raise EncodingError(
            f"file[{index}] must be opened in binary mode (read() returned {type(data).__name__})"
        )
    filename = _guess_filename(stream, index, data)
    content_type = _guess_content_type(filename, data)
    _logger.debug("file[%d]: %s (%s, %d bytes)", index, filename, content_type, len(data))
    return FilePart(f"file[{index}]", filename, content_type, data)


# ── Public builders ──────────────────────────────────────────────────


def build_embedded_form(request: EmbeddedRequest) -> EncodedForm:
    """
    Flatten an embedded request into ordered form fields and file parts.

    Validation runs before any stream is read, so an inconsistent request
    never consumes the caller's file handles.

    Args:
        request: Caller-built embedded request (not modified).

    Returns:
        EncodedForm ready for :func:`~.multipart.encode_multipart`.

    Raises:
        EncodingError: If a signer index is out of range, a metadata key
            is duplicated, or a file stream cannot be read.
    """
    validate_embedded_request(request)

    fields: list[tuple[str, str]] = []
    fields.extend(_scalar_fields(request))
    fields.extend(_signer_fields(request.signers))
    fields.extend(_cc_fields(request.cc_email_addresses))
    fields.extend(_metadata_fields(request.metadata))
    fields.extend(_form_fields_per_document(request.form_fields_per_document))

    files = tuple(_read_file_part(i, stream) for i, stream in enumerate(request.files))
    _logger.debug("Encoded embedded request: %d fields, %d files", len(fields), len(files))
    return EncodedForm(tuple(fields), files)


def build_update_form(signature_id: str, email_address: str) -> EncodedForm:
    """Build the reduced form for updating one signer's email address."""
    return EncodedForm((("signature_id", signature_id), ("email_address", email_address)))


def encode_urlencoded(form: EncodedForm) -> tuple[bytes, str]:
    """Render a file-less form as an ``application/x-www-form-urlencoded`` body."""
    if form.files:
        raise EncodingError("File parts require a multipart body")
    return urlencode(form.fields).encode("ascii"), _URLENCODED_CONTENT_TYPE
