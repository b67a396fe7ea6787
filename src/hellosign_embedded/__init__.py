"""
hellosign_embedded: Python client for HelloSign (Dropbox Sign) embedded signing.

Creates embedded signature requests, tracks their status, and fetches
short-lived signing URLs for hosting the signing UI in your own app.
"""

from __future__ import annotations

from .client import Client
from .constants import __version__
from .errors import (
    APIError,
    ConfigError,
    DecodingError,
    EncodingError,
    HelloSignError,
    TransportError,
)
from .models import (
    CancelResult,
    DocumentFormField,
    EmbeddedRequest,
    EmbeddedSignURL,
    ErrorPayload,
    ListInfo,
    SignatureRequest,
    SignatureRequestList,
    SignatureStatus,
    Signer,
)
from .network import HTTPRequest, HTTPResponse, HTTPTransport, UrllibTransport

__all__ = [
    "APIError",
    "CancelResult",
    "Client",
    "ConfigError",
    "DecodingError",
    "DocumentFormField",
    "EmbeddedRequest",
    "EmbeddedSignURL",
    "EncodingError",
    "ErrorPayload",
    "HTTPRequest",
    "HTTPResponse",
    "HTTPTransport",
    "HelloSignError",
    "ListInfo",
    "SignatureRequest",
    "SignatureRequestList",
    "SignatureStatus",
    "Signer",
    "TransportError",
    "UrllibTransport",
    "__version__",
]
