"""
Package-wide constants for hellosign_embedded.

Endpoint paths, timeouts, size limits, and environment variable names are
centralized here for easy maintenance and configuration.
"""

from __future__ import annotations

import importlib.metadata

try:
    __version__ = importlib.metadata.version("hellosign-embedded")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = [
    "BYTES_PER_MB",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "ENV_API_KEY",
    "ENV_BASE_URL",
    "ENV_CLIENT_ID",
    "ENV_TIMEOUT",
    "FALLBACK_CONTENT_TYPE",
    "JSON_PREVIEW_LENGTH",
    "MAX_RESPONSE_SIZE",
    "MAX_TIMEOUT",
    "MIN_TIMEOUT",
    "PATH_CANCEL",
    "PATH_CREATE_EMBEDDED",
    "PATH_EMBEDDED_SIGN_URL",
    "PATH_GET",
    "PATH_LIST",
    "PATH_UPDATE",
    "PDF_CONTENT_TYPE",
    "PDF_MAGIC",
    "RECV_BUFFER_SIZE",
    "USER_AGENT",
    "__version__",
]

# ── Remote API ────────────────────────────────────────────────────────

DEFAULT_BASE_URL = "https://api.hellosign.com/v3"

PATH_CREATE_EMBEDDED = "/signature_request/create_embedded"
PATH_GET = "/signature_request/{id}"
PATH_LIST = "/signature_request/list"
PATH_CANCEL = "/signature_request/cancel/{id}"
PATH_UPDATE = "/signature_request/update/{id}"
PATH_EMBEDDED_SIGN_URL = "/embedded/sign_url/{id}"

USER_AGENT = f"hellosign-embedded-python/{__version__}"


# ── Timeout values (seconds) ──────────────────────────────────────────

# Per-request timeout handed to the transport
DEFAULT_TIMEOUT = 30

MIN_TIMEOUT = 1
MAX_TIMEOUT = 3600


# ── Size units and limits ─────────────────────────────────────────────

BYTES_PER_MB = 1024 * 1024

# Maximum response body size accepted by the default transport (50 MB)
MAX_RESPONSE_SIZE = 50 * 1024 * 1024

# Chunk size for reading response bodies
RECV_BUFFER_SIZE = 8192

# Response preview truncation length for error messages (characters)
JSON_PREVIEW_LENGTH = 300


# ── File parts ────────────────────────────────────────────────────────

PDF_MAGIC = b"%PDF-"
PDF_CONTENT_TYPE = "application/pdf"
FALLBACK_CONTENT_TYPE = "application/octet-stream"


# ── Environment variable names ──────────────────────────────────────

ENV_API_KEY = "HELLOSIGN_API_KEY"
ENV_BASE_URL = "HELLOSIGN_BASE_URL"
ENV_TIMEOUT = "HELLOSIGN_TIMEOUT"
ENV_CLIENT_ID = "HELLOSIGN_CLIENT_ID"
