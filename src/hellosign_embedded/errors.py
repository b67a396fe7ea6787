"""hellosign_embedded error types."""

from __future__ import annotations

from typing import Any

__all__ = [
    "APIError",
    "ConfigError",
    "DecodingError",
    "EncodingError",
    "HelloSignError",
    "TransportError",
]


class HelloSignError(Exception):
    """Base error for hellosign_embedded operations."""


class EncodingError(HelloSignError):
    """Caller-supplied request data is malformed or unreadable.

    Always raised before any network I/O takes place.
    """


class DecodingError(HelloSignError):
    """Response body is not valid JSON or lacks an expected key."""


class ConfigError(HelloSignError):
    """Configuration validation error."""


class TransportError(HelloSignError):
    """Network/transport failure.

    Args:
        message: Human-readable error description.
        status_code: HTTP status when the failure is a bare non-2xx
            response with no structured error body.
        retryable: Whether this error is transient and worth retrying.
            True for timeouts and connection failures.
    """

    def __init__(
        self, message: str, *, status_code: int | None = None, retryable: bool = False
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable

    def __reduce__(self) -> tuple[type[TransportError], tuple[str], dict[str, Any]]:
        """Preserve status_code and retryable across pickle/unpickle."""
        return (
            type(self),
            (str(self),),
            {"status_code": self.status_code, "retryable": self.retryable},
        )

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.status_code = state.get("status_code")
        self.retryable = state.get("retryable", False)


class APIError(HelloSignError):
    """The remote service reported a structured failure.

    ``str(err)`` is the service's message verbatim; branch on ``kind``
    (the service's ``error_name``) to handle specific failures.

    Args:
        kind: Error name reported by the service (e.g. ``"not_found"``).
        message: Human-readable message reported by the service.
        status_code: HTTP status the error body arrived with, if known.
    """

    def __init__(self, kind: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __reduce__(self) -> tuple[type[APIError], tuple[str, str], dict[str, Any]]:
        return (type(self), (self.kind, self.message), {"status_code": self.status_code})

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        if state is None:
            return
        self.status_code = state.get("status_code")
