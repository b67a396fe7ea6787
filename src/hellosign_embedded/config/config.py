"""
Client configuration for hellosign_embedded.

Settings are plain process configuration: each one is read from its
``HELLOSIGN_*`` environment variable, falling back to a built-in default.
API key handling lives in ``credentials.py``.
"""

from __future__ import annotations

__all__ = ["ClientConfig", "get_client_config"]

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

from ..constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_BASE_URL,
    ENV_CLIENT_ID,
    ENV_TIMEOUT,
    MAX_TIMEOUT,
    MIN_TIMEOUT,
)
from ..errors import ConfigError
from .credentials import resolve_api_key

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for building a Client.

    ``client_id`` is the API app used for embedded signing; the client
    sends it with every embedded request that does not name its own.
    """

    api_key: str | None
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    client_id: str | None = None


def _env_timeout() -> int:
    timeout_str = os.environ.get(ENV_TIMEOUT, "").strip()
    if not timeout_str:
        return DEFAULT_TIMEOUT
    try:
        timeout = int(timeout_str)
    except ValueError:
        _logger.warning("Invalid %s value %r, using default", ENV_TIMEOUT, timeout_str)
        return DEFAULT_TIMEOUT
    if timeout < MIN_TIMEOUT or timeout > MAX_TIMEOUT:
        _logger.warning(
            "%s=%d out of range [%d, %d], using default",
            ENV_TIMEOUT,
            timeout,
            MIN_TIMEOUT,
            MAX_TIMEOUT,
        )
        return DEFAULT_TIMEOUT
    return timeout


def _env_base_url() -> str:
    base_url = os.environ.get(ENV_BASE_URL, "").strip()
    if not base_url:
        return DEFAULT_BASE_URL
    parsed = urlparse(base_url)
    if parsed.scheme != "https" or not parsed.netloc:
        raise ConfigError(f"{ENV_BASE_URL} must be an https:// URL, got {base_url!r}")
    return base_url.rstrip("/")


def get_client_config() -> ClientConfig:
    """
    Resolve the active client configuration.

    Priority: env vars > built-in defaults; the API key may also come
    from the system keychain.

    Raises:
        ConfigError: If ``HELLOSIGN_BASE_URL`` is set but not an https URL.
    """
    return ClientConfig(
        api_key=resolve_api_key(),
        base_url=_env_base_url(),
        timeout=_env_timeout(),
        client_id=os.environ.get(ENV_CLIENT_ID, "").strip() or None,
    )
