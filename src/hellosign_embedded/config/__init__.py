"""
Configuration and API key management.

Import from this package directly instead of the individual submodules.
"""

from __future__ import annotations

from .config import ClientConfig, get_client_config
from .credentials import (
    clear_api_key,
    get_api_key,
    get_credential_storage_info,
    resolve_api_key,
    save_api_key,
)

__all__ = [
    "ClientConfig",
    "clear_api_key",
    "get_api_key",
    "get_client_config",
    "get_credential_storage_info",
    "resolve_api_key",
    "save_api_key",
]
