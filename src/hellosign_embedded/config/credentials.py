"""
API key management for hellosign_embedded.

``HELLOSIGN_API_KEY`` wins when set; otherwise the key is looked up in the
system keychain (keyring). Nothing is ever written to disk in plaintext.
"""

from __future__ import annotations

__all__ = [
    "clear_api_key",
    "get_api_key",
    "get_credential_storage_info",
    "resolve_api_key",
    "save_api_key",
]

import logging
import os

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..constants import ENV_API_KEY
from ..errors import ConfigError

_logger = logging.getLogger(__name__)

# Keyring service/entry names for API key storage
_KEYRING_SERVICE = "hellosign_embedded"
_KEYRING_USERNAME = "api_key"


def _has_usable_backend() -> bool:
    module = type(keyring.get_keyring()).__module__ or ""
    return not ("fail" in module or "null" in module)


def get_credential_storage_info() -> str:
    """Return human-readable description of where a saved API key would live."""
    backend = keyring.get_keyring()
    module = type(backend).__module__ or ""
    if not _has_usable_backend():
        return f"No keyring backend available; set {ENV_API_KEY} instead"
    if "macOS" in module:
        return "macOS Keychain"
    if "Windows" in module or "WinVault" in module:
        return "Windows Credential Manager"
    if "SecretService" in module:
        return "Linux Secret Service"
    if "KWallet" in module:
        return "KDE Wallet"
    return f"System keychain ({type(backend).__name__})"


def get_api_key() -> str | None:
    """
    Get the API key saved in the system keychain.

    Returns:
        The API key, or None if none is saved or the keychain is inaccessible.
    """
    try:
        api_key = keyring.get_password(_KEYRING_SERVICE, _KEYRING_USERNAME)
    except KeyringError as e:
        # Expected keyring failure (locked, access denied, no backend)
        _logger.debug("Keyring read failed: %s", e)
        return None
    except (OSError, RuntimeError) as e:
        # OS-level failures from certain keyring backends
        _logger.debug("Keyring backend error: %s", e)
        return None
    return api_key or None


def save_api_key(api_key: str) -> None:
    """
    Save the API key in the system keychain.

    Raises:
        ConfigError: If the key is empty or the keychain rejects it.
    """
    if not api_key or not api_key.strip():
        raise ConfigError("Refusing to save an empty API key")
    try:
        keyring.set_password(_KEYRING_SERVICE, _KEYRING_USERNAME, api_key.strip())
    except (KeyringError, OSError, RuntimeError) as e:
        raise ConfigError(
            f"Cannot save API key to the system keychain ({e}); set {ENV_API_KEY} instead."
        ) from e
    _logger.debug("Saved API key to keyring")


def clear_api_key() -> None:
    """Remove the saved API key from the system keychain."""
    try:
        keyring.delete_password(_KEYRING_SERVICE, _KEYRING_USERNAME)
        _logger.debug("Deleted keyring entry")
    except PasswordDeleteError:
        pass  # nothing stored
    except (KeyringError, OSError, RuntimeError) as e:
        _logger.debug("Keyring delete failed: %s", e)


def resolve_api_key() -> str | None:
    """Resolve the API key from the environment or the keychain.

    Priority: ``HELLOSIGN_API_KEY`` env var > keychain.
    """
    api_key = os.environ.get(ENV_API_KEY, "").strip()
    if api_key:
        _logger.debug("resolve_api_key: source=env")
        return api_key
    api_key = get_api_key()
    _logger.debug("resolve_api_key: source=%s", "keyring" if api_key else "none")
    return api_key
