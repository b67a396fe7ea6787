"""Request encoding, response decoding, and HTTP transport layer."""

from __future__ import annotations

from .protocol import HTTPRequest, HTTPResponse, HTTPTransport
from .transport import UrllibTransport

__all__ = ["HTTPRequest", "HTTPResponse", "HTTPTransport", "UrllibTransport"]
