"""Tests for hellosign_embedded.network.transport: default urllib transport."""

import base64
import io
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from hellosign_embedded.errors import ConfigError, TransportError
from hellosign_embedded.network import transport
from hellosign_embedded.network.protocol import HTTPRequest


def _make_urllib_response(data: bytes, status: int = 200) -> MagicMock:
    """Build a mock urllib response that works with chunked read()."""
    mock = MagicMock()
    mock.read.side_effect = [data, b""]
    mock.status = status
    mock.headers.items.return_value = [("Content-Type", "application/json")]
    mock.__enter__ = MagicMock(return_value=mock)
    mock.__exit__ = MagicMock(return_value=False)
    return mock


def _get(url: str = "https://api.hellosign.com/v3/signature_request/list") -> HTTPRequest:
    return HTTPRequest(method="GET", url=url)


# ── Construction / auth ──────────────────────────────────────────────


def test_requires_api_key():
    with pytest.raises(ConfigError):
        transport.UrllibTransport("")


def test_basic_auth_header_uses_empty_password():
    header = transport.basic_auth_header("my-api-key")
    assert header.startswith("Basic ")
    assert base64.b64decode(header[len("Basic ") :]) == b"my-api-key:"


def test_send_attaches_auth_and_headers():
    mock_response = _make_urllib_response(b'{"ok": true}')
    request = HTTPRequest(
        method="POST",
        url="https://api.hellosign.com/v3/signature_request/update/abc",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        body=b"signature_id=x",
    )
    with patch.object(transport, "_safe_urlopen", return_value=mock_response) as mock_open:
        transport.UrllibTransport("my-api-key").send(request, timeout=9)

    req = mock_open.call_args.args[0]
    assert mock_open.call_args.kwargs["timeout"] == 9
    assert req.get_method() == "POST"
    assert req.data == b"signature_id=x"
    assert req.get_header("Authorization") == transport.basic_auth_header("my-api-key")
    assert req.get_header("Content-type") == "application/x-www-form-urlencoded"
    assert req.get_header("Accept") == "application/json"


# ── Responses ────────────────────────────────────────────────────────


def test_send_success():
    mock_response = _make_urllib_response(b'{"signature_requests": []}')
    with patch.object(transport, "_safe_urlopen", return_value=mock_response):
        response = transport.UrllibTransport("k").send(_get(), timeout=5)
    assert response.status_code == 200
    assert response.body == b'{"signature_requests": []}'
    assert response.headers == {"Content-Type": "application/json"}


def test_http_error_status_returned_with_body():
    body = b'{"error": {"error_name": "deleted", "error_msg": "deleted: gone"}}'
    http_error = urllib.error.HTTPError(
        "https://api.hellosign.com/v3/x", 410, "Gone", {}, io.BytesIO(body)
    )
    with patch.object(transport, "_safe_urlopen", side_effect=http_error):
        response = transport.UrllibTransport("k").send(_get(), timeout=5)
    assert response.status_code == 410
    assert response.body == body


def test_url_error_raises_transport_error():
    with (
        patch.object(
            transport, "_safe_urlopen", side_effect=urllib.error.URLError("Name not resolved")
        ),
        pytest.raises(TransportError, match="Name not resolved") as exc_info,
    ):
        transport.UrllibTransport("k").send(_get(), timeout=5)
    assert exc_info.value.retryable is True


def test_timeout_raises_transport_error():
    with (
        patch.object(transport, "_safe_urlopen", side_effect=TimeoutError()),
        pytest.raises(TransportError, match="timed out after 5s"),
    ):
        transport.UrllibTransport("k").send(_get(), timeout=5)


def test_rejects_plain_http():
    with (
        patch.object(transport, "_safe_urlopen") as mock_open,
        pytest.raises(TransportError, match="Only HTTPS"),
    ):
        transport.UrllibTransport("k").send(_get("http://api.hellosign.com/v3/x"), timeout=5)
    mock_open.assert_not_called()


def test_response_size_limit():
    chunk = b"x" * 1024
    mock_response = MagicMock()
    mock_response.read.return_value = chunk
    with (
        patch.object(transport, "MAX_RESPONSE_SIZE", 4096),
        pytest.raises(TransportError, match="exceeds"),
    ):
        transport._read_with_limit(mock_response, "https://example.com")


# ── Redirect safety ──────────────────────────────────────────────────


def test_redirect_https_to_http_refused():
    handler = transport._SafeRedirectHandler()
    req = MagicMock()
    req.full_url = "https://api.hellosign.com/v3/x"
    with pytest.raises(TransportError, match="Refused redirect"):
        handler.redirect_request(req, None, 302, "Found", {}, "http://evil.example.com/")
