"""Shared test fixtures for the hellosign_embedded test suite."""

from __future__ import annotations

import re
from pathlib import Path
from unittest.mock import Mock

import pytest

from hellosign_embedded.models import DocumentFormField, EmbeddedRequest, Signer
from hellosign_embedded.network.protocol import HTTPResponse

FIXTURES_DIR = Path(__file__).parent / "fixtures"

_NAME_PARAM = re.compile(rb'name="([^"]*)"')
_FILENAME_PARAM = re.compile(rb'filename="([^"]*)"')


def load_fixture(name: str) -> bytes:
    """Read a recorded response body from tests/fixtures."""
    return (FIXTURES_DIR / f"{name}.json").read_bytes()


def split_multipart(body: bytes, content_type: str) -> list[dict[str, object]]:
    """Split a multipart body into parts: name, filename, headers, content."""
    boundary = content_type.split("boundary=", 1)[1]
    chunks = body.split(b"--" + boundary.encode("ascii"))
    assert chunks[0] == b""
    assert chunks[-1] == b"--\r\n"
    parts: list[dict[str, object]] = []
    for chunk in chunks[1:-1]:
        assert chunk.startswith(b"\r\n")
        assert chunk.endswith(b"\r\n")
        head, _, content = chunk[2:-2].partition(b"\r\n\r\n")
        name = _NAME_PARAM.search(head)
        filename = _FILENAME_PARAM.search(head)
        parts.append(
            {
                "name": name.group(1).decode() if name else None,
                "filename": filename.group(1).decode() if filename else None,
                "headers": head.decode(),
                "content": content,
            }
        )
    return parts


@pytest.fixture
def mock_transport():
    """Create a mock transport that answers every request with HTTP 200 and no body."""
    from hellosign_embedded.network.transport import UrllibTransport

    transport = Mock(spec=UrllibTransport)
    transport.send.return_value = HTTPResponse(status_code=200, body=b"")
    return transport


@pytest.fixture
def replay(mock_transport):
    """Queue a recorded fixture (or raw body) as the transport's next response."""

    def _replay(fixture: str | None = None, *, status: int = 200, body: bytes = b"") -> Mock:
        payload = load_fixture(fixture) if fixture is not None else body
        mock_transport.send.return_value = HTTPResponse(status_code=status, body=payload)
        return mock_transport

    return _replay


@pytest.fixture
def valid_pdf_bytes():
    """Create a minimal valid PDF using pikepdf."""
    import io

    import pikepdf

    pdf = pikepdf.Pdf.new()
    pdf.add_blank_page(page_size=(612, 792))
    buf = io.BytesIO()
    pdf.save(buf)
    return buf.getvalue()


@pytest.fixture
def offer_letters(tmp_path, valid_pdf_bytes):
    """Two open handles on an on-disk PDF, closed after the test."""
    path = tmp_path / "offer_letter.pdf"
    path.write_bytes(valid_pdf_bytes)
    with path.open("rb") as first, path.open("rb") as second:
        yield [first, second]


@pytest.fixture
def embedded_request(offer_letters):
    """An embedded request with two documents, two signers, and one field per document."""
    return EmbeddedRequest(
        test_mode=True,
        client_id="client-123",
        files=offer_letters,
        title="cool title",
        subject="awesome",
        message="cool message bro",
        signers=[
            Signer(name="Freddy Rangel", email="freddy@hellosign.com"),
            Signer(name="Frederick Rangel", email="frederick.rangel@gmail.com"),
        ],
        cc_email_addresses=["no@cats.com", "no@dogs.com"],
        use_text_tags=False,
        hide_text_tags=True,
        metadata={"no": "cats", "more": "dogs"},
        form_fields_per_document=[
            [
                DocumentFormField(
                    api_id="api_id",
                    name="display name",
                    type="text",
                    x=123,
                    y=456,
                    width=678,
                    required=True,
                    signer=0,
                )
            ],
            [
                DocumentFormField(
                    api_id="api_id_2",
                    name="display name 2",
                    type="text",
                    x=123,
                    y=456,
                    width=678,
                    required=True,
                    signer=1,
                )
            ],
        ],
    )
