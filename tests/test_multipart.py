"""Tests for hellosign_embedded.network.multipart: body rendering."""

import re

from conftest import split_multipart

from hellosign_embedded.network.form_encoder import EncodedForm, FilePart, build_embedded_form
from hellosign_embedded.network.multipart import encode_multipart


def test_content_type_carries_boundary():
    _, content_type = encode_multipart(EncodedForm(fields=(("a", "1"),)), boundary="XyZ")
    assert content_type == "multipart/form-data; boundary=XyZ"


def test_exact_bytes_for_single_field():
    body, _ = encode_multipart(EncodedForm(fields=(("title", "hi"),)), boundary="B")
    assert body == (
        b"--B\r\n"
        b'Content-Disposition: form-data; name="title"\r\n'
        b"\r\n"
        b"hi\r\n"
        b"--B--\r\n"
    )


def test_file_part_headers():
    form = EncodedForm(
        fields=(),
        files=(FilePart("file[0]", "offer_letter.pdf", "application/pdf", b"%PDF-1.7"),),
    )
    body, content_type = encode_multipart(form, boundary="B")
    (part,) = split_multipart(body, content_type)
    assert part["name"] == "file[0]"
    assert part["filename"] == "offer_letter.pdf"
    assert "Content-Type: application/pdf" in part["headers"]
    assert part["content"] == b"%PDF-1.7"


def test_deterministic_with_fixed_boundary():
    form = EncodedForm(fields=(("a", "1"), ("b", "2")))
    assert encode_multipart(form, boundary="B") == encode_multipart(form, boundary="B")


def test_random_boundary_per_call():
    form = EncodedForm(fields=(("a", "1"),))
    _, first = encode_multipart(form)
    _, second = encode_multipart(form)
    assert first != second
    assert re.fullmatch(r"multipart/form-data; boundary=\S+", first)


def test_utf8_values():
    body, content_type = encode_multipart(EncodedForm(fields=(("message", "Привет ✓"),)))
    (part,) = split_multipart(body, content_type)
    assert part["content"].decode("utf-8") == "Привет ✓"


def test_quotes_in_filename_escaped():
    form = EncodedForm(fields=(), files=(FilePart("file[0]", 'a"b.pdf', "application/pdf", b""),))
    body, _ = encode_multipart(form, boundary="B")
    assert b'filename="a%22b.pdf"' in body


def test_embedded_request_round_trip(embedded_request, valid_pdf_bytes):
    """Splitting the body back reproduces every field name, value, and index."""
    form = build_embedded_form(embedded_request)
    body, content_type = encode_multipart(form)
    parts = split_multipart(body, content_type)

    fields = [(p["name"], p["content"].decode()) for p in parts if p["filename"] is None]
    assert fields == list(form.fields)

    files = [p for p in parts if p["filename"] is not None]
    assert [p["name"] for p in files] == ["file[0]", "file[1]"]
    assert all(p["content"] == valid_pdf_bytes for p in files)

    by_name = dict(fields)
    for d, document_fields in enumerate(embedded_request.form_fields_per_document):
        for f, form_field in enumerate(document_fields):
            prefix = f"form_fields_per_document[{d}][{f}]"
            assert by_name[f"{prefix}[api_id]"] == form_field.api_id
            assert int(by_name[f"{prefix}[signer]"]) == form_field.signer


def test_field_names_escaped_html5_style():
    """Quotes are percent-encoded and backslashes are left alone."""
    form = EncodedForm(fields=(('metadata[a"b]', "1"), ("metadata[c\\d]", "2")))
    body, content_type = encode_multipart(form, boundary="B")
    assert b'name="metadata[a%22b]"' in body
    assert b'name="metadata[c\\d]"' in body
    assert [p["content"] for p in split_multipart(body, content_type)] == [b"1", b"2"]
