"""multipart/form-data body rendering via urllib3."""

from __future__ import annotations

from typing import Union

from urllib3 import encode_multipart_formdata

from .form_encoder import EncodedForm

__all__ = ["encode_multipart"]

_Field = tuple[str, Union[str, tuple[str, bytes, str]]]


def encode_multipart(form: EncodedForm, boundary: str | None = None) -> tuple[bytes, str]:
    """
    Render an encoded form as a multipart/form-data body.

    Fields are written first, in order, followed by the file parts in
    order. The same form and boundary always produce identical bytes.

    Args:
        form: Ordered fields and file parts.
        boundary: Fixed boundary (tests); urllib3 picks a random one if None.

    Returns:
        (body, content_type) where content_type carries the boundary.
    """
    fields: list[_Field] = list(form.fields)
    fields.extend((part.name, (part.filename, part.data, part.content_type)) for part in form.files)
    return encode_multipart_formdata(fields, boundary=boundary)
