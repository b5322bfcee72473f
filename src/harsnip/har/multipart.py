"""multipart/form-data body assembly for normalized requests."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from urllib3.fields import RequestField, guess_content_type

# Every multipart body harsnip generates shares this boundary ("api" in
# binary). Snippets and fixtures depend on it being stable.
MULTIPART_BOUNDARY = "---011000010111000001101001"


def _request_field(param: Mapping[str, Any]) -> RequestField:
    filename = param.get("fileName") or None
    field = RequestField(name=param["name"], data=param.get("value") or "", filename=filename)
    content_type = param.get("contentType")
    if filename and not content_type:
        content_type = guess_content_type(filename)
    field.make_multipart(content_type=content_type)
    return field


def iter_multipart_chunks(
    params: Iterable[Mapping[str, Any]],
    boundary: str = MULTIPART_BOUNDARY,
) -> Iterator[str]:
    """Yield the serialized multipart body piece by piece.

    The generator is single-pass. Fields are rendered in ``params`` order;
    file fields carry a ``filename`` and a content type guessed from it
    unless ``contentType`` is given.

    Args:
        params: HAR ``postData.params`` entries.
        boundary: Multipart boundary (without the leading ``--``).

    Yields:
        Body chunks which, joined, form the complete body.
    """
    for param in params:
        field = _request_field(param)
        yield f"--{boundary}\r\n"
        yield field.render_headers()
        yield field.data if isinstance(field.data, str) else field.data.decode("utf-8")
        yield "\r\n"
    yield f"--{boundary}--\r\n"


def build_multipart_body(
    params: Iterable[Mapping[str, Any]],
    boundary: str = MULTIPART_BOUNDARY,
) -> str:
    """Materialize a multipart body.

    Args:
        params: HAR ``postData.params`` entries.
        boundary: Multipart boundary.

    Returns:
        The full body text.
    """
    return "".join(iter_multipart_chunks(params, boundary))
