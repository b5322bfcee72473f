"""HTTP code snippet generator for Java using OkHttp."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import escape_for_double_quotes
from harsnip.registry import Client, ClientInfo

_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD"})
_METHODS_WITH_BODY = frozenset({"POST", "PUT", "DELETE", "PATCH"})


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render an OkHttp request.

    Options:
        indent: Indentation unit (default two spaces).
    """
    opts: dict[str, Any] = {"indent": "  ", **(options or {})}
    code = CodeBuilder(indent=opts["indent"])
    post_data = request.post_data
    method = request.method.upper()

    code.push("OkHttpClient client = new OkHttpClient();").blank()

    if post_data.text:
        if post_data.boundary:
            media_type = f"{post_data.mime_type}; boundary={post_data.boundary}"
        else:
            media_type = post_data.mime_type
        code.push(f'MediaType mediaType = MediaType.parse("{media_type}");')
        code.push(f"RequestBody body = RequestBody.create(mediaType, {json.dumps(post_data.text)});")

    code.push("Request request = new Request.Builder()")
    code.push(f'.url("{request.full_url}")', 1)

    body = "body" if post_data.text else "null"
    if method not in _METHODS:
        code.push(f'.method("{method}", {body})', 1)
    elif method in _METHODS_WITH_BODY:
        code.push(f".{method.lower()}({body})", 1)
    else:
        code.push(f".{method.lower()}()", 1)

    for key, value in request.all_headers.items():
        code.push(f'.addHeader("{key}", "{escape_for_double_quotes(value)}")', 1)

    code.push(".build();", 1).blank()
    code.push("Response response = client.newCall(request).execute();")

    return code.join()


client = Client(
    info=ClientInfo(
        key="okhttp",
        title="OkHttp",
        link="http://square.github.io/okhttp/",
        description="An HTTP Request Client Library",
    ),
    convert=convert,
)
