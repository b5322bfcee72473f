"""Raw HTTP/1.1 request message."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.headers import has_header
from harsnip.registry import Client, ClientInfo

CRLF = "\r\n"

_WORD_START = re.compile(r"(^|-)(\w)")


def _capitalize_header(name: str) -> str:
    return _WORD_START.sub(lambda m: m.group(0).upper(), name.lower())


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render the request as it would go over the wire.

    Options:
        absolute_uri: Use the full URL in the request line (default False).
        auto_content_length: Add Content-Length when missing (default True).
        auto_host: Add Host when missing (default True).
    """
    opts: dict[str, Any] = {
        "absolute_uri": False,
        "auto_content_length": True,
        "auto_host": True,
        **(options or {}),
    }
    code = CodeBuilder(join=CRLF)
    uri = request.uri
    post_data = request.post_data

    if opts["absolute_uri"]:
        target = request.full_url
    else:
        target = (uri.path or "/") + (f"?{uri.query}" if uri.query else "")
    code.push(f"{request.method} {target} {request.http_version}")

    headers = {_capitalize_header(key): value for key, value in request.all_headers.items()}
    if opts["auto_host"] and not has_header(headers, "host"):
        # userinfo never goes on the wire
        headers["Host"] = uri.netloc.rpartition("@")[2]
    if opts["auto_content_length"] and post_data.text and not has_header(headers, "content-length"):
        headers["Content-Length"] = str(len(post_data.text.encode("utf-8")))

    for key, value in headers.items():
        code.push(f"{key}: {value}")

    return f"{code.join()}{CRLF}{CRLF}{post_data.text}"


client = Client(
    info=ClientInfo(
        key="http1.1",
        title="HTTP/1.1",
        link="https://tools.ietf.org/html/rfc7230",
        description="HTTP/1.1 request string in accordance with RFC 7230",
    ),
    convert=convert,
)
