"""HTTP code snippet generator for the browser Fetch API."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import escape_for_single_quotes
from harsnip.helpers.headers import get_header_name
from harsnip.helpers.literals import js_literal
from harsnip.registry import Client, ClientInfo


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render a fetch() call.

    Options:
        indent: Indentation unit (default two spaces).
    """
    opts: dict[str, Any] = {"indent": "  ", **(options or {})}
    code = CodeBuilder(indent=opts["indent"])
    post_data = request.post_data
    headers = dict(request.all_headers)

    code.push(f"const url = '{escape_for_single_quotes(request.full_url)}';")

    body: str | None = None
    if post_data.mime_type == "multipart/form-data" and post_data.params:
        code.push("const form = new FormData();")
        for param in post_data.params:
            value = param.get("fileName") or param.get("value") or ""
            name = escape_for_single_quotes(param["name"])
            code.push(f"form.append('{name}', '{escape_for_single_quotes(value)}');")
        # the browser sets the multipart content type with its own boundary
        content_type = get_header_name(headers, "content-type")
        if content_type is not None:
            del headers[content_type]
        body = "form"
    elif post_data.params_obj:
        body = f"new URLSearchParams({js_literal(dict(post_data.params_obj))})"
    elif post_data.mime_type == "application/json" and post_data.json_obj is not False:
        body = f"JSON.stringify({js_literal(post_data.json_obj)})"
    elif post_data.text:
        body = js_literal(post_data.text)

    members = [f"method: '{request.method.upper()}'"]
    if headers:
        members.append(f"headers: {js_literal(headers)}")
    if body is not None:
        members.append(f"body: {body}")

    code.push(f"const options = {{{', '.join(members)}}};").blank()
    code.push("try {")
    code.push("const response = await fetch(url, options);", 1)
    code.push("const data = await response.json();", 1)
    code.push("console.log(data);", 1)
    code.push("} catch (error) {")
    code.push("console.error(error);", 1)
    code.push("}")

    return code.join()


client = Client(
    info=ClientInfo(
        key="fetch",
        title="fetch",
        link="https://developer.mozilla.org/en-US/docs/Web/API/WindowOrWorkerGlobalScope/fetch",
        description="Perform asynchronous HTTP requests with the Fetch API",
    ),
    convert=convert,
)
