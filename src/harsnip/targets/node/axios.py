"""HTTP code snippet generator for Node.js using Axios."""

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
    """Render an axios.request() call.

    Options:
        indent: Indentation unit (default two spaces).
    """
    opts: dict[str, Any] = {"indent": "  ", **(options or {})}
    code = CodeBuilder(indent=opts["indent"])
    post_data = request.post_data
    headers = dict(request.all_headers)

    code.push("const axios = require('axios');")

    members: list[tuple[str, str]] = [
        ("method", f"'{request.method.upper()}'"),
        ("url", f"'{escape_for_single_quotes(request.url)}'"),
    ]
    if request.query_obj:
        members.append(("params", js_literal(dict(request.query_obj))))

    data: str | None = None
    if post_data.params_obj:
        code.push("const { URLSearchParams } = require('url');").blank()
        code.push("const encodedParams = new URLSearchParams();")
        for name, value in post_data.params_obj.items():
            code.push(
                f"encodedParams.set('{escape_for_single_quotes(name)}', "
                f"'{escape_for_single_quotes(value)}');"
            )
        data = "encodedParams"
    elif post_data.mime_type == "multipart/form-data" and post_data.params:
        code.push("const FormData = require('form-data');").blank()
        code.push("const form = new FormData();")
        for param in post_data.params:
            value = param.get("fileName") or param.get("value") or ""
            name = escape_for_single_quotes(param["name"])
            code.push(f"form.append('{name}', '{escape_for_single_quotes(value)}');")
        # form-data sets the content type with its own boundary
        content_type = get_header_name(headers, "content-type")
        if content_type is not None:
            del headers[content_type]
        data = "form"
    elif post_data.mime_type == "application/json" and post_data.json_obj is not False:
        data = js_literal(post_data.json_obj)
    elif post_data.text:
        data = js_literal(post_data.text)

    if headers:
        members.append(("headers", js_literal(headers)))
    if data is not None:
        members.append(("data", data))

    code.blank()
    code.push("const options = {")
    for index, (key, value) in enumerate(members):
        comma = "," if index < len(members) - 1 else ""
        code.push(f"{key}: {value}{comma}", 1)
    code.push("};").blank()

    code.push("try {")
    code.push("const { data } = await axios.request(options);", 1)
    code.push("console.log(data);", 1)
    code.push("} catch (error) {")
    code.push("console.error(error);", 1)
    code.push("}")

    return code.join()


client = Client(
    info=ClientInfo(
        key="axios",
        title="Axios",
        link="https://github.com/axios/axios",
        description="Promise based HTTP client for the browser and node.js",
    ),
    convert=convert,
)
