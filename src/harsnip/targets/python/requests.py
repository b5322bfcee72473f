"""HTTP code snippet generator for Python using Requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import escape_for_double_quotes
from harsnip.helpers.headers import get_header_name
from harsnip.helpers.literals import python_literal
from harsnip.registry import Client, ClientInfo

_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render a Requests call.

    Options:
        indent: Indentation unit for literals (default four spaces).
        pretty: Break dict literals over lines (default True).
    """
    opts: dict[str, Any] = {"indent": "    ", "pretty": True, **(options or {})}
    code = CodeBuilder(indent=opts["indent"]).add_postprocessor(_collapse_blank_lines)
    post_data = request.post_data

    def literal(value: Any) -> str:
        return python_literal(value, indent=opts["indent"], pretty=opts["pretty"])

    code.push("import requests").blank()
    code.push(f'url = "{escape_for_double_quotes(request.url)}"').blank()

    args = ["url"]
    if request.query_obj:
        code.push(f"querystring = {literal(dict(request.query_obj))}").blank()
        args.append("params=querystring")

    headers = dict(request.all_headers)
    if post_data.mime_type == "application/json" and post_data.json_obj is not False:
        code.push(f"payload = {literal(post_data.json_obj)}")
        args.append("json=payload")
    elif post_data.mime_type == "multipart/form-data" and post_data.params:
        files = {}
        fields = {}
        for param in post_data.params:
            if param.get("fileName"):
                files[param["name"]] = param["fileName"]
            else:
                fields[param["name"]] = param.get("value") or ""
        if files:
            entries = [
                f'"{escape_for_double_quotes(name)}": open("{escape_for_double_quotes(path)}", "rb")'
                for name, path in files.items()
            ]
            code.push("files = {" + ", ".join(entries) + "}")
            args.append("files=files")
        if fields:
            code.push(f"payload = {literal(fields)}")
            args.append("data=payload")
        # requests generates the multipart boundary itself
        content_type = get_header_name(headers, "content-type")
        if content_type is not None:
            del headers[content_type]
    elif post_data.params_obj:
        code.push(f"payload = {literal(dict(post_data.params_obj))}")
        args.append("data=payload")
    elif post_data.text:
        code.push(f'payload = "{escape_for_double_quotes(post_data.text)}"')
        args.append("data=payload")

    if headers:
        code.push(f"headers = {literal(headers)}")
        args.append("headers=headers")

    if len(args) > 1:
        code.blank()

    method = request.method.upper()
    if method in _METHODS:
        call = f"response = requests.{method.lower()}({', '.join(args)})"
    else:
        call = f'response = requests.request("{method}", {", ".join(args)})'
    code.push(call).blank()
    code.push("print(response.text)")

    return code.join()


def _collapse_blank_lines(snippet: str) -> str:
    while "\n\n\n" in snippet:
        snippet = snippet.replace("\n\n\n", "\n\n")
    return snippet


client = Client(
    info=ClientInfo(
        key="requests",
        title="Requests",
        link="http://docs.python-requests.org/en/latest/api/#requests.request",
        description="Requests HTTP library",
    ),
    convert=convert,
)
