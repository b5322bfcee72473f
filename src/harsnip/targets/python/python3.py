"""HTTP code snippet generator for native Python 3 using http.client."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import escape_for_double_quotes
from harsnip.helpers.literals import python_literal
from harsnip.registry import Client, ClientInfo


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render an http.client request.

    Options:
        indent: Indentation unit for literals (default four spaces).
        pretty: Break dict literals over lines (default True).
    """
    opts: dict[str, Any] = {"indent": "    ", "pretty": True, **(options or {})}
    code = CodeBuilder(indent=opts["indent"])
    uri = request.uri
    connection = "HTTPSConnection" if uri.scheme == "https" else "HTTPConnection"

    code.push("import http.client").blank()
    code.push(f'conn = http.client.{connection}("{uri.netloc}")').blank()

    args = [f'"{request.method.upper()}"']
    path = uri.path + (f"?{uri.query}" if uri.query else "")
    args.append(f'"{escape_for_double_quotes(path)}"')

    if request.post_data.text:
        code.push(f'payload = "{escape_for_double_quotes(request.post_data.text)}"').blank()
        args.append("payload")

    if request.all_headers:
        literal = python_literal(dict(request.all_headers), indent=opts["indent"], pretty=opts["pretty"])
        code.push(f"headers = {literal}").blank()
        if not request.post_data.text:
            args.append("headers=headers")
        else:
            args.append("headers")

    code.push(f"conn.request({', '.join(args)})").blank()
    code.push("res = conn.getresponse()")
    code.push("data = res.read()").blank()
    code.push('print(data.decode("utf-8"))')

    return code.join()


client = Client(
    info=ClientInfo(
        key="python3",
        title="http.client",
        link="https://docs.python.org/3/library/http.client.html",
        description="Python3 HTTP Client",
    ),
    convert=convert,
)
