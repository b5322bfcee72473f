"""HTTP code snippet generator for the cURL command line tool."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest, encode_uri_component
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import shell_quote
from harsnip.helpers.headers import get_header_name
from harsnip.registry import Client, ClientInfo

_SHORT_FLAGS = {
    "request": "-X",
    "url ": "",
    "header": "-H",
    "cookie": "-b",
    "data": "-d",
    "form": "-F",
    "insecure": "-k",
    "http1.0": "-0",
}

_BOUNDARY_PARAM = re.compile(r"; boundary.+?(?=(;|$))")


def _flag(name: str, short: bool) -> str:
    if short:
        return _SHORT_FLAGS[name]
    return f"--{name}"


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render a cURL command.

    Options:
        indent: Continuation indent, or False for a single line (default "  ").
        short: Use short flags such as ``-X`` (default False).
        binary: Send bodies with ``--data-binary`` (default False).
        insecure_skip_verify: Add ``--insecure`` (default False).
    """
    opts: dict[str, Any] = {
        "indent": "  ",
        "short": False,
        "binary": False,
        "insecure_skip_verify": False,
        **(options or {}),
    }
    indent = opts["indent"]
    short = opts["short"]
    join = f" \\\n{indent}" if indent is not False else " "
    code = CodeBuilder(indent=indent or "", join=join)
    post_data = request.post_data

    code.push(f"curl {_flag('request', short)} {request.method}")
    code.push(f"{_flag('url ', short)}{shell_quote(request.full_url)}")

    if opts["insecure_skip_verify"]:
        code.push(_flag("insecure", short))
    if request.http_version == "HTTP/1.0":
        code.push(_flag("http1.0", short))

    headers = dict(request.headers_obj)
    if post_data.mime_type == "multipart/form-data":
        # curl computes its own boundary for --form bodies
        name = get_header_name(headers, "content-type")
        if name is not None:
            headers[name] = _BOUNDARY_PARAM.sub("", headers[name])

    for key in sorted(headers):
        header = f"{key}: {headers[key]}"
        code.push(f"{_flag('header', short)} {shell_quote(header)}")

    cookie = request.all_headers.get("cookie")
    if request.cookies and cookie:
        code.push(f"{_flag('cookie', short)} {shell_quote(cookie)}")

    data_flag = "--data-binary" if opts["binary"] else _flag("data", short)
    if post_data.mime_type == "multipart/form-data":
        for param in post_data.params:
            if param.get("fileName"):
                field = f"{param['name']}=@{param['fileName']}"
            else:
                field = f"{param['name']}={param.get('value') or ''}"
            code.push(f"{_flag('form', short)} {shell_quote(field)}")
    elif post_data.mime_type == "application/x-www-form-urlencoded" and post_data.params:
        for param in post_data.params:
            name = param["name"]
            encoded = encode_uri_component(name)
            if opts["binary"]:
                flag = "--data-binary"
            else:
                flag = "--data-urlencode" if encoded != name else _flag("data", short)
            pair = f"{encoded}={param.get('value') or ''}"
            code.push(f"{flag} {shell_quote(pair)}")
    elif post_data.text:
        code.push(f"{data_flag} {shell_quote(post_data.text)}")

    return code.join()


client = Client(
    info=ClientInfo(
        key="curl",
        title="cURL",
        link="http://curl.haxx.se/",
        description="cURL is a command line tool and library for transferring data with URL syntax",
    ),
    convert=convert,
)
