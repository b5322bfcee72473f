"""HTTP code snippet generator for the HTTPie command line tool."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import shell_quote
from harsnip.registry import Client, ClientInfo


def _flags(opts: Mapping[str, Any]) -> list[str]:
    short = opts["short"]
    flags = []
    if opts["headers"]:
        flags.append("-h" if short else "--headers")
    if opts["body"]:
        flags.append("-b" if short else "--body")
    if opts["verbose"]:
        flags.append("-v" if short else "--verbose")
    if opts["print"]:
        flags.append(f"{'-p' if short else '--print'}={opts['print']}")
    if opts["insecure_skip_verify"]:
        flags.append("--verify=no")
    if opts["pretty"]:
        flags.append(f"--pretty={opts['pretty']}")
    if opts["timeout"]:
        flags.append(f"--timeout={opts['timeout']}")
    return flags


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render an HTTPie command.

    Options:
        indent: Continuation indent, or False for a single line (default "  ").
        short: Use short flags (default False).
        query_params: Pass query parameters as ``name==value`` items
            instead of in the URL (default False).
        headers, body, verbose: Output selection flags.
        print: Value for ``--print``; pretty: value for ``--pretty``;
        timeout: value for ``--timeout``.
        insecure_skip_verify: Add ``--verify=no`` (default False).
    """
    opts: dict[str, Any] = {
        "indent": "  ",
        "short": False,
        "query_params": False,
        "headers": False,
        "body": False,
        "verbose": False,
        "print": False,
        "pretty": False,
        "timeout": False,
        "insecure_skip_verify": False,
        **(options or {}),
    }
    indent = opts["indent"]
    join = f" \\\n{indent}" if indent is not False else " "
    code = CodeBuilder(indent=indent or "", join=join)
    post_data = request.post_data
    flags = _flags(opts)

    if opts["query_params"]:
        for name, value in request.query_obj.items():
            item = f"{name}=={value}"
            code.push(shell_quote(item))

    for key in sorted(request.all_headers):
        header = f"{key}:{request.all_headers[key]}"
        code.push(shell_quote(header))

    raw = True
    if post_data.mime_type == "application/x-www-form-urlencoded":
        raw = False
        if post_data.params:
            flags.append("-f" if opts["short"] else "--form")
            for param in post_data.params:
                field = f"{param['name']}={param.get('value') or ''}"
                code.push(shell_quote(field))

    cli_flags = f"{' '.join(flags)} " if flags else ""
    url = request.url if opts["query_params"] else request.full_url
    command = f"http {cli_flags}{request.method} {shell_quote(url)}"
    if raw and post_data.text:
        command = f"echo {shell_quote(post_data.text)} | {command}"
    code.unshift(command)

    return code.join()


client = Client(
    info=ClientInfo(
        key="httpie",
        title="HTTPie",
        link="http://httpie.org/",
        description="a CLI, cURL-like tool for humans",
    ),
    convert=convert,
)
