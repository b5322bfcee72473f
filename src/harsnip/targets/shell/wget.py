"""HTTP code snippet generator for the Wget command line tool."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.normalizer import NormalizedRequest
from harsnip.helpers.code_builder import CodeBuilder
from harsnip.helpers.escape import shell_quote
from harsnip.registry import Client, ClientInfo


def convert(request: NormalizedRequest, options: Mapping[str, Any] | None = None) -> str:
    """Render a Wget command.

    Options:
        indent: Continuation indent, or False for a single line (default "  ").
        short: Use short flags (default False).
        verbose: Ask for verbose instead of quiet output (default False).
        insecure_skip_verify: Add ``--no-check-certificate`` (default False).
    """
    opts: dict[str, Any] = {
        "indent": "  ",
        "short": False,
        "verbose": False,
        "insecure_skip_verify": False,
        **(options or {}),
    }
    indent = opts["indent"]
    short = opts["short"]
    join = f" \\\n{indent}" if indent is not False else " "
    code = CodeBuilder(indent=indent or "", join=join)

    if opts["verbose"]:
        code.push(f"wget {'-v' if short else '--verbose'}")
    else:
        code.push(f"wget {'-q' if short else '--quiet'}")

    code.push(f"--method {shell_quote(request.method)}")

    if opts["insecure_skip_verify"]:
        code.push("--no-check-certificate")

    for key, value in request.all_headers.items():
        header = f"{key}: {value}"
        code.push(f"--header {shell_quote(header)}")

    if request.post_data.text:
        code.push(f"--body-data {shell_quote(request.post_data.text)}")

    code.push("-O" if short else "--output-document")
    code.push(f"- {shell_quote(request.full_url)}")

    return code.join()


client = Client(
    info=ClientInfo(
        key="wget",
        title="Wget",
        link="https://www.gnu.org/software/wget/",
        description="a free software package for retrieving files using HTTP, HTTPS",
    ),
    convert=convert,
)
