"""Render Python values as source literals for generated snippets."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from harsnip.helpers.escape import escape_for_double_quotes, escape_for_single_quotes

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _concat(
    opening: str,
    closing: str,
    values: list[str],
    pretty: bool,
    indent: str,
    level: int,
) -> str:
    if not values:
        return f"{opening}{closing}"
    if not pretty:
        return f"{opening}{', '.join(values)}{closing}"
    current = indent * level
    previous = indent * (level - 1)
    joined = f",\n{current}".join(values)
    return f"{opening}\n{current}{joined}\n{previous}{closing}"


def python_literal(value: Any, indent: str = "    ", pretty: bool = True, level: int = 0) -> str:
    """Render ``value`` as a Python literal.

    With ``pretty`` set, mappings of more than one key are broken over
    lines, and so are sequences holding such mappings.
    """
    level += 1
    if value is None:
        return "None"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, int | float):
        return repr(value)
    if isinstance(value, Mapping):
        pairs = [
            f'"{escape_for_double_quotes(k)}": {python_literal(v, indent, pretty, level)}'
            for k, v in value.items()
        ]
        return _concat("{", "}", pairs, pretty and len(pairs) > 1, indent, level)
    if isinstance(value, list | tuple):
        items = [python_literal(v, indent, pretty, level) for v in value]
        multiline = pretty and any(isinstance(v, Mapping) and len(v) > 1 for v in value)
        return _concat("[", "]", items, multiline, indent, level)
    return f'"{escape_for_double_quotes(value)}"'


def js_literal(value: Any, indent: str = "  ", pretty: bool = False, level: int = 0) -> str:
    """Render ``value`` as a JavaScript literal with single-quoted strings."""
    level += 1
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return json.dumps(value)
    if isinstance(value, Mapping):
        pairs = []
        for k, v in value.items():
            key = k if _JS_IDENTIFIER.match(str(k)) else f"'{escape_for_single_quotes(k)}'"
            pairs.append(f"{key}: {js_literal(v, indent, pretty, level)}")
        return _concat("{", "}", pairs, pretty, indent, level)
    if isinstance(value, list | tuple):
        items = [js_literal(v, indent, pretty, level) for v in value]
        return _concat("[", "]", items, pretty, indent, level)
    return f"'{escape_for_single_quotes(value)}'"
