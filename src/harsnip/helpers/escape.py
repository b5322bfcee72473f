"""String escaping for generated source literals."""

from __future__ import annotations

import shlex
from typing import Any

_CONTROL_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(
    value: Any,
    delimiter: str = '"',
    escape_char: str = "\\",
    escape_newlines: bool = True,
) -> str:
    """Escape ``value`` for use inside a ``delimiter``-quoted literal.

    Escapes the escape character itself, the delimiter, and (unless
    disabled) newlines, carriage returns and tabs. Other characters pass
    through unchanged.
    """
    out = []
    for char in str(value):
        if char == escape_char or char == delimiter:
            out.append(f"{escape_char}{char}")
        elif char in _CONTROL_ESCAPES and escape_newlines:
            out.append(_CONTROL_ESCAPES[char])
        else:
            out.append(char)
    return "".join(out)


def escape_for_single_quotes(value: Any) -> str:
    return escape_string(value, delimiter="'")


def escape_for_double_quotes(value: Any) -> str:
    return escape_string(value, delimiter='"')


def shell_quote(value: Any) -> str:
    """Quote ``value`` for a POSIX shell, leaving safe words bare."""
    return shlex.quote(str(value))
