"""Case-insensitive lookups over header mappings."""

from __future__ import annotations

from collections.abc import Mapping


def get_header_name(headers: Mapping[str, str], name: str) -> str | None:
    """Return the key in ``headers`` matching ``name`` regardless of case."""
    wanted = name.lower()
    for key in headers:
        if key.lower() == wanted:
            return key
    return None


def has_header(headers: Mapping[str, str], name: str) -> bool:
    return get_header_name(headers, name) is not None
