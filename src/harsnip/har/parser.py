"""HAR input parsing.

Callers hand harsnip either a single HAR request object or a full HAR
document. Both are wrapped in an explicit input variant so that the
snippet session never has to guess what it was given.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from harsnip.exceptions import HARParseError, InputError
from harsnip.logging import get_logger

LOG = get_logger(__name__)


@dataclass(frozen=True)
class FromSingleRequest:
    """Input holding one HAR ``request`` object."""

    request: Mapping[str, Any]

    def requests(self) -> list[Any]:
        """Return the raw request objects carried by this input."""
        if not isinstance(self.request, Mapping):
            raise InputError("A single request must be a JSON object")
        return [self.request]


@dataclass(frozen=True)
class FromHarLog:
    """Input holding a HAR document with ``log.entries``."""

    har: Mapping[str, Any]

    def requests(self) -> list[Any]:
        """Return the raw request objects of every entry, in order.

        Entries without a ``request`` object yield None, which the session
        drops like any other invalid request.
        """
        try:
            validate_har_schema(self.har)
        except HARParseError as exc:
            raise InputError(str(exc)) from exc
        return [
            entry.get("request") if isinstance(entry, Mapping) else None
            for entry in self.har["log"]["entries"]
        ]


SnippetInput = FromSingleRequest | FromHarLog


def is_har_document(data: Any) -> bool:
    """Return True if ``data`` looks like a HAR document (``log.entries`` list)."""
    return (
        isinstance(data, Mapping)
        and isinstance(data.get("log"), Mapping)
        and isinstance(data["log"].get("entries"), list)
    )


def as_input(data: Any) -> SnippetInput:
    """Wrap loaded JSON data in the matching input variant.

    Args:
        data: Parsed JSON: a HAR document or a single request object.

    Returns:
        FromHarLog for HAR documents, FromSingleRequest for request objects.

    Raises:
        InputError: If ``data`` is neither.
    """
    if isinstance(data, FromSingleRequest | FromHarLog):
        return data
    if is_har_document(data):
        return FromHarLog(data)
    if isinstance(data, Mapping) and "log" not in data:
        return FromSingleRequest(data)
    raise InputError("Input must be a HAR document or a HAR request object")


def validate_har_schema(data: Any) -> None:
    """Validate HAR data has required structure.

    Args:
        data: Parsed JSON data from HAR file.

    Raises:
        HARParseError: If required fields are missing.
    """
    if not isinstance(data, Mapping):
        raise HARParseError("HAR file must contain a JSON object")

    if "log" not in data:
        raise HARParseError("HAR file must contain 'log' object")

    log = data["log"]
    if not isinstance(log, Mapping):
        raise HARParseError("'log' must be an object")

    if "entries" not in log:
        raise HARParseError("HAR log must contain 'entries' array")

    entries = log["entries"]
    if not isinstance(entries, list):
        raise HARParseError("'entries' must be an array")


def load_har_string(content: str) -> SnippetInput:
    """Parse HAR or request JSON from a string.

    Args:
        content: JSON text of a HAR document or a single request.

    Returns:
        The matching input variant.

    Raises:
        HARParseError: If content is not valid JSON or has an unusable shape.
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise HARParseError(f"Invalid JSON in HAR content: {exc}") from exc

    if isinstance(data, Mapping) and "log" in data:
        validate_har_schema(data)
    try:
        return as_input(data)
    except InputError as exc:
        raise HARParseError(str(exc)) from exc


def load_har_file(filepath: Path | str) -> SnippetInput:
    """Parse a HAR (or single request) JSON file.

    Args:
        filepath: Path to the file.

    Returns:
        The matching input variant.

    Raises:
        HARParseError: If the file is not valid JSON or has an unusable shape.
        FileNotFoundError: If file does not exist.
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"HAR file not found: {filepath}")

    result = load_har_string(filepath.read_text(encoding="utf-8"))
    LOG.info("har_file_loaded", filepath=str(filepath), kind=type(result).__name__)
    return result
