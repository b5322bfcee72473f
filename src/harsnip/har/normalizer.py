"""HAR request normalization.

Turns a raw HAR request object into a :class:`NormalizedRequest`: the URL
split into its base and fully merged forms, header/cookie/query maps, and a
canonical body description that renderers can consume without re-parsing.
"""

from __future__ import annotations

import copy
import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal
from urllib.parse import SplitResult, parse_qsl, quote, urlsplit, urlunsplit

from harsnip.har.multipart import MULTIPART_BOUNDARY, iter_multipart_chunks
from harsnip.helpers.headers import get_header_name
from harsnip.logging import get_logger

LOG = get_logger(__name__)

HTTP2_VERSION = re.compile(r"^HTTP/2")

MULTIPART_MIME_TYPES = frozenset(
    {
        "multipart/mixed",
        "multipart/related",
        "multipart/form-data",
        "multipart/alternative",
    }
)
JSON_MIME_TYPES = frozenset(
    {
        "text/json",
        "text/x-json",
        "application/json",
        "application/x-json",
    }
)
FORM_URLENCODED = "application/x-www-form-urlencoded"
DEFAULT_MIME_TYPE = "application/octet-stream"

# Characters left unescaped by JavaScript's encodeURIComponent and Node's
# querystring module; generated URLs and cookie headers match theirs.
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class PostData:
    """Canonical request body.

    Attributes:
        mime_type: Canonical MIME type.
        text: Body text; always a string, possibly empty.
        params: Original HAR params, if any.
        boundary: Multipart boundary, only set for generated multipart bodies.
        json_obj: Parsed JSON body, or False when not JSON / not parseable.
        params_obj: Form field map for urlencoded bodies, or False.
    """

    mime_type: str
    text: str = ""
    params: tuple[Mapping[str, Any], ...] = ()
    boundary: str | None = None
    json_obj: Any = False
    params_obj: Mapping[str, str] | Literal[False] = False


@dataclass(frozen=True)
class NormalizedRequest:
    """Fully resolved view of a single HAR request."""

    method: str
    http_version: str
    url: str
    full_url: str
    uri: SplitResult
    query_obj: Mapping[str, str]
    headers_obj: Mapping[str, str]
    cookies_obj: Mapping[str, str]
    all_headers: Mapping[str, str]
    post_data: PostData
    cookies: tuple[Mapping[str, str], ...] = field(default=())


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way encodeURIComponent does."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def stringify_query(params: Mapping[str, str]) -> str:
    """Serialize a name/value map as ``a=1&b=2``, spaces as ``%20``."""
    return "&".join(
        f"{encode_uri_component(name)}={encode_uri_component(value)}"
        for name, value in params.items()
    )


def _fold_pairs(pairs: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Fold name/value pairs into a dict; later duplicates win."""
    result: dict[str, str] = {}
    for pair in pairs:
        result[pair["name"]] = pair.get("value") or ""
    return result


def apply_request_defaults(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Fill optional HAR request fields so that validation can succeed.

    Works on a deep copy; ``raw`` is left untouched.

    Args:
        raw: Raw (possibly partial) HAR request object.

    Returns:
        A new request dict with defaults applied.
    """
    request = copy.deepcopy(dict(raw))
    request["httpVersion"] = request.get("httpVersion") or "HTTP/1.1"
    request["queryString"] = request.get("queryString") or []
    request["headers"] = request.get("headers") or []
    request["cookies"] = request.get("cookies") or []
    post_data = request.get("postData") or {}
    if isinstance(post_data, Mapping):
        post_data = dict(post_data)
        post_data["mimeType"] = post_data.get("mimeType") or DEFAULT_MIME_TYPE
        post_data["size"] = 0
    request["postData"] = post_data
    request["bodySize"] = 0
    request["headersSize"] = 0
    return request


def _merge_url(url: str, query_string: list[dict[str, Any]]) -> tuple[str, str, SplitResult, dict[str, str]]:
    """Merge explicit and URL-embedded query parameters.

    Explicit ``queryString`` entries are folded first, then the URL's own
    query is laid over them. A key present in both keeps its position from
    the explicit list and takes the URL's value.
    """
    query_obj = _fold_pairs(query_string)
    parts = urlsplit(url)
    for name, value in parse_qsl(parts.query, keep_blank_values=True):
        query_obj[name] = value

    path = parts.path or ("/" if parts.netloc else "")
    base = parts._replace(path=path, query="")
    full = base._replace(query=stringify_query(query_obj))
    return urlunsplit(base), urlunsplit(full), full, query_obj


def _fold_headers(headers: list[dict[str, Any]], http_version: str) -> dict[str, str]:
    lower_case = HTTP2_VERSION.match(http_version) is not None
    headers_obj: dict[str, str] = {}
    for header in headers:
        # HTTP/2 requires lower-case header names
        name = header["name"].lower() if lower_case else header["name"]
        headers_obj[name] = header.get("value") or ""
    return headers_obj


def _fold_cookies(cookies: list[dict[str, Any]]) -> dict[str, str]:
    """Fold cookies so that the first occurrence of a name wins."""
    cookies_obj: dict[str, str] = {}
    for cookie in reversed(cookies):
        cookies_obj[cookie["name"]] = cookie.get("value") or ""
    return cookies_obj


def cookie_header(cookies: Iterable[Mapping[str, Any]]) -> str:
    """Build a ``cookie`` header value from cookies in their original order."""
    return "; ".join(
        f"{encode_uri_component(c['name'])}={encode_uri_component(c.get('value') or '')}"
        for c in cookies
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _canonicalize_body(post_data: Mapping[str, Any], headers_obj: dict[str, str]) -> PostData:
    """Canonicalize the body by declared MIME type.

    May update the ``content-type`` entry of ``headers_obj`` for multipart
    bodies so that the header carries the body's boundary.
    """
    mime_type = post_data.get("mimeType") or DEFAULT_MIME_TYPE
    text = post_data.get("text")
    has_params = post_data.get("params") is not None
    params = tuple(post_data.get("params") or ())

    if mime_type in MULTIPART_MIME_TYPES:
        if not has_params:
            return PostData(mime_type="multipart/form-data", text="", params=params)

        body = "".join(iter_multipart_chunks(params, MULTIPART_BOUNDARY))
        content_type = get_header_name(headers_obj, "content-type") or "content-type"
        headers_obj[content_type] = f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
        return PostData(
            mime_type="multipart/form-data",
            text=body,
            params=params,
            boundary=MULTIPART_BOUNDARY,
        )

    if mime_type == FORM_URLENCODED:
        if not has_params:
            return PostData(mime_type=mime_type, text="", params=params)

        params_obj = _fold_pairs(params)
        return PostData(
            mime_type=mime_type,
            text=stringify_query(params_obj),
            params=params,
            params_obj=MappingProxyType(params_obj),
        )

    if mime_type in JSON_MIME_TYPES:
        if not text:
            return PostData(mime_type="application/json", text=text or "", params=params)
        try:
            json_obj = json.loads(text, parse_constant=_reject_constant)
        except ValueError as exc:
            # Renderers fall back to sending the raw text
            LOG.info("json_body_parse_failed", error=str(exc))
            return PostData(mime_type="text/plain", text=text, params=params)
        return PostData(mime_type="application/json", text=text, params=params, json_obj=json_obj)

    return PostData(mime_type=mime_type, text=text or "", params=params)


def normalize_request(request: Mapping[str, Any]) -> NormalizedRequest:
    """Build a :class:`NormalizedRequest` from a defaulted, validated request.

    Args:
        request: HAR request dict that has been through
            :func:`apply_request_defaults` and passed validation.

    Returns:
        The normalized request.
    """
    url, full_url, uri, query_obj = _merge_url(request["url"], request["queryString"])
    headers_obj = _fold_headers(request["headers"], request["httpVersion"])
    cookies = request["cookies"]
    cookies_obj = _fold_cookies(cookies)
    post_data = _canonicalize_body(request["postData"], headers_obj)

    all_headers = dict(headers_obj)
    if cookies:
        # The synthesized header replaces any explicit lower-case cookie header
        cookie_value = cookie_header(cookies)
        all_headers = {"cookie": cookie_value, **headers_obj}
        all_headers["cookie"] = cookie_value

    return NormalizedRequest(
        method=request["method"],
        http_version=request["httpVersion"],
        url=url,
        full_url=full_url,
        uri=uri,
        query_obj=MappingProxyType(query_obj),
        headers_obj=MappingProxyType(headers_obj),
        cookies_obj=MappingProxyType(cookies_obj),
        all_headers=MappingProxyType(all_headers),
        post_data=post_data,
        cookies=tuple(MappingProxyType(dict(c)) for c in cookies),
    )
