"""Tests for HAR request normalization."""

from __future__ import annotations

import copy
import dataclasses
from typing import Any
from urllib.parse import parse_qsl, urlsplit

import pytest

from harsnip.har.multipart import MULTIPART_BOUNDARY
from harsnip.har.normalizer import (
    NormalizedRequest,
    apply_request_defaults,
    cookie_header,
    encode_uri_component,
    normalize_request,
    stringify_query,
)


def _normalize(raw: dict[str, Any]) -> NormalizedRequest:
    return normalize_request(apply_request_defaults(raw))


def _request(**overrides: Any) -> dict[str, Any]:
    raw: dict[str, Any] = {"method": "GET", "url": "http://x.test/p"}
    raw.update(overrides)
    return raw


class TestApplyRequestDefaults:
    """Tests for apply_request_defaults."""

    def test_fills_missing_fields(self) -> None:
        request = apply_request_defaults({"method": "GET", "url": "http://x.test/"})

        assert request["httpVersion"] == "HTTP/1.1"
        assert request["queryString"] == []
        assert request["headers"] == []
        assert request["cookies"] == []
        assert request["postData"] == {"mimeType": "application/octet-stream", "size": 0}
        assert request["bodySize"] == 0
        assert request["headersSize"] == 0

    def test_keeps_existing_values(self) -> None:
        request = apply_request_defaults(
            _request(httpVersion="HTTP/2", postData={"mimeType": "text/plain", "text": "hi"})
        )

        assert request["httpVersion"] == "HTTP/2"
        assert request["postData"]["mimeType"] == "text/plain"
        assert request["postData"]["text"] == "hi"

    def test_does_not_mutate_input(self) -> None:
        raw = _request(headers=[{"name": "a", "value": "b"}], postData={"text": "x"})
        original = copy.deepcopy(raw)

        apply_request_defaults(raw)

        assert raw == original


class TestQueryMerge:
    """Tests for query string merging."""

    def test_explicit_then_url_query(self) -> None:
        request = _normalize(
            {
                "method": "GET",
                "url": "http://x.test/p?x=1",
                "queryString": [{"name": "y", "value": "2"}],
                "headers": [],
                "cookies": [],
                "postData": {},
            }
        )

        assert request.url == "http://x.test/p"
        assert request.full_url == "http://x.test/p?y=2&x=1"
        assert dict(request.query_obj) == {"y": "2", "x": "1"}

    def test_url_query_wins_on_collision(self) -> None:
        request = _normalize(
            _request(
                url="http://x.test/p?a=url",
                queryString=[{"name": "a", "value": "explicit"}, {"name": "b", "value": "2"}],
            )
        )

        assert dict(request.query_obj) == {"a": "url", "b": "2"}
        assert request.full_url == "http://x.test/p?a=url&b=2"

    def test_later_explicit_duplicate_overwrites(self) -> None:
        request = _normalize(
            _request(queryString=[{"name": "a", "value": "1"}, {"name": "a", "value": "2"}])
        )

        assert dict(request.query_obj) == {"a": "2"}

    def test_full_url_round_trips_query(self) -> None:
        request = _normalize(
            _request(
                url="http://x.test/search?q=a+b",
                queryString=[
                    {"name": "filter", "value": "x&y=z"},
                    {"name": "emoji", "value": "☃"},
                    {"name": "empty", "value": ""},
                ],
            )
        )

        parsed = dict(parse_qsl(urlsplit(request.full_url).query, keep_blank_values=True))
        assert parsed == dict(request.query_obj)
        assert request.query_obj["q"] == "a b"

    def test_spaces_encoded_as_percent_20(self) -> None:
        request = _normalize(_request(queryString=[{"name": "q", "value": "a b"}]))

        assert request.full_url == "http://x.test/p?q=a%20b"

    def test_no_query(self) -> None:
        request = _normalize(_request())

        assert request.url == request.full_url == "http://x.test/p"
        assert dict(request.query_obj) == {}

    def test_empty_path_becomes_root(self) -> None:
        request = _normalize(_request(url="https://example.com"))

        assert request.url == "https://example.com/"
        assert request.uri.path == "/"

    def test_uri_reflects_full_url(self) -> None:
        request = _normalize(_request(url="https://example.com:8443/a?b=c"))

        assert request.uri.netloc == "example.com:8443"
        assert request.uri.query == "b=c"


class TestHeaders:
    """Tests for header folding."""

    HEADERS = [
        {"name": "Accept", "value": "text/html"},
        {"name": "ACCEPT", "value": "application/json"},
        {"name": "X-Foo", "value": "bar"},
    ]

    def test_http1_keeps_case(self) -> None:
        request = _normalize(_request(headers=self.HEADERS))

        assert dict(request.headers_obj) == {
            "Accept": "text/html",
            "ACCEPT": "application/json",
            "X-Foo": "bar",
        }

    @pytest.mark.parametrize("version", ["HTTP/2", "HTTP/2.0"])
    def test_http2_lower_cases_names(self, version: str) -> None:
        request = _normalize(_request(httpVersion=version, headers=self.HEADERS))

        assert dict(request.headers_obj) == {"accept": "application/json", "x-foo": "bar"}
        assert all(key == key.lower() for key in request.headers_obj)

    def test_later_duplicate_overwrites(self) -> None:
        request = _normalize(
            _request(headers=[{"name": "a", "value": "1"}, {"name": "a", "value": "2"}])
        )

        assert dict(request.headers_obj) == {"a": "2"}


class TestCookies:
    """Tests for cookie folding and the synthesized cookie header."""

    COOKIES = [
        {"name": "a", "value": "1"},
        {"name": "b", "value": "2"},
        {"name": "a", "value": "3"},
    ]

    def test_first_cookie_wins(self) -> None:
        request = _normalize(_request(cookies=self.COOKIES))

        assert request.cookies_obj["a"] == "1"
        assert request.cookies_obj["b"] == "2"

    def test_cookie_header_in_original_order(self) -> None:
        request = _normalize(_request(cookies=self.COOKIES))

        assert request.all_headers["cookie"] == "a=1; b=2; a=3"

    def test_cookie_header_percent_encoded(self) -> None:
        request = _normalize(_request(cookies=[{"name": "na me", "value": "v;al"}]))

        assert request.all_headers["cookie"] == "na%20me=v%3Bal"

    def test_synthesized_cookie_replaces_explicit(self) -> None:
        request = _normalize(
            _request(
                headers=[{"name": "cookie", "value": "stale=1"}, {"name": "accept", "value": "*/*"}],
                cookies=[{"name": "fresh", "value": "2"}],
            )
        )

        assert request.all_headers["cookie"] == "fresh=2"
        assert request.all_headers["accept"] == "*/*"
        assert request.headers_obj["cookie"] == "stale=1"

    def test_differently_cased_cookie_header_kept_alongside(self) -> None:
        request = _normalize(
            _request(
                headers=[{"name": "Cookie", "value": "stale=1"}],
                cookies=[{"name": "fresh", "value": "2"}],
            )
        )

        assert dict(request.all_headers) == {"cookie": "fresh=2", "Cookie": "stale=1"}
        assert list(request.all_headers) == ["cookie", "Cookie"]

    def test_no_cookies_no_header(self) -> None:
        request = _normalize(_request(headers=[{"name": "accept", "value": "*/*"}]))

        assert "cookie" not in request.all_headers
        assert dict(request.all_headers) == {"accept": "*/*"}
        assert dict(request.cookies_obj) == {}


class TestMultipartBody:
    """Tests for multipart body canonicalization."""

    PARAMS = [{"name": "foo", "value": "bar"}]

    @pytest.mark.parametrize(
        "mime_type",
        ["multipart/mixed", "multipart/related", "multipart/form-data", "multipart/alternative"],
    )
    def test_canonical_form_data(self, mime_type: str) -> None:
        request = _normalize(
            _request(method="POST", postData={"mimeType": mime_type, "params": self.PARAMS})
        )

        assert request.post_data.mime_type == "multipart/form-data"
        assert request.post_data.boundary
        assert request.post_data.boundary in request.all_headers["content-type"]

    def test_body_text(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={"mimeType": "multipart/form-data", "params": self.PARAMS},
            )
        )

        assert request.post_data.text == (
            f"--{MULTIPART_BOUNDARY}\r\n"
            'Content-Disposition: form-data; name="foo"\r\n'
            "\r\n"
            "bar\r\n"
            f"--{MULTIPART_BOUNDARY}--\r\n"
        )

    def test_existing_content_type_overwritten_in_place(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                headers=[{"name": "Content-Type", "value": "multipart/form-data"}],
                postData={"mimeType": "multipart/form-data", "params": self.PARAMS},
            )
        )

        assert "content-type" not in request.headers_obj
        assert request.headers_obj["Content-Type"] == (
            f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
        )

    def test_content_type_inserted_when_missing(self) -> None:
        request = _normalize(
            _request(method="POST", postData={"mimeType": "multipart/form-data", "params": self.PARAMS})
        )

        assert request.headers_obj["content-type"] == (
            f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"
        )

    def test_no_params(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                headers=[{"name": "content-type", "value": "multipart/form-data"}],
                postData={"mimeType": "multipart/mixed", "text": "ignored"},
            )
        )

        assert request.post_data.mime_type == "multipart/form-data"
        assert request.post_data.text == ""
        assert request.post_data.boundary is None
        assert request.headers_obj["content-type"] == "multipart/form-data"

    def test_empty_params_list_builds_empty_form(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                headers=[{"name": "Content-Type", "value": "multipart/form-data"}],
                postData={"mimeType": "multipart/form-data", "text": "ignored", "params": []},
            )
        )

        assert request.post_data.text == f"--{MULTIPART_BOUNDARY}--\r\n"
        assert request.post_data.boundary == MULTIPART_BOUNDARY
        assert request.headers_obj["Content-Type"] == f"multipart/form-data; boundary={MULTIPART_BOUNDARY}"


class TestUrlEncodedBody:
    """Tests for application/x-www-form-urlencoded bodies."""

    def test_text_recomputed_from_params(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={
                    "mimeType": "application/x-www-form-urlencoded",
                    "text": "stale=1",
                    "params": [{"name": "a", "value": "1"}, {"name": "b", "value": "2"}],
                },
            )
        )

        assert request.post_data.text == "a=1&b=2"
        assert dict(request.post_data.params_obj) == {"a": "1", "b": "2"}

    def test_later_duplicate_param_overwrites(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={
                    "mimeType": "application/x-www-form-urlencoded",
                    "params": [{"name": "a", "value": "1"}, {"name": "a", "value": "2"}],
                },
            )
        )

        assert request.post_data.text == "a=2"

    def test_values_encoded(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={
                    "mimeType": "application/x-www-form-urlencoded",
                    "params": [{"name": "msg", "value": "hello world&more"}],
                },
            )
        )

        assert request.post_data.text == "msg=hello%20world%26more"

    def test_no_params_empties_text(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={"mimeType": "application/x-www-form-urlencoded", "text": "a=1"},
            )
        )

        assert request.post_data.text == ""
        assert request.post_data.params_obj is False

    def test_empty_params_list_gives_empty_form_map(self) -> None:
        request = _normalize(
            _request(
                method="POST",
                postData={"mimeType": "application/x-www-form-urlencoded", "text": "a=1", "params": []},
            )
        )

        assert request.post_data.text == ""
        assert request.post_data.params_obj is not False
        assert dict(request.post_data.params_obj) == {}


class TestJsonBody:
    """Tests for JSON bodies."""

    @pytest.mark.parametrize(
        "mime_type", ["text/json", "text/x-json", "application/json", "application/x-json"]
    )
    def test_canonical_json(self, mime_type: str) -> None:
        request = _normalize(
            _request(method="POST", postData={"mimeType": mime_type, "text": '{"a": [1, true]}'})
        )

        assert request.post_data.mime_type == "application/json"
        assert request.post_data.json_obj == {"a": [1, True]}
        assert request.post_data.text == '{"a": [1, true]}'

    def test_malformed_json_falls_back_to_text_plain(self) -> None:
        request = _normalize(
            _request(method="POST", postData={"mimeType": "application/json", "text": "{not json"})
        )

        assert request.post_data.mime_type == "text/plain"
        assert request.post_data.json_obj is False
        assert request.post_data.text == "{not json"

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity", '{"a": Infinity}', "[1, NaN]"])
    def test_non_finite_constants_fall_back_to_text_plain(self, text: str) -> None:
        request = _normalize(_request(method="POST", postData={"mimeType": "application/json", "text": text}))

        assert request.post_data.mime_type == "text/plain"
        assert request.post_data.json_obj is False
        assert request.post_data.text == text

    def test_json_without_text(self) -> None:
        request = _normalize(_request(method="POST", postData={"mimeType": "application/json"}))

        assert request.post_data.mime_type == "application/json"
        assert request.post_data.text == ""
        assert request.post_data.json_obj is False


class TestOtherBodies:
    """Tests for pass-through bodies."""

    def test_text_plain_unchanged(self) -> None:
        request = _normalize(
            _request(method="POST", postData={"mimeType": "text/plain", "text": "Hello World"})
        )

        assert request.post_data.mime_type == "text/plain"
        assert request.post_data.text == "Hello World"
        assert request.post_data.json_obj is False
        assert request.post_data.params_obj is False

    def test_missing_post_data(self) -> None:
        request = _normalize(_request())

        assert request.post_data.mime_type == "application/octet-stream"
        assert request.post_data.text == ""


class TestNormalizedRequest:
    """Tests for the normalized request value itself."""

    def test_method_preserved(self) -> None:
        assert _normalize(_request(method="patch")).method == "patch"

    def test_frozen(self) -> None:
        request = _normalize(_request())

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.url = "http://other.test/"  # type: ignore[misc]

    def test_maps_read_only(self) -> None:
        request = _normalize(_request(headers=[{"name": "a", "value": "b"}]))

        with pytest.raises(TypeError):
            request.headers_obj["a"] = "c"  # type: ignore[index]


class TestEncodingHelpers:
    """Tests for encoding helpers."""

    def test_encode_uri_component_keeps_unreserved(self) -> None:
        assert encode_uri_component("a-_.!~*'()b") == "a-_.!~*'()b"

    def test_encode_uri_component_escapes_reserved(self) -> None:
        assert encode_uri_component("a b/c?d=e") == "a%20b%2Fc%3Fd%3De"

    def test_stringify_query(self) -> None:
        assert stringify_query({"a": "1", "b": "x y"}) == "a=1&b=x%20y"

    def test_cookie_header(self) -> None:
        cookies = [{"name": "a", "value": "1"}, {"name": "b", "value": "2"}]
        assert cookie_header(cookies) == "a=1; b=2"
