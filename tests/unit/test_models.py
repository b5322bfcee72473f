"""Tests for HAR request validation models."""

from __future__ import annotations

from typing import Any

import pytest

from harsnip.har.models import HarRequest, is_valid_har_request
from harsnip.har.normalizer import apply_request_defaults


def _valid() -> dict[str, Any]:
    return apply_request_defaults({"method": "GET", "url": "https://example.com/"})


class TestIsValidHarRequest:
    """Tests for is_valid_har_request."""

    def test_defaulted_minimal_request_is_valid(self) -> None:
        assert is_valid_har_request(_valid())

    def test_full_request_is_valid(self) -> None:
        request = _valid()
        request["headers"] = [{"name": "accept", "value": "*/*"}]
        request["cookies"] = [{"name": "a", "value": "b", "httpOnly": True}]
        request["postData"] = {
            "mimeType": "multipart/form-data",
            "params": [{"name": "f", "fileName": "a.txt", "contentType": "text/plain"}],
        }
        assert is_valid_har_request(request)

    @pytest.mark.parametrize("field", ["method", "url", "httpVersion", "headersSize"])
    def test_missing_required_field(self, field: str) -> None:
        request = _valid()
        del request[field]
        assert not is_valid_har_request(request)

    def test_relative_url_rejected(self) -> None:
        request = _valid()
        request["url"] = "/relative/path"
        assert not is_valid_har_request(request)

    def test_header_without_value_rejected(self) -> None:
        request = _valid()
        request["headers"] = [{"name": "accept"}]
        assert not is_valid_har_request(request)

    def test_non_string_header_value_rejected(self) -> None:
        request = _valid()
        request["headers"] = [{"name": "x-count", "value": 3}]
        assert not is_valid_har_request(request)

    def test_post_data_requires_mime_type(self) -> None:
        request = _valid()
        request["postData"] = {"text": "x"}
        assert not is_valid_har_request(request)

    def test_not_a_dict(self) -> None:
        assert not is_valid_har_request("GET https://example.com/")


class TestHarRequestModel:
    """Tests for HarRequest field aliases."""

    def test_aliases(self) -> None:
        model = HarRequest.model_validate(_valid())

        assert model.http_version == "HTTP/1.1"
        assert model.query_string == []
        assert model.post_data is not None
        assert model.post_data.mime_type == "application/octet-stream"
