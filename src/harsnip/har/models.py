"""pydantic models of the HAR 1.2 request object.

Only the request side of an entry is modelled; harsnip never looks at
responses. The models serve as the validation gate in front of the
normalizer.

HAR format specification: http://www.softwareishard.com/blog/har-12-spec/
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class HarNameValue(BaseModel):
    """A header, cookie, or query string pair."""

    model_config = ConfigDict(extra="allow")

    name: str
    value: str


class HarParam(BaseModel):
    """A posted parameter (form field or file)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    value: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")
    content_type: str | None = Field(default=None, alias="contentType")


class HarPostData(BaseModel):
    """Posted data info."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mime_type: str = Field(alias="mimeType")
    text: str | None = None
    params: list[HarParam] | None = None


class HarRequest(BaseModel):
    """Detailed info about a performed request."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    method: str
    url: str
    http_version: str = Field(alias="httpVersion")
    cookies: list[HarNameValue]
    headers: list[HarNameValue]
    query_string: list[HarNameValue] = Field(alias="queryString")
    post_data: HarPostData | None = Field(default=None, alias="postData")
    headers_size: int = Field(alias="headersSize")
    body_size: int = Field(alias="bodySize")

    @field_validator("url")
    @classmethod
    def _url_is_absolute(cls, value: str) -> str:
        parts = urlsplit(value)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"url must be absolute: {value!r}")
        return value


def is_valid_har_request(data: Any) -> bool:
    """Check a (defaulted) request dict against the HAR request schema.

    Args:
        data: Candidate request object.

    Returns:
        True if the request is structurally valid, False otherwise.
    """
    try:
        HarRequest.model_validate(data)
    except ValidationError:
        return False
    return True
