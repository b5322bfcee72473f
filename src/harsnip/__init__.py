"""harsnip - turn HAR requests into code snippets.

Feed harsnip a HAR document (or a single HAR request) and get back
ready-to-run code for curl, Requests, fetch, OkHttp and more.

This package provides:
- Request normalization (merged query strings, header/cookie maps, canonical bodies)
- A target/client registry that custom renderers can extend
- A command line interface for converting HAR files

Example:
    >>> from harsnip import FromSingleRequest, HTTPSnippet
    >>> snippet = HTTPSnippet(FromSingleRequest({"method": "GET", "url": "https://example.com"}))
    >>> code = snippet.convert("python", "requests")
"""

from harsnip.config import HarsnipSettings, get_settings
from harsnip.exceptions import ConfigurationError, HARParseError, HarsnipError, InputError
from harsnip.har import (
    FromHarLog,
    FromSingleRequest,
    NormalizedRequest,
    PostData,
    load_har_file,
    load_har_string,
)
from harsnip.registry import (
    Client,
    ClientInfo,
    Registry,
    Renderer,
    Target,
    TargetInfo,
    default_registry,
)
from harsnip.snippet import HTTPSnippet

__version__ = "0.3.0"

__all__ = [
    # Version
    "__version__",
    # Session
    "HTTPSnippet",
    "FromSingleRequest",
    "FromHarLog",
    "load_har_file",
    "load_har_string",
    # Normalized model
    "NormalizedRequest",
    "PostData",
    # Registry
    "Registry",
    "Renderer",
    "Target",
    "TargetInfo",
    "Client",
    "ClientInfo",
    "default_registry",
    # Configuration
    "HarsnipSettings",
    "get_settings",
    # Exceptions
    "HarsnipError",
    "ConfigurationError",
    "InputError",
    "HARParseError",
]
