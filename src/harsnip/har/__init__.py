"""HAR (HTTP Archive) input handling.

Loading, validation and normalization of HAR request objects.

Example usage:
    from harsnip.har import load_har_file

    source = load_har_file("capture.har")
    for raw in source.requests():
        ...
"""

from harsnip.har.models import HarRequest, is_valid_har_request
from harsnip.har.multipart import MULTIPART_BOUNDARY, build_multipart_body
from harsnip.har.normalizer import (
    NormalizedRequest,
    PostData,
    apply_request_defaults,
    normalize_request,
)
from harsnip.har.parser import (
    FromHarLog,
    FromSingleRequest,
    SnippetInput,
    as_input,
    load_har_file,
    load_har_string,
    validate_har_schema,
)

__all__ = [
    # Parser
    "FromHarLog",
    "FromSingleRequest",
    "SnippetInput",
    "as_input",
    "load_har_file",
    "load_har_string",
    "validate_har_schema",
    # Validation
    "HarRequest",
    "is_valid_har_request",
    # Normalization
    "MULTIPART_BOUNDARY",
    "NormalizedRequest",
    "PostData",
    "apply_request_defaults",
    "build_multipart_body",
    "normalize_request",
]
