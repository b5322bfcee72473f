"""Snippet session: normalize HAR input and convert it to code."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from harsnip.har.models import is_valid_har_request
from harsnip.har.normalizer import NormalizedRequest, apply_request_defaults, normalize_request
from harsnip.har.parser import SnippetInput, as_input
from harsnip.logging import get_logger
from harsnip.registry import Registry, default_registry

LOG = get_logger(__name__)


class HTTPSnippet:
    """A set of normalized requests ready to be rendered.

    Invalid request entries are dropped while the session is built; the
    session may therefore be empty.

    Example:
        >>> snippet = HTTPSnippet(FromSingleRequest({"method": "GET", "url": "https://example.com"}))
        >>> print(snippet.convert("shell", "curl"))
        curl --request GET \\
          --url https://example.com/
    """

    def __init__(self, source: SnippetInput, registry: Registry | None = None) -> None:
        """Initialize the session.

        Args:
            source: FromSingleRequest or FromHarLog input.
            registry: Registry used by convert(). Defaults to a fresh
                registry of the built-in targets.

        Raises:
            InputError: If the input variant does not hold a usable shape.
        """
        self.registry = registry if registry is not None else default_registry()
        self.requests: list[NormalizedRequest] = []

        for index, raw in enumerate(source.requests()):
            if not isinstance(raw, Mapping):
                LOG.debug("request_dropped", index=index, reason="not an object")
                continue

            request = apply_request_defaults(raw)
            if not is_valid_har_request(request):
                LOG.debug("request_dropped", index=index, url=request.get("url"))
                continue

            self.requests.append(normalize_request(request))

        LOG.debug("snippet_prepared", requests=len(self.requests))

    @classmethod
    def from_input(cls, data: Any, registry: Registry | None = None) -> HTTPSnippet:
        """Build a session from loaded JSON, detecting HAR vs single request.

        Raises:
            InputError: If ``data`` is neither a HAR document nor a request object.
        """
        return cls(as_input(data), registry=registry)

    def convert(
        self,
        target_id: str,
        client_id: str | Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> str | list[str] | None:
        """Render every request for a target/client pair.

        When ``options`` is omitted, a mapping passed as ``client_id`` is
        taken as the options and the target's default client is used.

        Args:
            target_id: Target key, e.g. "shell".
            client_id: Client key, e.g. "curl". Optional.
            options: Renderer options, e.g. ``{"indent": "\\t"}``.

        Returns:
            The snippet when there is exactly one request, a list of
            snippets otherwise (empty for an empty session), or None when
            the target is unknown.
        """
        if options is None and isinstance(client_id, Mapping):
            options, client_id = client_id, None

        render = self.registry.resolve(target_id, client_id)
        if render is None:
            LOG.info("target_not_found", target=target_id, client=client_id)
            return None

        results = [render(request, options) for request in self.requests]
        return results[0] if len(results) == 1 else results
