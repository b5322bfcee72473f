"""Target/client registry.

A *target* is an output ecosystem (a language or a shell) and a *client* is
one library or tool within it. Each client owns a renderer: a plain function
``(NormalizedRequest, options) -> str``.

Registries are ordinary values. Build one with :func:`default_registry`
(built-in targets) or start from an empty ``Registry()`` and register your
own. A registry only ever grows; there is no removal.

Not thread-safe: concurrent registration needs external serialization.
Lookups from many threads are fine once registration is done.

Example::

    registry = default_registry()
    registry.register_client("shell", Client(ClientInfo("mytool", "My Tool"), render))
    render = registry.resolve("shell", "mytool")
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from harsnip.exceptions import ConfigurationError
from harsnip.logging import get_logger

if TYPE_CHECKING:
    from harsnip.har.normalizer import NormalizedRequest

LOG = get_logger(__name__)

Renderer = Callable[["NormalizedRequest", Mapping[str, Any] | None], str]

_TARGET_INFO_FIELDS = ("key", "title", "extname", "default")
_CLIENT_INFO_FIELDS = ("key", "title")


@dataclass(frozen=True)
class TargetInfo:
    """Descriptive info for a target."""

    key: str
    title: str
    extname: str
    default: str


@dataclass(frozen=True)
class ClientInfo:
    """Descriptive info for a client."""

    key: str
    title: str
    link: str = ""
    description: str = ""


@dataclass(frozen=True)
class Client:
    info: ClientInfo | None
    convert: Renderer


@dataclass
class Target:
    """A target and its clients, keyed by client key in insertion order."""

    info: TargetInfo | None
    clients: dict[str, Client] = field(default_factory=dict)


def _missing_fields(info: Any, names: tuple[str, ...]) -> list[str]:
    # extname may legitimately be empty (e.g. raw HTTP); None means absent
    return [name for name in names if getattr(info, name, None) is None]


def _client_info(client: Client) -> ClientInfo:
    info = getattr(client, "info", None)
    if info is None:
        raise ConfigurationError(
            "The supplied custom target client must contain an `info` object."
        )
    if _missing_fields(info, _CLIENT_INFO_FIELDS):
        raise ConfigurationError(
            "The supplied custom target client must have an `info` object "
            "with a `key` and `title` property."
        )
    return info


class Registry:
    """Holds targets and resolves ``(target_id, client_id)`` to renderers."""

    def __init__(self) -> None:
        self._targets: dict[str, Target] = {}

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._targets

    def register_target(self, target: Target) -> None:
        """Register a new target together with its clients.

        Args:
            target: Target definition with info and at least one client.

        Raises:
            ConfigurationError: If info is missing or incomplete, the key is
                already registered, the target has no clients, or a client
                is incomplete or filed under a key other than its own. The
                registry is unchanged in that case.
        """
        info = getattr(target, "info", None)
        if info is None:
            raise ConfigurationError("The supplied custom target must contain an `info` object.")

        missing = _missing_fields(info, _TARGET_INFO_FIELDS)
        if missing:
            raise ConfigurationError(
                "The supplied custom target must have an `info` object with a "
                f"`key`, `title`, `extname`, and `default` property (missing: {', '.join(missing)})."
            )
        if info.key in self._targets:
            raise ConfigurationError(f"The supplied custom target '{info.key}' already exists.")
        if not target.clients:
            raise ConfigurationError(
                f"A custom target must have a client defined on it ('{info.key}' has none)."
            )
        for key, client in target.clients.items():
            if _client_info(client).key != key:
                raise ConfigurationError(
                    f"The client registered as '{key}' on target '{info.key}' "
                    f"has the info key '{client.info.key}'."
                )

        self._targets[info.key] = Target(info=info, clients=dict(target.clients))
        LOG.debug("target_registered", target=info.key, clients=list(target.clients))

    def register_client(self, target_id: str, client: Client) -> None:
        """Add a client to an existing target.

        Args:
            target_id: Key of a registered target.
            client: Client definition.

        Raises:
            ConfigurationError: If the target is unknown, client info is
                missing or incomplete, or the client key already exists.
        """
        target = self._targets.get(target_id)
        if target is None:
            raise ConfigurationError(
                f"Sorry, but no {target_id} target exists to add clients to."
            )

        info = _client_info(client)
        if info.key in target.clients:
            raise ConfigurationError(
                f"The supplied custom target client '{info.key}' already exists, "
                "please use a different key"
            )

        target.clients[info.key] = client
        LOG.debug("client_registered", target=target_id, client=info.key)

    def resolve(self, target_id: str, client_id: str | None = None) -> Renderer | None:
        """Find the renderer for a target/client selection.

        Args:
            target_id: Target key.
            client_id: Client key. Unknown or missing clients fall back to the
                target's default client.

        Returns:
            The renderer, or None if the target is unknown.
        """
        target = self._targets.get(target_id)
        if target is None:
            return None

        if isinstance(client_id, str) and client_id in target.clients:
            return target.clients[client_id].convert

        default = target.clients.get(target.info.default)
        return default.convert if default is not None else None

    def list_targets(self) -> list[dict[str, Any]]:
        """Describe every registered target and its clients.

        Returns:
            One dict per target (info fields plus a ``clients`` list of
            client info dicts), in registration order.
        """
        result = []
        for target in self._targets.values():
            entry = asdict(target.info)
            entry["clients"] = [asdict(client.info) for client in target.clients.values()]
            result.append(entry)
        return result

    def extension_for(self, target_id: str) -> str:
        """Return the file extension for a target, or "" if unknown."""
        target = self._targets.get(target_id)
        return target.info.extname if target is not None else ""


def default_registry() -> Registry:
    """Build a fresh registry populated with the built-in targets."""
    from harsnip.targets import builtin_targets

    registry = Registry()
    for target in builtin_targets():
        registry.register_target(target)
    return registry
