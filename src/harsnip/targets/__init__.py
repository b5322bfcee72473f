"""Built-in targets.

Each subpackage exposes ``target()`` returning a fresh
:class:`~harsnip.registry.Target` with its clients, default client first.
"""

from harsnip.registry import Target
from harsnip.targets import http, java, javascript, node, python, shell


def builtin_targets() -> list[Target]:
    """Return new Target values for every built-in target, in listing order."""
    return [module.target() for module in (http, java, javascript, node, python, shell)]


__all__ = ["builtin_targets"]
