"""Python target."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.python import python3, requests


def target() -> Target:
    return Target(
        info=TargetInfo(key="python", title="Python", extname=".py", default="requests"),
        clients={c.info.key: c for c in (requests.client, python3.client)},
    )
