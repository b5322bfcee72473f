"""Raw HTTP target."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.http import http1


def target() -> Target:
    return Target(
        info=TargetInfo(key="http", title="HTTP", extname="", default="http1.1"),
        clients={http1.client.info.key: http1.client},
    )
