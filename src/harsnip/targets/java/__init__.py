"""Java target."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.java import okhttp


def target() -> Target:
    return Target(
        info=TargetInfo(key="java", title="Java", extname=".java", default="okhttp"),
        clients={okhttp.client.info.key: okhttp.client},
    )
