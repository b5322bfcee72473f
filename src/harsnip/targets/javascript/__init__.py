"""JavaScript (browser) target."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.javascript import fetch


def target() -> Target:
    return Target(
        info=TargetInfo(key="javascript", title="JavaScript", extname=".js", default="fetch"),
        clients={fetch.client.info.key: fetch.client},
    )
