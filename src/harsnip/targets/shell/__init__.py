"""Shell target: command line HTTP tools."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.shell import curl, httpie, wget


def target() -> Target:
    return Target(
        info=TargetInfo(key="shell", title="Shell", extname=".sh", default="curl"),
        clients={c.info.key: c for c in (curl.client, wget.client, httpie.client)},
    )
