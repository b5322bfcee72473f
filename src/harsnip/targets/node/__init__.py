"""Node.js target."""

from harsnip.registry import Target, TargetInfo
from harsnip.targets.node import axios


def target() -> Target:
    return Target(
        info=TargetInfo(key="node", title="Node.js", extname=".cjs", default="axios"),
        clients={axios.client.info.key: axios.client},
    )
