"""Collection exceptions: sample sources and per-node remote commands."""

from typing import Optional

from .base import TriageError


class CollectionError(TriageError):
    """Raised when the sample source cannot start (missing tool, no nodes, bad input)."""

    def __init__(self, reason: str, command: Optional[str] = None):
        details = {"reason": reason}
        if command:
            details["command"] = command
        super().__init__(f"Sample collection failed: {reason}", details=details)
        self.reason = reason
        self.command = command


class NodeCollectionError(TriageError):
    """Raised when collection from a single node fails.

    The fan-out catches this per node; a failed node contributes no samples.
    """

    def __init__(self, node: str, reason: str):
        super().__init__(
            f"Cannot collect from node: {node}",
            details={"node": node, "reason": reason},
        )
        self.node = node
        self.reason = reason
