"""Offline sample source: pre-collected lines from a file or stdin."""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional

from ..core.parser import split_line
from ..exceptions import CollectionError, NodeCollectionError
from ..logging_config import get_logger
from .base import SampleSource

logger = get_logger(__name__)


class FileSource(SampleSource):
    """Replay `node=... bond=... iface=... metric=... value=...` lines.

    `path` may be "-" for stdin. Blank lines and lines starting with '#'
    are skipped. The input is read once, even when `collect` is called from
    several fan-out threads.
    """

    def __init__(self, path: str | Path, bond: Optional[str] = None) -> None:
        self.path = str(path)
        self.bond = bond
        self._by_node: Optional[Dict[str, List[str]]] = None
        self._lock = threading.Lock()

    def _read(self) -> List[str]:
        if self.path == "-":
            return sys.stdin.read().splitlines()
        try:
            return Path(self.path).read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise CollectionError(f"cannot read {self.path}: {e}")

    def _load(self) -> Dict[str, List[str]]:
        with self._lock:
            if self._by_node is None:
                by_node: Dict[str, List[str]] = {}
                skipped = 0
                for line in self._read():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    fields = split_line(line)
                    node = fields.get("node", "")
                    if not node:
                        skipped += 1
                        continue
                    if self.bond and fields.get("bond") != self.bond:
                        continue
                    by_node.setdefault(node, []).append(line)
                if skipped:
                    logger.debug(f"Skipped {skipped} line(s) without a node in {self.path}")
                self._by_node = by_node
            return self._by_node

    def list_nodes(self) -> List[str]:
        return sorted(self._load())

    def collect(self, node: str) -> List[str]:
        by_node = self._load()
        if node not in by_node:
            raise NodeCollectionError(node, f"no samples for node in {self.path}")
        return list(by_node[node])
