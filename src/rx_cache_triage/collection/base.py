"""Sample source interface.

A source knows which nodes exist and how to pull raw counter lines from one
of them. It knows nothing about parsing or analysis.
"""

from abc import ABC, abstractmethod
from typing import List


class SampleSource(ABC):
    """Abstract base class for remote sample sources."""

    @abstractmethod
    def list_nodes(self) -> List[str]:
        """Return the names of the nodes to query."""

    @abstractmethod
    def collect(self, node: str) -> List[str]:
        """Return raw `node=... bond=... iface=... metric=... value=...` lines.

        Raises:
            NodeCollectionError: If this node cannot be queried
        """
