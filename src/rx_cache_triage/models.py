"""Data models for rx-cache-triage.

The report tree is node -> bond -> interface -> metric, every level ordered
by name. All report records are frozen: the tree is built once per run and
handed to the formatters as-is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterator, Mapping

# Reported instead of a division by zero when an idle member sits next to an
# active one. A plain integer so JSON stays fixed-width.
SKEW_SENTINEL = 999999

REUSE_METRIC = "rx_cache_reuse"
BUSY_METRIC = "rx_cache_busy"
FULL_METRIC = "rx_cache_full"


@dataclass(frozen=True)
class Sample:
    """One collected counter."""

    node: str
    bond: str
    interface: str
    metric: str
    value: int


@dataclass(frozen=True)
class InterfaceRecord:
    """One bond member with its rx_cache_* counters, keys in lexicographic order."""

    name: str
    metrics: Mapping[str, int]
    issue: bool = False

    def __post_init__(self) -> None:
        ordered = {k: self.metrics[k] for k in sorted(self.metrics)}
        object.__setattr__(self, "metrics", MappingProxyType(ordered))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "rx_cache": dict(self.metrics),
            "issue": self.issue,
        }


@dataclass(frozen=True)
class BondRecord:
    """One bond on one node with the analyzer's verdict."""

    name: str
    interfaces: tuple[InterfaceRecord, ...] = ()
    top_reuse_interface: str = ""
    top_reuse_share_percent: int = 0
    busy_skew_ratio: int = 0
    full_skew_ratio: int = 0
    imbalanced: bool = False
    reasons: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "imbalance": self.imbalanced,
            "imbalanceReasons": list(self.reasons),
            "topReuse": {
                "interface": self.top_reuse_interface,
                "sharePercent": self.top_reuse_share_percent,
            },
            "busySkewRatio": self.busy_skew_ratio,
            "fullSkewRatio": self.full_skew_ratio,
            "interfaces": [i.to_dict() for i in self.interfaces],
        }


@dataclass(frozen=True)
class NodeRecord:
    name: str
    bonds: tuple[BondRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "bonds": [b.to_dict() for b in self.bonds]}


@dataclass(frozen=True)
class ReportModel:
    """The complete, immutable result of one triage run."""

    nodes: tuple[NodeRecord, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def iter_bonds(self) -> Iterator[tuple[NodeRecord, BondRecord]]:
        """Yield (node, bond) pairs in report order."""
        for node in self.nodes:
            for bond in node.bonds:
                yield node, bond

    def imbalanced_bonds(self) -> list[tuple[str, str]]:
        """Return (node, bond) names of every imbalanced bond."""
        return [(n.name, b.name) for n, b in self.iter_bonds() if b.imbalanced]

    def to_dict(self) -> dict[str, Any]:
        """Canonical JSON structure consumed by report sinks."""
        return {"nodes": [n.to_dict() for n in self.nodes]}
