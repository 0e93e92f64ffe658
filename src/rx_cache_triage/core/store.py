"""AggregationStore: node -> bond -> interface -> metric hierarchy.

Enumeration is always in lexicographic order of the identifiers. Report
diffing and golden-file comparisons rely on it, so callers never sort.

The store is not safe for concurrent mutation. It is filled only after
collection has fanned in.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from ..models import Sample

# metric -> value
MetricMap = dict[str, int]


class AggregationStore:
    """Nested store of counter values keyed by (node, bond, interface, metric)."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, dict[str, MetricMap]]] = {}

    def insert(self, sample: Sample) -> None:
        """Insert one sample. The same key inserted again replaces the value."""
        bonds = self._data.setdefault(sample.node, {})
        interfaces = bonds.setdefault(sample.bond, {})
        metrics = interfaces.setdefault(sample.interface, {})
        metrics[sample.metric] = sample.value

    def insert_all(self, samples: Iterable[Sample]) -> int:
        """Insert a batch of samples. Returns how many were inserted."""
        count = 0
        for sample in samples:
            self.insert(sample)
            count += 1
        return count

    # ── Enumeration ───────────────────────────────────────────────────

    def nodes(self) -> list[str]:
        return sorted(self._data)

    def bonds(self, node: str) -> list[str]:
        return sorted(self._data.get(node, {}))

    def interfaces(self, node: str, bond: str) -> list[str]:
        return sorted(self._data.get(node, {}).get(bond, {}))

    def metrics(self, node: str, bond: str, interface: str) -> MetricMap:
        """Return a copy of the metric map, keys in lexicographic order."""
        raw = self._data.get(node, {}).get(bond, {}).get(interface, {})
        return {k: raw[k] for k in sorted(raw)}

    def bond_metrics(self, node: str, bond: str) -> dict[str, MetricMap]:
        """Return interface -> metric map for one bond, both levels ordered."""
        return {
            iface: self.metrics(node, bond, iface) for iface in self.interfaces(node, bond)
        }

    def rows(self) -> Iterator[tuple[str, str, str, str, int]]:
        """Yield (node, bond, interface, metric, value) in sorted order."""
        for node in self.nodes():
            for bond in self.bonds(node):
                for iface in self.interfaces(node, bond):
                    for metric, value in self.metrics(node, bond, iface).items():
                        yield node, bond, iface, metric, value

    # ── Derived ───────────────────────────────────────────────────────

    def has_issue(self, node: str, bond: str, interface: str, flag_threshold: int = 0) -> bool:
        """True if any counter on the interface is strictly above flag_threshold."""
        raw = self._data.get(node, {}).get(bond, {}).get(interface, {})
        return any(value > flag_threshold for value in raw.values())

    @property
    def sample_count(self) -> int:
        """Number of distinct (node, bond, interface, metric) keys."""
        return sum(
            len(metrics)
            for bonds in self._data.values()
            for interfaces in bonds.values()
            for metrics in interfaces.values()
        )

    def __len__(self) -> int:
        return self.sample_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AggregationStore):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"AggregationStore(nodes={len(self._data)}, samples={self.sample_count})"
