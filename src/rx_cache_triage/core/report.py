"""Report model builder: store + analyzer verdicts -> immutable ReportModel.

Building is a pure function of its inputs. The same store and thresholds
always produce an equal tree, which is what makes the JSON output stable.
"""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import BondRecord, InterfaceRecord, NodeRecord, ReportModel
from .analyzer import ImbalanceAnalyzer
from .store import AggregationStore


def build_bond(
    store: AggregationStore, node: str, bond: str, analyzer: ImbalanceAnalyzer
) -> BondRecord:
    flag_threshold = analyzer.thresholds.flag_threshold
    interfaces = store.bond_metrics(node, bond)
    verdict = analyzer.analyze(interfaces)

    return BondRecord(
        name=bond,
        interfaces=tuple(
            InterfaceRecord(
                name=iface,
                metrics=metrics,
                issue=store.has_issue(node, bond, iface, flag_threshold),
            )
            for iface, metrics in interfaces.items()
        ),
        top_reuse_interface=verdict.top_reuse_interface,
        top_reuse_share_percent=verdict.top_reuse_share_percent,
        busy_skew_ratio=verdict.busy_skew_ratio,
        full_skew_ratio=verdict.full_skew_ratio,
        imbalanced=verdict.imbalanced,
        reasons=verdict.reasons,
    )


def build_report(
    store: AggregationStore, thresholds: Optional[ThresholdConfig] = None
) -> ReportModel:
    """Assemble the report tree, nodes/bonds/interfaces in lexicographic order."""
    analyzer = ImbalanceAnalyzer(thresholds or DEFAULT_THRESHOLDS)
    return ReportModel(
        nodes=tuple(
            NodeRecord(
                name=node,
                bonds=tuple(build_bond(store, node, bond, analyzer) for bond in store.bonds(node)),
            )
            for node in store.nodes()
        )
    )
