"""Imbalance analysis for a single bond.

Three independent signals, each compared against its own threshold:

    Reuse share: share of the bond's rx_cache_reuse total held by the top
        interface. share = floor(max * 100 / total). A zero total has no
        share (0%, no interface named).

    Busy skew / full skew: max/min ratio of rx_cache_busy and rx_cache_full
        across the interfaces that report the counter, min over active ones.
            no positive value          -> 0 (no signal)
            one active, the rest idle  -> SKEW_SENTINEL
            otherwise                  -> floor(max / min), capped at SKEW_SENTINEL

A bond is imbalanced iff at least one signal reaches its threshold. Reasons
are listed in the order reuse share, busy skew, full skew.

Bonds never interact and nothing carries over between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..models import BUSY_METRIC, FULL_METRIC, REUSE_METRIC, SKEW_SENTINEL


@dataclass(frozen=True)
class BondVerdict:
    """Analyzer output for one bond."""

    top_reuse_interface: str = ""
    top_reuse_share_percent: int = 0
    busy_skew_ratio: int = 0
    full_skew_ratio: int = 0
    imbalanced: bool = False
    reasons: tuple[str, ...] = ()


def reuse_share(values: Mapping[str, int]) -> tuple[str, int]:
    """Return (top interface, share percent) for interface -> reuse counter.

    Ties go to the lexicographically first interface name.
    """
    total = sum(values.values())
    if total == 0:
        return "", 0

    top_name = ""
    top_value = -1
    for name in sorted(values):
        if values[name] > top_value:
            top_name, top_value = name, values[name]

    return top_name, top_value * 100 // total


def skew_ratio(values: Mapping[str, int]) -> int:
    """Return the max/min ratio of a counter across the reporting interfaces.

    The minimum is taken over active (positive) interfaces. When exactly one
    interface is active and the others report 0, or when the ratio would
    exceed it, the result saturates at SKEW_SENTINEL.
    """
    active = [v for v in values.values() if v > 0]
    if not active:
        return 0
    if len(active) == 1 and len(values) > 1:
        return SKEW_SENTINEL
    return min(max(active) // min(active), SKEW_SENTINEL)


def _format_ratio(ratio: int) -> str:
    return "inf" if ratio == SKEW_SENTINEL else str(ratio)


def _counter(interfaces: Mapping[str, Mapping[str, int]], metric: str) -> dict[str, int]:
    """interface -> value for the interfaces that report `metric`."""
    return {name: m[metric] for name, m in interfaces.items() if metric in m}


class ImbalanceAnalyzer:
    """Computes reuse share and busy/full skew for a bond's interfaces.

    Thresholds are injected so that each environment can tune its own
    sensitivity; the analyzer never reads configuration on its own.
    """

    def __init__(self, thresholds: Optional[ThresholdConfig] = None) -> None:
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def analyze(self, interfaces: Mapping[str, Mapping[str, int]]) -> BondVerdict:
        """Analyze one bond.

        Args:
            interfaces: interface name -> metric name -> value

        Returns:
            BondVerdict with the derived fields and the ordered reasons.
        """
        t = self.thresholds

        reuse = {name: m.get(REUSE_METRIC, 0) for name, m in interfaces.items()}
        top_iface, share = reuse_share(reuse)
        busy = skew_ratio(_counter(interfaces, BUSY_METRIC))
        full = skew_ratio(_counter(interfaces, FULL_METRIC))

        reasons = []
        if top_iface and share >= t.imbalance_percent_threshold:
            reasons.append(
                f"top reuse share imbalance: {top_iface} holds {share}% of "
                f"{REUSE_METRIC} (threshold {t.imbalance_percent_threshold}%)"
            )
        if busy >= t.skew_ratio_threshold:
            reasons.append(
                f"busy skew: {BUSY_METRIC} max/min ratio {_format_ratio(busy)} "
                f"(threshold {t.skew_ratio_threshold})"
            )
        if full >= t.skew_ratio_threshold:
            reasons.append(
                f"full skew: {FULL_METRIC} max/min ratio {_format_ratio(full)} "
                f"(threshold {t.skew_ratio_threshold})"
            )

        return BondVerdict(
            top_reuse_interface=top_iface,
            top_reuse_share_percent=share,
            busy_skew_ratio=busy,
            full_skew_ratio=full,
            imbalanced=bool(reasons),
            reasons=tuple(reasons),
        )
