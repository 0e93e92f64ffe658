"""Pipeline: raw lines -> parser -> store -> report.

The pipeline runs strictly after collection has fanned in; nothing here
does I/O apart from logging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..config import ThresholdConfig
from ..logging_config import get_logger
from ..models import ReportModel, Sample
from .parser import ParseStats, SampleParser
from .report import build_report
from .store import AggregationStore

logger = get_logger(__name__)


@dataclass
class TriageResult:
    """Everything one run produced.

    Attributes:
        report: The immutable report tree handed to formatters
        stats: What the parser accepted, dropped and coerced
        failed_nodes: node -> reason for nodes that contributed no samples
    """

    report: ReportModel
    stats: ParseStats = field(default_factory=ParseStats)
    failed_nodes: dict[str, str] = field(default_factory=dict)

    @property
    def imbalanced(self) -> bool:
        return bool(self.report.imbalanced_bonds())


def build_store(raws: Iterable[str | Sample], parser: SampleParser) -> AggregationStore:
    store = AggregationStore()
    store.insert_all(parser.parse_all(raws))
    return store


def run_pipeline(
    raws: Iterable[str | Sample], thresholds: Optional[ThresholdConfig] = None
) -> TriageResult:
    """Parse, aggregate and analyze one batch.

    An empty batch is a successful run with an empty report.
    """
    parser = SampleParser()
    store = build_store(raws, parser)
    stats = parser.stats

    if stats.dropped:
        logger.debug(f"Dropped {stats.dropped} malformed sample(s)")
    if stats.coerced:
        logger.debug(f"Coerced {stats.coerced} unreadable counter value(s) to 0")

    if not store.sample_count:
        logger.warning("No bonded interfaces with rx_cache_* statistics found on any node")

    report = build_report(store, thresholds)
    logger.info(
        f"Analyzed {len(report.nodes)} node(s), "
        f"{sum(1 for _ in report.iter_bonds())} bond(s), "
        f"{len(report.imbalanced_bonds())} imbalanced"
    )
    return TriageResult(report=report, stats=stats)
