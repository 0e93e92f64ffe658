"""
rx-cache-triage - bond imbalance triage from rx_cache_* counters

Collects ethtool rx_cache_* counters from every bonded interface across a
cluster and flags bonds whose traffic or cache pressure is concentrated on
one member link.
"""

__version__ = "0.1.0"

from .api import triage
from .config import ThresholdConfig, TriageConfig, load_config
from .core import AggregationStore, ImbalanceAnalyzer, TriageResult, build_report, run_pipeline
from .models import (
    SKEW_SENTINEL,
    BondRecord,
    InterfaceRecord,
    NodeRecord,
    ReportModel,
    Sample,
)

__all__ = [
    "triage",  # Main entry point
    "run_pipeline",  # Offline usage on already-collected lines
    "AggregationStore",
    "ImbalanceAnalyzer",
    "build_report",
    "ThresholdConfig",
    "TriageConfig",
    "load_config",
    "TriageResult",
    "ReportModel",
    "NodeRecord",
    "BondRecord",
    "InterfaceRecord",
    "Sample",
    "SKEW_SENTINEL",
]
