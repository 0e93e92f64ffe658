"""Aggregation and imbalance-scoring engine."""

from .analyzer import BondVerdict, ImbalanceAnalyzer, reuse_share, skew_ratio
from .parser import ParseStats, SampleParser, parse_line, parse_sample, parse_value
from .pipeline import TriageResult, run_pipeline
from .report import build_report
from .store import AggregationStore

__all__ = [
    "AggregationStore",
    "BondVerdict",
    "ImbalanceAnalyzer",
    "ParseStats",
    "SampleParser",
    "TriageResult",
    "build_report",
    "parse_line",
    "parse_sample",
    "parse_value",
    "reuse_share",
    "run_pipeline",
    "skew_ratio",
]
