"""Public API for rx-cache-triage.

Example:
    >>> from rx_cache_triage import triage
    >>>
    >>> # Query every node the current `oc` login can see
    >>> result = triage()
    >>> result.report.imbalanced_bonds()
    [('worker-3', 'bond0')]
    >>>
    >>> # Offline, with tighter thresholds
    >>> from rx_cache_triage.collection import FileSource
    >>> result = triage(FileSource("samples.txt"), skew_ratio_threshold=5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .collection import CollectionResult, OcDebugSource, SampleSource, collect_all
from .config import TriageConfig, load_config
from .core.pipeline import TriageResult, run_pipeline
from .logging_config import get_logger

logger = get_logger(__name__)


def source_from_config(config: TriageConfig) -> SampleSource:
    return OcDebugSource(
        selector=config.node_selector,
        bond=config.bond,
        timeout_seconds=config.timeout_seconds,
    )


def triage(
    source: Optional[SampleSource] = None,
    config_file: Optional[Path] = None,
    config: Optional[TriageConfig] = None,
    **overrides,
) -> TriageResult:
    """Collect counters from the fleet and score every bond.

    Steps:
    1. Load configuration (TOML + env + overrides), unless `config` is given
    2. Fan out collection over the source's nodes
    3. Parse, aggregate and analyze the fanned-in lines

    Args:
        source: Sample source (default: OcDebugSource built from the config)
        config_file: Optional explicit config file path
        config: Pre-built configuration; skips loading
        **overrides: Configuration overrides (e.g. skew_ratio_threshold=5)

    Returns:
        TriageResult with the report, parse stats and failed nodes

    Raises:
        ConfigurationError: If configuration is invalid
        CollectionError: If the source cannot list nodes
    """
    if config is None:
        config = load_config(config_file=config_file, **overrides)
    if source is None:
        source = source_from_config(config)

    collected: CollectionResult = collect_all(source, max_workers=config.workers)
    result = run_pipeline(collected.lines, config.thresholds)
    result.failed_nodes = dict(collected.failed_nodes)
    return result
