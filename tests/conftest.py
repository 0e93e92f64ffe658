"""Shared test fixtures for rx-cache-triage tests."""

import pytest

from rx_cache_triage.config import ThresholdConfig
from rx_cache_triage.core.store import AggregationStore
from rx_cache_triage.models import Sample


def line(node, bond, iface, metric, value):
    """Format one collected line the way nodes emit it."""
    return f"node={node} bond={bond} iface={iface} metric={metric} value={value}"


@pytest.fixture
def default_thresholds():
    return ThresholdConfig()


@pytest.fixture
def balanced_lines():
    """One node with two healthy bonds."""
    return [
        line("n2", "bond0", "ens1f0", "rx_cache_reuse", 500),
        line("n2", "bond0", "ens1f1", "rx_cache_reuse", 480),
        line("n2", "bond0", "ens1f0", "rx_cache_busy", 30),
        line("n2", "bond0", "ens1f1", "rx_cache_busy", 25),
        line("n2", "bond1", "ens2f0", "rx_cache_reuse", 100),
        line("n2", "bond1", "ens2f1", "rx_cache_reuse", 100),
    ]


@pytest.fixture
def skewed_lines():
    """One node whose bond0 is pinned to eth0."""
    return [
        line("n1", "bond0", "eth0", "rx_cache_reuse", 99),
        line("n1", "bond0", "eth1", "rx_cache_reuse", 1),
        line("n1", "bond0", "eth0", "rx_cache_busy", 5000),
        line("n1", "bond0", "eth1", "rx_cache_busy", 500),
        line("n1", "bond0", "eth0", "rx_cache_full", 100),
        line("n1", "bond0", "eth1", "rx_cache_full", 0),
        line("n1", "bond1", "eth2", "rx_cache_reuse", 10),
        line("n1", "bond1", "eth3", "rx_cache_reuse", 10),
    ]


@pytest.fixture
def samples_file(tmp_path, skewed_lines, balanced_lines):
    """Pre-collected lines on disk, as `--input` expects."""
    path = tmp_path / "samples.txt"
    path.write_text("\n".join(["# collected offline", *skewed_lines, *balanced_lines]) + "\n")
    return path


@pytest.fixture
def store():
    """Small store: n1/bond0 with eth0, eth1."""
    s = AggregationStore()
    s.insert_all(
        [
            Sample("n1", "bond0", "eth1", "rx_cache_reuse", 1),
            Sample("n1", "bond0", "eth0", "rx_cache_reuse", 99),
            Sample("n1", "bond0", "eth0", "rx_cache_busy", 0),
        ]
    )
    return s


@pytest.fixture
def make_line():
    return line
