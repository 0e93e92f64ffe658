"""Tests for the public triage() entry point."""

import pytest

from rx_cache_triage import SKEW_SENTINEL, TriageConfig, triage
from rx_cache_triage.api import source_from_config
from rx_cache_triage.collection import FileSource, OcDebugSource
from rx_cache_triage.exceptions import InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


class TestTriage:
    def test_offline_source(self, samples_file):
        result = triage(FileSource(samples_file))
        assert result.report.imbalanced_bonds() == [("n1", "bond0")]
        bond0 = result.report.nodes[0].bonds[0]
        assert bond0.full_skew_ratio == SKEW_SENTINEL
        assert bond0.reasons[0].startswith("top reuse share imbalance")
        assert result.failed_nodes == {}

    def test_overrides(self, samples_file):
        result = triage(FileSource(samples_file), imbalance_percent_threshold=50)
        assert ("n2", "bond0") in result.report.imbalanced_bonds()

    def test_prebuilt_config(self, samples_file):
        config = TriageConfig(workers=1)
        result = triage(FileSource(samples_file), config=config)
        assert len(result.report.nodes) == 2

    def test_invalid_override(self, samples_file):
        with pytest.raises(InvalidConfigError):
            triage(FileSource(samples_file), skew_ratio_threshold=0)

    def test_failed_nodes_reported(self, samples_file):
        class FlakySource(FileSource):
            def list_nodes(self):
                return super().list_nodes() + ["n-down"]

        result = triage(FlakySource(samples_file))
        assert list(result.failed_nodes) == ["n-down"]
        assert [n.name for n in result.report.nodes] == ["n1", "n2"]


def test_default_source_from_config():
    source = source_from_config(TriageConfig(node_selector="role=worker", bond="bond0"))
    assert isinstance(source, OcDebugSource)
    assert (source.selector, source.bond, source.timeout_seconds) == ("role=worker", "bond0", 120)
