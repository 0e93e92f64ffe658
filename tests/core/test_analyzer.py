"""Tests for the imbalance analyzer: reuse share, skew ratios, verdicts."""

import pytest

from rx_cache_triage.config import ThresholdConfig
from rx_cache_triage.core.analyzer import ImbalanceAnalyzer, reuse_share, skew_ratio
from rx_cache_triage.models import SKEW_SENTINEL


class TestReuseShare:
    def test_zero_total(self):
        assert reuse_share({"eth0": 0, "eth1": 0}) == ("", 0)

    def test_empty(self):
        assert reuse_share({}) == ("", 0)

    def test_floor(self):
        # 2 / 3 = 66.67% -> 66
        assert reuse_share({"eth0": 2, "eth1": 1}) == ("eth0", 66)

    def test_single_interface_full_share(self):
        assert reuse_share({"eth0": 5}) == ("eth0", 100)

    def test_tie_goes_to_first_name(self):
        assert reuse_share({"eth1": 50, "eth0": 50}) == ("eth0", 50)

    @pytest.mark.parametrize(
        "values",
        [{"a": 1}, {"a": 1, "b": 1000000}, {"a": 3, "b": 3, "c": 3}, {"a": 0, "b": 7}],
    )
    def test_share_in_range(self, values):
        _, share = reuse_share(values)
        assert 0 <= share <= 100


class TestSkewRatio:
    def test_no_positive_values(self):
        assert skew_ratio({"eth0": 0, "eth1": 0}) == 0

    def test_no_reporting_interfaces(self):
        assert skew_ratio({}) == 0

    def test_floor_division(self):
        assert skew_ratio({"eth0": 5000, "eth1": 500}) == 10
        assert skew_ratio({"eth0": 999, "eth1": 100}) == 9

    def test_idle_member_is_sentinel(self):
        assert skew_ratio({"eth0": 100, "eth1": 0}) == SKEW_SENTINEL

    def test_single_active_interface(self):
        assert skew_ratio({"eth0": 40}) == 1

    def test_uses_min_of_all_members(self):
        assert skew_ratio({"eth0": 100, "eth1": 50, "eth2": 10}) == 10

    def test_idle_member_ignored_when_others_active(self):
        assert skew_ratio({"eth0": 100, "eth1": 10, "eth2": 0}) == 10

    def test_single_active_among_idle_members(self):
        assert skew_ratio({"eth0": 100, "eth1": 0, "eth2": 0}) == SKEW_SENTINEL

    def test_large_ratio_saturates(self):
        assert skew_ratio({"eth0": 5_000_000, "eth1": 1}) == SKEW_SENTINEL
        assert skew_ratio({"eth0": 999_999, "eth1": 1}) == SKEW_SENTINEL
        assert skew_ratio({"eth0": 999_998, "eth1": 1}) == 999_998


class TestImbalanceAnalyzer:
    def test_scenario_a_reuse_share(self):
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_reuse": 99}, "eth1": {"rx_cache_reuse": 1}}
        )
        assert verdict.top_reuse_share_percent == 99
        assert verdict.top_reuse_interface == "eth0"
        assert verdict.imbalanced is True
        assert verdict.reasons[0].startswith("top reuse share imbalance: eth0 holds 99%")

    def test_scenario_b_busy_skew_boundary(self):
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_busy": 5000}, "eth1": {"rx_cache_busy": 500}}
        )
        assert verdict.busy_skew_ratio == 10
        assert verdict.imbalanced is True
        assert verdict.reasons == ("busy skew: rx_cache_busy max/min ratio 10 (threshold 10)",)

    def test_scenario_c_full_skew_sentinel(self):
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_full": 100}, "eth1": {"rx_cache_full": 0}}
        )
        assert verdict.full_skew_ratio == SKEW_SENTINEL
        assert verdict.imbalanced is True
        assert verdict.reasons == ("full skew: rx_cache_full max/min ratio inf (threshold 10)",)

    def test_saturated_ratio_renders_inf(self):
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_busy": 5_000_000}, "eth1": {"rx_cache_busy": 1}}
        )
        assert verdict.busy_skew_ratio == SKEW_SENTINEL
        assert verdict.reasons == ("busy skew: rx_cache_busy max/min ratio inf (threshold 10)",)

    def test_three_member_bond_with_idle_member(self):
        verdict = ImbalanceAnalyzer().analyze(
            {
                "eth0": {"rx_cache_busy": 100},
                "eth1": {"rx_cache_busy": 50},
                "eth2": {"rx_cache_busy": 0},
            }
        )
        assert verdict.busy_skew_ratio == 2
        assert verdict.imbalanced is False

    def test_scenario_e_zero_reuse(self):
        verdict = ImbalanceAnalyzer().analyze(
            {
                "eth0": {"rx_cache_reuse": 0, "rx_cache_busy": 300},
                "eth1": {"rx_cache_reuse": 0, "rx_cache_busy": 10},
            }
        )
        assert verdict.top_reuse_share_percent == 0
        assert verdict.top_reuse_interface == ""
        assert verdict.busy_skew_ratio == 30
        assert len(verdict.reasons) == 1
        assert verdict.reasons[0].startswith("busy skew")

    def test_balanced_bond(self):
        verdict = ImbalanceAnalyzer().analyze(
            {
                "eth0": {"rx_cache_reuse": 52, "rx_cache_busy": 12, "rx_cache_full": 3},
                "eth1": {"rx_cache_reuse": 48, "rx_cache_busy": 10, "rx_cache_full": 2},
            }
        )
        assert verdict.imbalanced is False
        assert verdict.reasons == ()
        assert verdict.top_reuse_share_percent == 52
        assert verdict.busy_skew_ratio == 1

    def test_reason_order(self):
        verdict = ImbalanceAnalyzer().analyze(
            {
                "eth0": {"rx_cache_reuse": 90, "rx_cache_busy": 1000, "rx_cache_full": 50},
                "eth1": {"rx_cache_reuse": 10, "rx_cache_busy": 1, "rx_cache_full": 0},
            }
        )
        assert [r.split(":")[0] for r in verdict.reasons] == [
            "top reuse share imbalance",
            "busy skew",
            "full skew",
        ]

    def test_missing_counter_not_treated_as_idle(self):
        # eth1's driver doesn't expose rx_cache_busy at all
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_busy": 200}, "eth1": {"rx_cache_reuse": 0}}
        )
        assert verdict.busy_skew_ratio == 1

    def test_custom_thresholds(self):
        analyzer = ImbalanceAnalyzer(
            ThresholdConfig(imbalance_percent_threshold=60, skew_ratio_threshold=3)
        )
        verdict = analyzer.analyze(
            {
                "eth0": {"rx_cache_reuse": 65, "rx_cache_busy": 30},
                "eth1": {"rx_cache_reuse": 35, "rx_cache_busy": 10},
            }
        )
        assert verdict.imbalanced is True
        assert len(verdict.reasons) == 2
        assert "threshold 60%" in verdict.reasons[0]

    def test_below_threshold_not_flagged(self):
        verdict = ImbalanceAnalyzer().analyze(
            {"eth0": {"rx_cache_reuse": 79}, "eth1": {"rx_cache_reuse": 21}}
        )
        assert verdict.top_reuse_share_percent == 79
        assert verdict.imbalanced is False

    def test_analyzer_is_stateless(self):
        analyzer = ImbalanceAnalyzer()
        skewed = {"eth0": {"rx_cache_full": 100}, "eth1": {"rx_cache_full": 0}}
        healthy = {"eth0": {"rx_cache_full": 10}, "eth1": {"rx_cache_full": 9}}
        assert analyzer.analyze(skewed).imbalanced is True
        assert analyzer.analyze(healthy).imbalanced is False
        assert analyzer.analyze(skewed) == analyzer.analyze(skewed)
