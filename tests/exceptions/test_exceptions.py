"""Tests for the exception hierarchy."""

import pytest

from rx_cache_triage.exceptions import (
    CollectionError,
    ConfigurationError,
    InvalidConfigError,
    NodeCollectionError,
    TriageError,
)


class TestTriageError:
    def test_message_only(self):
        assert str(TriageError("boom")) == "boom"

    def test_details_rendered(self):
        err = TriageError("boom", details={"node": "n1"})
        assert str(err) == "boom (node=n1)"


class TestHierarchy:
    @pytest.mark.parametrize(
        "err",
        [
            ConfigurationError("bad"),
            InvalidConfigError("skew_ratio_threshold", -1, "must be a positive integer"),
            CollectionError("no oc"),
            NodeCollectionError("n1", "timeout"),
        ],
    )
    def test_all_derive_from_base(self, err):
        assert isinstance(err, TriageError)

    def test_invalid_config_is_configuration_error(self):
        err = InvalidConfigError("flag_threshold", -1, "must be non-negative")
        assert isinstance(err, ConfigurationError)
        assert err.key == "flag_threshold"
        assert err.details["reason"] == "must be non-negative"

    def test_collection_error_command(self):
        err = CollectionError("exit status 1", command="oc get nodes -o name")
        assert err.details == {"reason": "exit status 1", "command": "oc get nodes -o name"}

    def test_node_collection_error(self):
        err = NodeCollectionError("worker-2", "permission denied")
        assert err.node == "worker-2"
        assert "worker-2" in str(err)
