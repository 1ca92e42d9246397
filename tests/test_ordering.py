"""Tests for case-insensitive cluster-name ordering."""

from __future__ import annotations

import pytest

from restsearch.models import Cluster, Snapshot
from restsearch.ordering import cluster_sort_key, compare_cluster_names


class TestCompareClusterNames:
    @pytest.mark.parametrize(
        "a, b",
        [("ClusterX", "clusterx"), ("ABC", "abc"), ("mixedCase", "MIXEDcase"), ("", "")],
    )
    def test_case_variants_equal(self, a, b):
        assert compare_cluster_names(a, b) == 0
        assert compare_cluster_names(b, a) == 0

    def test_lexicographic(self):
        assert compare_cluster_names("alpha", "Beta") < 0
        assert compare_cluster_names("Beta", "alpha") > 0

    def test_prefix_sorts_first(self):
        assert compare_cluster_names("Cap", "capServices") < 0

    def test_sort_key(self):
        names = ["zeta", "Alpha", "beta", "ALPHA2"]
        assert sorted(names, key=cluster_sort_key) == ["Alpha", "ALPHA2", "beta", "zeta"]


def test_snapshot_sorted_cluster_names():
    snapshot = Snapshot({name: Cluster(name=name, services=()) for name in ["b", "A", "c"]})
    assert snapshot.sorted_cluster_names() == ["A", "b", "c"]
