"""Tests for threshold clustering and cluster numbering."""

from __future__ import annotations

import pytest

from gtclust.core.clustering import (
    cluster_by_delink,
    cluster_graph,
    connected_components,
    distance_thresholds,
    number_clusters,
)
from gtclust.core.collapse import collapse_hypothetical_nodes
from gtclust.core.graph import Vertex, WeightedGraph
from tests.trees import PROPERTY_TREES, graph_from_newick


def _collapsed(newick: str) -> WeightedGraph:
    return collapse_hypothetical_nodes(graph_from_newick(newick))


def _groups(assignment: dict[str, int]) -> list[set[str]]:
    groups: dict[int, set[str]] = {}
    for name, cluster in assignment.items():
        groups.setdefault(cluster, set()).add(name)
    return [groups[k] for k in sorted(groups)]


class TestDistanceThresholds:
    """Tests for the threshold set."""

    def test_zero_and_distinct_weights(self, star_graph: WeightedGraph) -> None:
        """Thresholds are 0 plus distinct weights, ascending."""
        collapsed = collapse_hypothetical_nodes(star_graph)
        assert distance_thresholds(collapsed) == [0.0, 1.0, 5.0]

    def test_zero_weight_not_duplicated(self) -> None:
        """A zero-length edge does not add a second 0 threshold."""
        collapsed = _collapsed("((A:0,B:0):1,C:2);")
        assert distance_thresholds(collapsed) == [0.0, 2.0]

    def test_edgeless_graph(self) -> None:
        """A graph without edges has only the 0 threshold."""
        g = WeightedGraph()
        g.add_vertex(Vertex("A", True, False))
        assert distance_thresholds(g) == [0.0]


class TestConnectedComponents:
    """Tests for component discovery order."""

    def test_discovery_order_by_lowest_id(self) -> None:
        """Components are found from the lowest unvisited id, members sorted."""
        g = WeightedGraph()
        ids = [g.add_vertex(Vertex(n, True, False)) for n in "ABCDE"]
        g.add_edge(ids[4], ids[1], 1.0)
        g.add_edge(ids[2], ids[0], 1.0)

        assert connected_components(g) == [[0, 2], [1, 4], [3]]


class TestClusterByDelink:
    """Tests for clustering at a single threshold."""

    def test_star_tree_thresholds(self, star_graph: WeightedGraph) -> None:
        """The A/B/C scenario clusters as expected at 0, 1 and 5."""
        collapsed = collapse_hypothetical_nodes(star_graph)

        assert cluster_by_delink(collapsed, 0.0) == [["A"], ["B"], ["C"]]
        assert cluster_by_delink(collapsed, 1.0) == [["A", "B"], ["C"]]
        assert cluster_by_delink(collapsed, 5.0) == [["A", "B", "C"]]

    def test_edges_at_threshold_are_kept(self) -> None:
        """Only edges strictly heavier than the threshold are cut."""
        collapsed = _collapsed("((A:0,B:0):1,C:2);")
        assert cluster_by_delink(collapsed, 0.0) == [["A", "B"], ["C"]]

    def test_graph_not_modified(self, star_graph: WeightedGraph) -> None:
        """Cutting edges for one threshold never touches the input graph."""
        collapsed = collapse_hypothetical_nodes(star_graph)
        before = list(collapsed.edges())

        cluster_by_delink(collapsed, 0.0)

        assert list(collapsed.edges()) == before


class TestNumberClusters:
    """Tests for size-ordered cluster ids."""

    def test_largest_cluster_is_one(self) -> None:
        """Clusters are numbered by descending size."""
        assignment = number_clusters([["A"], ["B", "C", "D"], ["E", "F"]])

        assert assignment == {"B": 1, "C": 1, "D": 1, "E": 2, "F": 2, "A": 3}

    def test_ties_keep_discovery_order(self) -> None:
        """Equal-size clusters keep their relative order."""
        assignment = number_clusters([["A"], ["B"], ["C", "D"], ["E"]])

        assert assignment == {"C": 1, "D": 1, "A": 2, "B": 3, "E": 4}

    def test_empty(self) -> None:
        assert number_clusters([]) == {}


class TestClusterGraph:
    """Tests for clustering at every threshold."""

    def test_star_tree(self, star_graph: WeightedGraph) -> None:
        """Full threshold table for the A/B/C scenario."""
        clusters = cluster_graph(collapse_hypothetical_nodes(star_graph))

        assert list(clusters) == [0.0, 1.0, 5.0]
        assert clusters[0.0] == {"A": 1, "B": 2, "C": 3}
        assert clusters[1.0] == {"A": 1, "B": 1, "C": 2}
        assert clusters[5.0] == {"A": 1, "B": 1, "C": 1}

    def test_nested_tree(self, nested_graph: WeightedGraph) -> None:
        """Clusters of the two-cherry tree after collapsing."""
        clusters = cluster_graph(collapse_hypothetical_nodes(nested_graph))

        assert list(clusters) == [0.0, 2.0, 3.0]
        assert clusters[0.0] == {"B": 1, "A": 2, "C": 3, "D": 4}
        assert clusters[2.0] == {"B": 1, "A": 1, "C": 2, "D": 3}
        assert clusters[3.0] == {"B": 1, "A": 1, "C": 1, "D": 1}

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_workers_give_same_result(self, newick: str) -> None:
        """Threaded clustering matches sequential clustering."""
        collapsed = _collapsed(newick)

        sequential = cluster_graph(collapsed, workers=1)
        threaded = cluster_graph(collapsed, workers=4)

        assert threaded == sequential
        assert list(threaded) == list(sequential)


class TestClusterProperties:
    """Structural properties that hold for every tree."""

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_every_vertex_assigned_once(self, newick: str) -> None:
        """Each threshold assigns every collapsed vertex exactly once."""
        collapsed = _collapsed(newick)
        names = collapsed.names()

        for assignment in cluster_graph(collapsed).values():
            assert sorted(assignment) == sorted(names)
            assert set(assignment.values()) == set(range(1, max(assignment.values()) + 1))

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_clusters_only_merge(self, newick: str) -> None:
        """Every cluster at a lower threshold lies inside one at a higher threshold."""
        clusters = cluster_graph(_collapsed(newick))
        thresholds = list(clusters)

        for low, high in zip(thresholds, thresholds[1:]):
            high_groups = _groups(clusters[high])
            for group in _groups(clusters[low]):
                assert any(group <= other for other in high_groups)

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_cluster_one_is_largest(self, newick: str) -> None:
        """Cluster 1 is at least as large as any other cluster."""
        for assignment in cluster_graph(_collapsed(newick)).values():
            sizes = [len(g) for g in _groups(assignment)]
            assert sizes[0] == max(sizes)
            assert sizes == sorted(sizes, reverse=True)

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_max_threshold_single_cluster(self, newick: str) -> None:
        """At the largest weight a connected graph is one cluster."""
        clusters = cluster_graph(_collapsed(newick))
        top = clusters[max(clusters)]

        assert set(top.values()) == {1}

    @pytest.mark.parametrize("newick", PROPERTY_TREES)
    def test_zero_threshold_singletons(self, newick: str) -> None:
        """Without zero-weight edges every vertex is alone at threshold 0."""
        collapsed = _collapsed(newick)
        if 0.0 in collapsed.distinct_weights():
            pytest.skip("tree has zero-length edges after collapsing")

        zero = cluster_graph(collapsed)[0.0]
        assert len(set(zero.values())) == len(collapsed)
