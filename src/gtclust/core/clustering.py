"""
Threshold ("delink") clustering of a collapsed tree graph.

For every distinct edge weight, plus zero, edges heavier than the
threshold are removed from a private copy of the graph and the remaining
connected components become that threshold's clusters. Clusters are then
numbered by descending size, so cluster 1 is always the largest.
"""

from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeAlias

from gtclust.core.graph import WeightedGraph

logger = logging.getLogger(__name__)

# name -> 1-based cluster id at one threshold
ClusterAssignment: TypeAlias = dict[str, int]
# threshold -> assignment
ThresholdClusters: TypeAlias = dict[float, ClusterAssignment]


def distance_thresholds(graph: WeightedGraph) -> list[float]:
    """Zero plus every distinct edge weight, ascending."""
    return sorted({0.0, *(float(w) for w in graph.distinct_weights())})


def connected_components(graph: WeightedGraph) -> list[list[int]]:
    """Connected components of a graph.

    Components are discovered by breadth-first search starting from the
    lowest unvisited vertex id, and members are listed in ascending id.
    """
    seen: set[int] = set()
    components: list[list[int]] = []

    for start in graph.vertex_ids():
        if start in seen:
            continue
        seen.add(start)
        members = [start]
        queue = deque([start])
        while queue:
            for nbr in graph.neighbors(queue.popleft()):
                if nbr not in seen:
                    seen.add(nbr)
                    members.append(nbr)
                    queue.append(nbr)
        components.append(sorted(members))

    return components


def cluster_by_delink(graph: WeightedGraph, max_distance: float) -> list[list[str]]:
    """Single-linkage clusters of a graph at one distance threshold.

    Works on a copy, so the caller's graph is never modified.

    Args:
        graph: Collapsed graph.
        max_distance: Edges with weight above this are cut.

    Returns:
        Clusters as lists of vertex names, in discovery order.
    """
    g = graph.copy()

    to_remove = [(u, v) for u, v, w in g.edges() if w > max_distance]
    for u, v in to_remove:
        g.remove_edge(u, v)

    return [[g.vertex(vid).name for vid in members] for members in connected_components(g)]


def number_clusters(clusters: list[list[str]]) -> ClusterAssignment:
    """Assign cluster ids by descending cluster size.

    The sort is stable, so clusters of equal size keep their discovery
    order.

    Args:
        clusters: Clusters as lists of names.

    Returns:
        Mapping of each name to its 1-based cluster id.
    """
    sorted_by_size = sorted(clusters, key=len, reverse=True)

    strain_cluster: ClusterAssignment = {}
    for cluster_num, members in enumerate(sorted_by_size, start=1):
        for member in members:
            strain_cluster[member] = cluster_num

    return strain_cluster


def _cluster_at(graph: WeightedGraph, threshold: float) -> tuple[float, ClusterAssignment]:
    return threshold, number_clusters(cluster_by_delink(graph, threshold))


def cluster_graph(graph: WeightedGraph, workers: int = 1) -> ThresholdClusters:
    """Cluster a collapsed graph at every distance threshold.

    Thresholds are independent: each one copies the graph before cutting
    edges. With ``workers > 1`` they are computed on a thread pool.

    Args:
        graph: Collapsed graph (no hypothetical vertices).
        workers: Number of worker threads.

    Returns:
        Mapping of threshold to cluster assignment, in ascending threshold
        order.
    """
    thresholds = distance_thresholds(graph)
    logger.info(
        "Clustering %d vertices at %d thresholds", len(graph), len(thresholds)
    )

    results: ThresholdClusters = {}
    if workers <= 1 or len(thresholds) == 1:
        for t in thresholds:
            _, results[t] = _cluster_at(graph, t)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_cluster_at, graph, t) for t in thresholds]
            for future in as_completed(futures):
                threshold, assignment = future.result()
                results[threshold] = assignment

    for threshold in thresholds:
        logger.debug(
            "Threshold %s: %d clusters",
            threshold,
            max(results[threshold].values(), default=0),
        )

    return {t: results[t] for t in thresholds}
