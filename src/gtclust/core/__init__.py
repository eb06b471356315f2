"""
Core algorithms for tree-based threshold clustering.

This module contains graph construction from parsed trees, collapsing of
hypothetical nodes, and single-linkage clustering at every distance
threshold.
"""

from gtclust.core.clustering import cluster_by_delink, cluster_graph, number_clusters
from gtclust.core.collapse import collapse_hypothetical_nodes
from gtclust.core.graph import Vertex, WeightedGraph, build_graph
from gtclust.core.table import build_cluster_table

__all__ = [
    "Vertex",
    "WeightedGraph",
    "build_cluster_table",
    "build_graph",
    "cluster_by_delink",
    "cluster_graph",
    "collapse_hypothetical_nodes",
    "number_clusters",
]
