"""
End-to-end clustering pipeline.

Reads a Newick tree, collapses hypothetical nodes, clusters the
collapsed graph at every distance threshold and assembles the cluster
table, optionally writing it to disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from gtclust.core.clustering import ThresholdClusters, cluster_graph
from gtclust.core.collapse import collapse_hypothetical_nodes
from gtclust.core.graph import WeightedGraph, build_graph
from gtclust.core.ingest import read_tree
from gtclust.core.io_utils import write_cluster_table
from gtclust.core.table import build_cluster_table
from gtclust.models.config import ClusterConfig

logger = logging.getLogger(__name__)


@dataclass
class ClusterResult:
    """Outputs of one pipeline run.

    Attributes:
        graph: Collapsed graph the clusters were computed on.
        thresholds: Distance thresholds, ascending.
        clusters: Cluster assignment per threshold.
        table: The isolate x threshold cluster table.
    """

    graph: WeightedGraph
    thresholds: list[float]
    clusters: ThresholdClusters
    table: pl.DataFrame

    @property
    def strains(self) -> list[str]:
        return self.graph.names()


def cluster_tree(graph: WeightedGraph, config: ClusterConfig | None = None) -> ClusterResult:
    """Collapse and cluster an already built tree graph."""
    config = config or ClusterConfig()

    collapsed = collapse_hypothetical_nodes(graph)
    strains = collapsed.names()
    clusters = cluster_graph(collapsed, workers=config.workers)
    table = build_cluster_table(strains, clusters)

    return ClusterResult(
        graph=collapsed,
        thresholds=list(clusters),
        clusters=clusters,
        table=table,
    )


def run_pipeline(
    input_path: Path,
    output_path: Path | None = None,
    config: ClusterConfig | None = None,
) -> ClusterResult:
    """Run the full tree-to-cluster-table pipeline.

    Args:
        input_path: Newick tree file.
        output_path: Where to write the cluster table. Nothing is written
            when None.
        config: Run configuration (defaults if None).

    Returns:
        ClusterResult with the collapsed graph, clusters and table.

    Raises:
        GtclustError: Any ingest, graph or invariant failure.
    """
    config = config or ClusterConfig()

    nodes, edges = read_tree(input_path, config.missing_branch_length)
    graph = build_graph(nodes, edges)
    logger.info(
        "Loaded tree with %d nodes (%d hypothetical)",
        len(graph),
        len(graph.hypothetical_ids()),
    )

    result = cluster_tree(graph, config)

    if output_path is not None:
        write_cluster_table(result.table, output_path, separator=config.separator)
        logger.info("Wrote %d isolates to %s", result.table.height, output_path)

    return result
