"""
Assemble the isolate x threshold cluster table.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import polars as pl

from gtclust.core.clustering import ClusterAssignment
from gtclust.core.exceptions import ClusterInvariantError

ISOLATE_COLUMN = "isolate"


def format_threshold(threshold: float) -> str:
    """Column label for a threshold.

    Uses the shortest representation that round-trips the float value,
    so ``0`` becomes ``"0.0"`` and ``0.0125`` stays ``"0.0125"``.

    Example:
        >>> format_threshold(1)
        '1.0'
        >>> format_threshold(0.00001)
        '1e-05'
    """
    return repr(float(threshold))


def cluster_column(
    threshold: float,
    strain_order: Sequence[str],
    clusters_at_threshold: ClusterAssignment,
) -> list[int]:
    """Cluster ids of each strain at one threshold, in row order.

    Raises:
        ClusterInvariantError: If a strain has no assignment.
    """
    column: list[int] = []
    for strain in strain_order:
        try:
            column.append(clusters_at_threshold[strain])
        except KeyError:
            raise ClusterInvariantError(strain, threshold) from None
    return column


def build_cluster_table(
    strains: Sequence[str],
    clusters: Mapping[float, ClusterAssignment],
) -> pl.DataFrame:
    """Build the cluster table.

    Args:
        strains: Vertex names of the collapsed graph; fixes row order.
        clusters: Cluster assignment per threshold.

    Returns:
        DataFrame with an ``isolate`` column followed by one Int64 column
        per threshold in ascending order.

    Raises:
        ClusterInvariantError: If any strain is missing from a mapping.
    """
    columns = [pl.Series(ISOLATE_COLUMN, list(strains), dtype=pl.Utf8)]

    for threshold in sorted(clusters):
        columns.append(
            pl.Series(
                format_threshold(threshold),
                cluster_column(threshold, strains, clusters[threshold]),
                dtype=pl.Int64,
            )
        )

    return pl.DataFrame(columns)
