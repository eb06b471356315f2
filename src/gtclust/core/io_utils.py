"""
I/O utilities for cluster table serialization.
"""

from __future__ import annotations

from pathlib import Path

import polars as pl

from gtclust.core.table import ISOLATE_COLUMN


def write_cluster_table(
    df: pl.DataFrame,
    path: Path,
    separator: str = "\t",
) -> None:
    """
    Write a cluster table as a delimited text file.

    Parent directories are created as needed.

    Args:
        df: Cluster table from build_cluster_table().
        path: Output file path.
        separator: Field separator (tab by default).

    Example:
        >>> df = pl.DataFrame({"isolate": ["A"], "0.0": [1]})
        >>> write_cluster_table(df, Path("clusters.tsv"))
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    df.write_csv(path, separator=separator)


def read_cluster_table(path: Path, separator: str = "\t") -> pl.DataFrame:
    """
    Read a cluster table written by write_cluster_table().

    The isolate column is always read as text, even when isolate names
    look numeric; every other column is read as Int64.

    Args:
        path: Input file path.
        separator: Field separator (tab by default).

    Returns:
        Polars DataFrame.
    """
    header = pl.read_csv(path, separator=separator, n_rows=0).columns
    schema = {
        name: (pl.Utf8 if name == ISOLATE_COLUMN else pl.Int64) for name in header
    }
    return pl.read_csv(path, separator=separator, schema_overrides=schema)
