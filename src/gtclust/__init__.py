"""
gtclust: threshold cluster tables from phylogenetic trees.

Collapses unlabelled internal nodes of a Newick tree into their nearest
labelled neighbours, then assigns every isolate a single-linkage cluster
at each distinct branch length for genomic-epidemiology strain typing.
"""

__version__ = "0.1.0"

from gtclust.core.pipeline import ClusterResult, run_pipeline
from gtclust.models.config import ClusterConfig

__all__ = [
    "ClusterConfig",
    "ClusterResult",
    "run_pipeline",
    "__version__",
]
