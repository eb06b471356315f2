"""
Pydantic data models for gtclust.

Provides type-safe models for parsed trees and run configuration.
"""

from gtclust.models.config import ClusterConfig
from gtclust.models.tree import TreeEdge, TreeNode

__all__ = [
    "ClusterConfig",
    "TreeEdge",
    "TreeNode",
]
