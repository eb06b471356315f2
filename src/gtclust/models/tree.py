"""
Data models for parsed phylogenetic trees.

A parsed tree is represented as a flat node list plus an edge list that
references nodes by their position in the node list. This is the
hand-off format between tree ingest and graph construction.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class TreeNode(BaseModel):
    """Single node of a parsed tree.

    Attributes:
        name: Node label. Empty for unlabelled internal nodes.
        is_leaf: Whether the node is a tip of the tree.
    """

    name: str = Field(default="", description="Node label (empty if unlabelled)")
    is_leaf: bool = Field(default=False, description="Tip of the tree")

    model_config = {"frozen": True}


class TreeEdge(BaseModel):
    """Single branch of a parsed tree.

    Attributes:
        node_a: 0-based position of the parent node in the node list.
        node_b: 0-based position of the child node in the node list.
        branch_length: Branch length, used as the clustering distance.
    """

    node_a: int = Field(ge=0, description="Index of the first endpoint")
    node_b: int = Field(ge=0, description="Index of the second endpoint")
    branch_length: float = Field(ge=0, description="Branch length")

    model_config = {"frozen": True}
