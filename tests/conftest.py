"""
Shared pytest fixtures for gtclust tests.

Provides parsed graphs and temporary tree files for unit and
integration testing.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gtclust.core.graph import WeightedGraph
from tests.trees import NESTED_NEWICK, STAR_NEWICK, graph_from_newick


@pytest.fixture
def star_graph() -> WeightedGraph:
    """Graph of the three-leaf star tree."""
    return graph_from_newick(STAR_NEWICK)


@pytest.fixture
def nested_graph() -> WeightedGraph:
    """Graph of the two-cherry tree."""
    return graph_from_newick(NESTED_NEWICK)


@pytest.fixture
def star_tree_file(tmp_path: Path) -> Path:
    """Three-leaf star tree written to a Newick file."""
    path = tmp_path / "star.nwk"
    path.write_text(STAR_NEWICK + "\n")
    return path


@pytest.fixture
def nested_tree_file(tmp_path: Path) -> Path:
    """Two-cherry tree written to a Newick file."""
    path = tmp_path / "nested.nwk"
    path.write_text(NESTED_NEWICK + "\n")
    return path
