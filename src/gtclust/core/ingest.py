"""Read Newick trees into flat node and edge lists.

Trees are parsed with BioPython's Phylo module. Every clade becomes one
node (enumerated in preorder, root first) and every parent-child relation
becomes one edge weighted by the child's branch length. Numeric labels on
internal nodes are read as support values, not names.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING

from gtclust.core.exceptions import MalformedTreeError, TreeFileNotFoundError
from gtclust.models.tree import TreeEdge, TreeNode

if TYPE_CHECKING:
    from Bio.Phylo.BaseTree import Clade, Tree

logger = logging.getLogger(__name__)


def _preorder(tree: Tree) -> list[Clade]:
    """Clades in preorder, root first, children left to right.

    Iterative, so tree depth is not bounded by the recursion limit.
    """
    clades: list[Clade] = []
    stack = [tree.root]
    while stack:
        clade = stack.pop()
        clades.append(clade)
        stack.extend(reversed(clade.clades))
    return clades


def tree_to_lists(
    tree: Tree,
    missing_branch_length: float = 0.0,
    source: str = "<tree>",
) -> tuple[list[TreeNode], list[TreeEdge]]:
    """Flatten a BioPython tree into node and edge lists.

    Args:
        tree: Parsed BioPython Tree.
        missing_branch_length: Length used for branches without one.
        source: Label of the tree origin, used in error messages.

    Returns:
        Tuple of (nodes, edges). Edge endpoints are 0-based node positions.

    Raises:
        MalformedTreeError: If a branch length is negative.
    """
    clades = _preorder(tree)
    position = {id(clade): idx for idx, clade in enumerate(clades)}

    nodes: list[TreeNode] = []
    edges: list[TreeEdge] = []
    missing = 0

    for idx, clade in enumerate(clades):
        # BioPython moves numeric internal labels (support values) to
        # clade.confidence, so those nodes arrive unnamed and are collapsed.
        nodes.append(TreeNode(name=clade.name or "", is_leaf=clade.is_terminal()))

        for child in clade.clades:
            length = child.branch_length
            if length is None:
                length = missing_branch_length
                missing += 1
            elif length < 0:
                raise MalformedTreeError(
                    source,
                    f"negative branch length {length} above node "
                    f"'{child.name or position[id(child)] + 1}'",
                )
            edges.append(
                TreeEdge(
                    node_a=idx,
                    node_b=position[id(child)],
                    branch_length=float(length),
                )
            )

    if missing:
        logger.warning(
            "%d branches have no length; using %s", missing, missing_branch_length
        )

    logger.debug("Parsed %d nodes and %d edges from %s", len(nodes), len(edges), source)
    return nodes, edges


def _parse(handle, source: str) -> Tree:
    from Bio import Phylo

    try:
        trees = list(Phylo.parse(handle, "newick"))
    except Exception as e:
        raise MalformedTreeError(source, str(e) or type(e).__name__) from e

    if not trees:
        raise MalformedTreeError(source, "no tree found")
    if len(trees) > 1:
        logger.warning("%s contains %d trees; using the first", source, len(trees))
    return trees[0]


def parse_newick(
    text: str,
    missing_branch_length: float = 0.0,
) -> tuple[list[TreeNode], list[TreeEdge]]:
    """Parse a Newick string into node and edge lists.

    Args:
        text: Newick tree string.
        missing_branch_length: Length used for branches without one.

    Returns:
        Tuple of (nodes, edges).

    Raises:
        MalformedTreeError: If the string is not a valid Newick tree.
    """
    tree = _parse(StringIO(text), "<string>")
    return tree_to_lists(tree, missing_branch_length, "<string>")


def read_tree(
    path: Path,
    missing_branch_length: float = 0.0,
) -> tuple[list[TreeNode], list[TreeEdge]]:
    """Read a Newick tree file into node and edge lists.

    Args:
        path: Path to the Newick file.
        missing_branch_length: Length used for branches without one.

    Returns:
        Tuple of (nodes, edges).

    Raises:
        TreeFileNotFoundError: If the file does not exist.
        MalformedTreeError: If the file is not a valid Newick tree.
    """
    if not path.exists():
        raise TreeFileNotFoundError(str(path))

    with path.open() as handle:
        tree = _parse(handle, str(path))
    return tree_to_lists(tree, missing_branch_length, str(path))
