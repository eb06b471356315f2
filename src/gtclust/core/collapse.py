"""
Collapse hypothetical (unlabelled) vertices into their nearest neighbour.

Each step picks the hypothetical vertex with the most neighbours, finds
its closest neighbour by edge weight, lets the hypothetical vertex take
over that neighbour's identity and edges, and removes the neighbour.
Steps repeat until no hypothetical vertex remains. Edge weights are
carried through unchanged.
"""

from __future__ import annotations

import logging

from gtclust.core.exceptions import DegenerateNodeError
from gtclust.core.graph import Vertex, WeightedGraph

logger = logging.getLogger(__name__)


def select_hypothetical(graph: WeightedGraph) -> int | None:
    """Pick the next vertex to collapse.

    Returns:
        Id of the hypothetical vertex with the largest neighbour count
        (lowest id on ties), or None if no hypothetical vertex remains.
    """
    hypotheticals = graph.hypothetical_ids()
    if not hypotheticals:
        return None
    # ids are ascending, so max() keeps the lowest id among equal degrees
    return max(hypotheticals, key=graph.degree)


def closest_neighbour(graph: WeightedGraph, vid: int) -> int:
    """Lowest-id neighbour of ``vid`` at minimum edge weight.

    Self-loops are ignored.

    Raises:
        DegenerateNodeError: If ``vid`` has no neighbour other than itself.
    """
    weights = {nbr: graph.weight(vid, nbr) for nbr in graph.neighbors(vid) if nbr != vid}
    if not weights:
        raise DegenerateNodeError(vid, graph.vertex(vid).name)

    w_min = min(weights.values())
    return min(nbr for nbr, w in weights.items() if w == w_min)


def collapse_node(graph: WeightedGraph, vid: int) -> int:
    """Merge the closest neighbour of ``vid`` into ``vid`` in place.

    ``vid`` takes over the neighbour's name and flags, every other edge of
    the neighbour is rewired onto ``vid``, and the neighbour is removed.
    The former ``vid``-neighbour edge survives as a self-loop until
    collapsing finishes.

    Returns:
        Id of the removed neighbour.
    """
    target = closest_neighbour(graph, vid)
    absorbed = graph.vertex(target)

    logger.debug(
        "Collapsing %s into %s (weight %s)",
        graph.vertex(vid).name,
        absorbed.name,
        graph.weight(vid, target),
    )

    graph.set_vertex(vid, Vertex(absorbed.name, absorbed.is_leaf, absorbed.is_hypothetical))

    for nbr in graph.neighbors(target):
        if nbr != target:
            graph.add_edge(vid, nbr, graph.weight(target, nbr))

    graph.remove_vertex(target)
    return target


def collapse_hypothetical_nodes(graph: WeightedGraph) -> WeightedGraph:
    """Collapse all hypothetical vertices of a graph.

    The input graph is not modified.

    Args:
        graph: Graph built from a parsed tree.

    Returns:
        New graph with no hypothetical vertices and no self-loops.

    Raises:
        DegenerateNodeError: If a hypothetical vertex has no neighbour.
    """
    collapsed = graph.copy()
    steps = 0

    while True:
        vid = select_hypothetical(collapsed)
        if vid is None:
            break
        collapse_node(collapsed, vid)
        steps += 1

    loops = collapsed.remove_self_loops()

    logger.info(
        "Collapsed %d hypothetical nodes; %d vertices and %d edges remain",
        steps,
        len(collapsed),
        collapsed.edge_count(),
    )
    if loops:
        logger.debug("Removed %d self-loops", loops)
    return collapsed
