"""
Weighted undirected graph with per-vertex metadata.

Vertices live in an arena indexed by integer id. Removal tombstones the
slot, so the ids (and therefore the names) of all remaining vertices stay
stable while the graph is being collapsed. Edges are held in a plain
adjacency map ``id -> {neighbour id -> weight}``; a self-loop is stored
once, under its own vertex.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from gtclust.core.exceptions import DuplicateNodeNameError
from gtclust.models.tree import TreeEdge, TreeNode

logger = logging.getLogger(__name__)

HYPOTHETICAL_PREFIX = "hypothetical_"


@dataclass
class Vertex:
    """Metadata carried by a graph vertex.

    Attributes:
        name: Isolate name, or ``hypothetical_<index>`` for unlabelled nodes.
        is_leaf: Whether the vertex was a tip of the tree.
        is_hypothetical: True iff the original node had no name.
    """

    name: str
    is_leaf: bool
    is_hypothetical: bool


class WeightedGraph:
    """Undirected weighted graph without parallel edges.

    Example:
        >>> g = WeightedGraph()
        >>> a = g.add_vertex(Vertex("A", True, False))
        >>> b = g.add_vertex(Vertex("B", True, False))
        >>> g.add_edge(a, b, 0.5)
        True
        >>> g.weight(b, a)
        0.5
    """

    def __init__(self) -> None:
        self._vertices: list[Vertex | None] = []
        self._adj: list[dict[int, float] | None] = []
        self._n_live = 0

    def __len__(self) -> int:
        return self._n_live

    def __contains__(self, vid: object) -> bool:
        return (
            isinstance(vid, int)
            and 0 <= vid < len(self._vertices)
            and self._vertices[vid] is not None
        )

    def __repr__(self) -> str:
        return f"WeightedGraph(vertices={len(self)}, edges={self.edge_count()})"

    # ------------------------------------------------------------------
    # Vertices
    # ------------------------------------------------------------------

    def add_vertex(self, vertex: Vertex) -> int:
        """Add a vertex and return its id."""
        self._vertices.append(vertex)
        self._adj.append({})
        self._n_live += 1
        return len(self._vertices) - 1

    def vertex(self, vid: int) -> Vertex:
        """Return the metadata of a live vertex."""
        vertex = self._vertices[vid] if 0 <= vid < len(self._vertices) else None
        if vertex is None:
            raise KeyError(f"No vertex with id {vid}")
        return vertex

    def set_vertex(self, vid: int, vertex: Vertex) -> None:
        """Replace the metadata of a live vertex, keeping its edges."""
        self.vertex(vid)
        self._vertices[vid] = vertex

    def remove_vertex(self, vid: int) -> None:
        """Remove a vertex and all its incident edges.

        The id is tombstoned, never reused.
        """
        for nbr in list(self.neighbors(vid)):
            if nbr != vid:
                del self._adj[nbr][vid]
        self._vertices[vid] = None
        self._adj[vid] = None
        self._n_live -= 1

    def vertex_ids(self) -> Iterator[int]:
        """Iterate live vertex ids in ascending order."""
        return (vid for vid, v in enumerate(self._vertices) if v is not None)

    def names(self) -> list[str]:
        """Names of live vertices in vertex order."""
        return [self.vertex(vid).name for vid in self.vertex_ids()]

    def hypothetical_ids(self) -> list[int]:
        """Ids of live hypothetical vertices in ascending order."""
        return [vid for vid in self.vertex_ids() if self.vertex(vid).is_hypothetical]

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(self, u: int, v: int, weight: float) -> bool:
        """Add an undirected edge.

        An edge that already exists keeps its original weight.

        Returns:
            True if the edge was added, False if it already existed.
        """
        adj_u = self._live_adj(u)
        adj_v = self._live_adj(v)
        if self.has_edge(u, v):
            return False
        adj_u[v] = weight
        adj_v[u] = weight
        return True

    def remove_edge(self, u: int, v: int) -> None:
        """Remove the edge between ``u`` and ``v``."""
        del self._live_adj(u)[v]
        if u != v:
            del self._live_adj(v)[u]

    def has_edge(self, u: int, v: int) -> bool:
        return v in self._live_adj(u)

    def weight(self, u: int, v: int) -> float:
        """Weight of the edge between ``u`` and ``v``."""
        return self._live_adj(u)[v]

    def neighbors(self, vid: int) -> list[int]:
        """Neighbour ids in ascending order; a self-loop lists ``vid`` itself."""
        return sorted(self._live_adj(vid))

    def degree(self, vid: int) -> int:
        """Number of distinct neighbours, a self-loop counting as one."""
        return len(self._live_adj(vid))

    def edges(self) -> Iterator[tuple[int, int, float]]:
        """Iterate edges once each as ``(u, v, weight)`` with ``u <= v``."""
        for u in self.vertex_ids():
            for v, w in sorted(self._live_adj(u).items()):
                if u <= v:
                    yield u, v, w

    def edge_count(self) -> int:
        return sum(1 for _ in self.edges())

    def self_loops(self) -> list[int]:
        """Ids of vertices that carry a self-loop."""
        return [vid for vid in self.vertex_ids() if vid in self._live_adj(vid)]

    def remove_self_loops(self) -> int:
        """Remove every self-loop and return how many were removed."""
        loops = self.self_loops()
        for vid in loops:
            self.remove_edge(vid, vid)
        return len(loops)

    def distinct_weights(self) -> list[float]:
        """Sorted distinct edge weights."""
        return sorted({w for _, _, w in self.edges()})

    def copy(self) -> WeightedGraph:
        """Independent copy sharing no mutable state with this graph."""
        other = WeightedGraph()
        other._vertices = [
            Vertex(v.name, v.is_leaf, v.is_hypothetical) if v is not None else None
            for v in self._vertices
        ]
        other._adj = [dict(a) if a is not None else None for a in self._adj]
        other._n_live = self._n_live
        return other

    def _live_adj(self, vid: int) -> dict[int, float]:
        adj = self._adj[vid] if 0 <= vid < len(self._adj) else None
        if adj is None:
            raise KeyError(f"No vertex with id {vid}")
        return adj


def build_graph(nodes: Sequence[TreeNode], edges: Sequence[TreeEdge]) -> WeightedGraph:
    """Build a weighted graph from parsed tree nodes and edges.

    Unlabelled nodes are named ``hypothetical_<index>`` (1-based position
    in ``nodes``) and marked hypothetical. Vertex ids equal node positions.

    Args:
        nodes: Parsed tree nodes.
        edges: Parsed tree edges, endpoints given as node positions.

    Returns:
        The graph with one vertex per node and one edge per branch.

    Raises:
        DuplicateNodeNameError: If two nodes resolve to the same name.
    """
    graph = WeightedGraph()
    name_index: dict[str, int] = {}

    for idx, node in enumerate(nodes, start=1):
        if node.name:
            vertex = Vertex(node.name, node.is_leaf, False)
        else:
            vertex = Vertex(f"{HYPOTHETICAL_PREFIX}{idx}", node.is_leaf, True)

        if vertex.name in name_index:
            raise DuplicateNodeNameError(vertex.name, name_index[vertex.name] + 1, idx)

        name_index[vertex.name] = graph.add_vertex(vertex)

    for edge in edges:
        src = name_index[_node_name(nodes, edge.node_a)]
        dst = name_index[_node_name(nodes, edge.node_b)]
        graph.add_edge(src, dst, edge.branch_length)

    logger.debug(
        "Built graph with %d vertices (%d hypothetical) and %d edges",
        len(graph),
        len(graph.hypothetical_ids()),
        graph.edge_count(),
    )
    return graph


def _node_name(nodes: Sequence[TreeNode], position: int) -> str:
    name = nodes[position].name
    return name if name else f"{HYPOTHETICAL_PREFIX}{position + 1}"
