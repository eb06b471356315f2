"""
Custom exceptions with actionable guidance.

Provides specific error types for the failure modes of tree ingest,
graph construction, node collapsing and cluster table assembly, each
with a suggestion for resolution where one exists.
"""

from __future__ import annotations


class GtclustError(Exception):
    """Base exception for gtclust errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        self.message = message
        self.suggestion = suggestion
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.suggestion:
            return f"{self.message}\n\nSuggestion: {self.suggestion}"
        return self.message


class TreeIngestError(GtclustError):
    """Base class for tree file errors."""



class TreeFileNotFoundError(TreeIngestError):
    """Raised when the tree file does not exist."""

    def __init__(self, path: str):
        super().__init__(
            message=f"Tree file not found: {path}",
            suggestion="Check the --input path points to an existing Newick file.",
        )
        self.path = path


class MalformedTreeError(TreeIngestError):
    """Raised when the tree file cannot be parsed as Newick."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            message=f"Could not parse Newick tree '{path}': {reason}",
            suggestion=(
                "The input must be a single Newick tree terminated by ';' with "
                "branch lengths (e.g. '(A:1,B:1,(C:2,D:3):0.5);'). "
                "Branch lengths must be non-negative."
            ),
        )
        self.path = path
        self.reason = reason


class GraphError(GtclustError):
    """Base class for errors raised while building or collapsing the graph."""



class DuplicateNodeNameError(GraphError):
    """Raised when two tree nodes resolve to the same name."""

    def __init__(self, name: str, first_index: int, second_index: int):
        super().__init__(
            message=(
                f"Duplicate node name '{name}' "
                f"(nodes {first_index} and {second_index})"
            ),
            suggestion=(
                "Every labelled node in the tree must have a unique name. "
                "Rename or remove the duplicated isolate before clustering."
            ),
        )
        self.name = name
        self.first_index = first_index
        self.second_index = second_index


class DegenerateNodeError(GraphError):
    """Raised when a hypothetical vertex has no neighbour to collapse into."""

    def __init__(self, vertex_id: int, name: str):
        super().__init__(
            message=(
                f"Hypothetical node '{name}' (vertex {vertex_id}) has no "
                "incident edges and cannot be collapsed"
            ),
            suggestion=(
                "The tree contains an unlabelled node that is disconnected from "
                "every labelled node. Check that the Newick file describes a "
                "single connected tree."
            ),
        )
        self.vertex_id = vertex_id
        self.name = name


class ClusterInvariantError(GtclustError):
    """Raised when a row name is missing from a threshold's cluster mapping.

    This indicates a defect in node collapsing or threshold clustering,
    not a problem with the input.
    """

    def __init__(self, name: str, threshold: float):
        super().__init__(
            message=(
                f"Internal error: isolate '{name}' has no cluster assignment "
                f"at threshold {threshold!r}"
            ),
            suggestion="Please report this as a bug together with the input tree.",
        )
        self.name = name
        self.threshold = threshold


class ConfigurationError(GtclustError):
    """Raised when configuration is invalid."""
