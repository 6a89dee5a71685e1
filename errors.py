"""
Error taxonomy for the weighted graph engine.

Every error is raised at the point of the invalid call and leaves the graph
untouched. A missing edge is not an error: get_weight returns None for it.
"""


class GraphError(Exception):
    """Base class for all graph construction and lookup errors."""


class DuplicateVertexError(GraphError, ValueError):
    """Raised by add_vertex when the vertex is already in the graph."""

    def __init__(self, vertex: object) -> None:
        super().__init__(f"Vertex {vertex!r} is already in the graph.")
        self.vertex = vertex


class InvalidEdgeError(GraphError, ValueError):
    """Raised by add_edge for a missing endpoint or a negative weight."""


class UnknownVertexError(GraphError, KeyError):
    """Raised when a lookup or algorithm names a vertex the graph does not hold."""

    def __init__(self, vertex: object) -> None:
        super().__init__(f"Vertex {vertex!r} is not in the graph.")
        self.vertex = vertex

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])
