"""
Directed, weighted graph abstraction.

Vertices are any hashable values.
Edges are directed: u -> v with a non-negative integer weight.
"""

from abc import ABC, abstractmethod
from typing import Generic, Hashable, Iterable, Mapping, TypeVar

V = TypeVar("V", bound=Hashable)


class Graph(ABC, Generic[V]):
    """Read-only view of a directed, weighted graph used by the algorithm engines."""

    @abstractmethod
    def vertices(self) -> Iterable[V]:
        """Return all vertices in insertion order."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, vertex: V) -> Mapping[V, int]:
        """
        Outgoing neighbours and edge weights for a given vertex.

        Returns: dict[V, int] in edge-insertion order.
        """
        raise NotImplementedError

    @abstractmethod
    def contains_vertex(self, vertex: V) -> bool:
        """Membership query; never raises."""
        raise NotImplementedError
