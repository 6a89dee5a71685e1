"""
Algorithm interfaces for the weighted graph engine.

Keeps traversal and shortest-path algorithms separate from graph storage and
observer registration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Generic, Hashable, Optional, Tuple, TypeVar

from graph import Graph
from observers import ObserverSet

V = TypeVar("V", bound=Hashable)


@dataclass(frozen=True)
class SearchResult(Generic[V]):
    """
    Outcome of a BFS or DFS run.

    visited lists vertices in the order they were marked visited.
    concluded is False when the end vertex was unreachable from start.
    """

    visited: Tuple[V, ...]
    concluded: bool


@dataclass(frozen=True)
class ShortestPathResult(Generic[V]):
    """
    Outcome of a Dijkstra run.

    costs holds the finalized cost of every vertex reachable from start.
    predecessors maps every reachable vertex to its parent on the shortest
    path (start maps to None). path is None when end is unreachable.
    """

    costs: Dict[V, int]
    predecessors: Dict[V, Optional[V]]
    path: Optional[Tuple[V, ...]]

    @property
    def reachable(self) -> bool:
        return self.path is not None

    def cost_to(self, vertex: V) -> Optional[int]:
        """Finalized cost of `vertex`, or None if start cannot reach it."""
        return self.costs.get(vertex)


class SearchEngine(ABC):
    """
    Interface for an observable start -> end search.
    """

    @abstractmethod
    def search(
        self, graph: Graph[V], start: V, end: V, observers: ObserverSet[V]
    ) -> SearchResult[V]:
        """
        Search from start until end is visited or nothing reachable remains.

        Notifies observers of the search beginning, of each visit, and of the
        conclusion when end is reached.
        """
        raise NotImplementedError


class ShortestPathEngine(ABC):
    """
    Interface for an observable single-source shortest-path computation.
    """

    @abstractmethod
    def shortest_paths(
        self, graph: Graph[V], start: V, end: V, observers: ObserverSet[V]
    ) -> ShortestPathResult[V]:
        """
        Compute shortest-path costs from start over the whole graph.

        Returns:
            ShortestPathResult carrying the cost map, the predecessor chain and
            the reconstructed start -> end path.
        """
        raise NotImplementedError
