"""
Concrete directed, weighted graph with observable algorithms.

Stores a vertex -> (neighbour -> weight) mapping, keeps a set of
GraphAlgorithmObservers, and runs BFS, DFS and Dijkstra over itself while
notifying those observers.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterable, Mapping, Optional, Tuple, TypeVar

from algorithms import SearchEngine, SearchResult, ShortestPathEngine, ShortestPathResult
from dijkstra_engine import SimpleDijkstraEngine
from errors import DuplicateVertexError, InvalidEdgeError, UnknownVertexError
from graph import Graph
from observers import GraphAlgorithmObserver, ObserverSet
from search_engine import BreadthFirstSearchEngine, DepthFirstSearchEngine

V = TypeVar("V", bound=Hashable)


class WeightedGraph(Graph[V]):
    """
    Directed graph over hashable vertices with non-negative integer weights.

    The graph never stores duplicate vertices, and every edge joins two
    vertices already present. Edges are directed: adding A -> B says nothing
    about B -> A.
    """

    def __init__(
        self,
        bfs_engine: Optional[SearchEngine] = None,
        dfs_engine: Optional[SearchEngine] = None,
        dijkstra_engine: Optional[ShortestPathEngine] = None,
    ) -> None:
        self._adj: Dict[V, Dict[V, int]] = {}
        self._observers: ObserverSet[V] = ObserverSet()
        self._bfs = bfs_engine or BreadthFirstSearchEngine()
        self._dfs = dfs_engine or DepthFirstSearchEngine()
        self._dijkstra = dijkstra_engine or SimpleDijkstraEngine()

    # --- Observers -----------------------------------------------------------

    def add_observer(self, observer: GraphAlgorithmObserver[V]) -> None:
        """Register an observer; registering the same one twice is a no-op."""
        self._observers.add(observer)

    def remove_observer(self, observer: GraphAlgorithmObserver[V]) -> None:
        self._observers.remove(observer)

    def observers(self) -> Tuple[GraphAlgorithmObserver[V], ...]:
        return tuple(self._observers)

    # --- Construction --------------------------------------------------------

    def add_vertex(self, vertex: V) -> None:
        """
        Add a vertex with no outgoing edges.

        Raises DuplicateVertexError if the vertex is already in the graph.
        """
        if vertex in self._adj:
            raise DuplicateVertexError(vertex)
        self._adj[vertex] = {}

    def contains_vertex(self, vertex: V) -> bool:
        return vertex in self._adj

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adj

    def add_edge(self, src: V, dst: V, weight: int) -> None:
        """
        Add or overwrite the directed edge src -> dst.

        Both vertices must already be in the graph and weight must be a
        non-negative int; otherwise InvalidEdgeError is raised and the graph
        is left unchanged. The reverse edge is never created.
        """
        if src not in self._adj:
            raise InvalidEdgeError(f"Edge source {src!r} is not in the graph.")
        if dst not in self._adj:
            raise InvalidEdgeError(f"Edge destination {dst!r} is not in the graph.")
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidEdgeError(f"Edge weight must be an int, got {weight!r}.")
        if weight < 0:
            raise InvalidEdgeError(f"Edge weight must be non-negative, got {weight}.")
        self._adj[src][dst] = weight

    def get_weight(self, src: V, dst: V) -> Optional[int]:
        """
        Weight of the edge src -> dst, or None if there is no such edge.

        Raises UnknownVertexError if either vertex is not in the graph.
        """
        self._require(src)
        self._require(dst)
        return self._adj[src].get(dst)

    # --- Graph interface -----------------------------------------------------

    def vertices(self) -> Iterable[V]:
        return self._adj.keys()

    def outgoing(self, vertex: V) -> Mapping[V, int]:
        self._require(vertex)
        return dict(self._adj[vertex])  # defensive copy

    def __len__(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        """Number of directed edges."""
        return sum(len(out) for out in self._adj.values())

    # --- Algorithms ----------------------------------------------------------

    def search_bfs(self, start: V, end: V) -> SearchResult[V]:
        """
        Breadth-first search from start, stopping right after end is visited.

        A result with concluded=False (and no search_concluded notification)
        means end is unreachable from start.
        """
        self._require(start)
        self._require(end)
        return self._bfs.search(self, start, end, self._observers)

    def search_dfs(self, start: V, end: V) -> SearchResult[V]:
        """Depth-first search from start, stopping right after end is visited."""
        self._require(start)
        self._require(end)
        return self._dfs.search(self, start, end, self._observers)

    def shortest_paths(self, start: V, end: V) -> ShortestPathResult[V]:
        """
        Dijkstra from start over the whole graph.

        The run does not stop at end; end only selects which path is
        reconstructed and reported through `completed`.
        """
        self._require(start)
        self._require(end)
        return self._dijkstra.shortest_paths(self, start, end, self._observers)

    # --- Internal helpers ----------------------------------------------------

    def _require(self, vertex: V) -> None:
        if vertex not in self._adj:
            raise UnknownVertexError(vertex)
