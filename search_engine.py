"""
Breadth-first and depth-first search engines.

Both searches stop as soon as the end vertex has been visited. If the end
vertex is unreachable they exhaust everything reachable from start and never
announce a conclusion.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Hashable, Iterator, List, Set, Tuple, TypeVar
import logging

from algorithms import SearchEngine, SearchResult
from graph import Graph
from observers import AlgorithmPhase, ObserverSet

V = TypeVar("V", bound=Hashable)

logger = logging.getLogger(__name__)


class BreadthFirstSearchEngine(SearchEngine):
    """
    Queue-based BFS.

    Vertices are visited in level order from start; within a level, ties are
    broken by edge-insertion order of the vertex that discovered them.
    """

    def search(
        self, graph: Graph[V], start: V, end: V, observers: ObserverSet[V]
    ) -> SearchResult[V]:
        observers.began(AlgorithmPhase.BFS)
        logger.debug("BFS %r -> %r started", start, end)

        discovered: Deque[V] = deque([start])
        visited: Set[V] = set()
        order: List[V] = []

        while discovered:
            vertex = discovered.popleft()

            if vertex not in visited:
                observers.visited(vertex)
                visited.add(vertex)
                order.append(vertex)

                # Only outgoing edges are followed.
                for neighbor in graph.outgoing(vertex):
                    if neighbor not in visited:
                        discovered.append(neighbor)

            if end in visited:
                observers.search_concluded()
                logger.debug("BFS reached %r after %d visits", end, len(order))
                return SearchResult(tuple(order), True)

        logger.debug("BFS exhausted %d vertices without reaching %r", len(order), end)
        return SearchResult(tuple(order), False)


class DepthFirstSearchEngine(SearchEngine):
    """
    Pre-order DFS driven by an explicit stack.

    Each frame holds a vertex and the iterator over its outgoing neighbours,
    so depth is bounded by memory rather than the interpreter's recursion
    limit. Visit order matches the recursive formulation: a vertex is visited
    when it is first descended into, neighbours in edge-insertion order.
    """

    def search(
        self, graph: Graph[V], start: V, end: V, observers: ObserverSet[V]
    ) -> SearchResult[V]:
        observers.began(AlgorithmPhase.DFS)
        logger.debug("DFS %r -> %r started", start, end)

        visited: Set[V] = set()
        order: List[V] = []

        def visit(vertex: V) -> bool:
            observers.visited(vertex)
            visited.add(vertex)
            order.append(vertex)
            if vertex == end:
                # Nothing is explored once end is visited.
                observers.search_concluded()
                logger.debug("DFS reached %r after %d visits", end, len(order))
                return True
            return False

        if visit(start):
            return SearchResult(tuple(order), True)

        stack: List[Tuple[V, Iterator[V]]] = [(start, iter(graph.outgoing(start)))]
        while stack:
            _, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor in visited:
                    continue
                if visit(neighbor):
                    return SearchResult(tuple(order), True)
                stack.append((neighbor, iter(graph.outgoing(neighbor))))
                break
            else:
                stack.pop()

        logger.debug("DFS exhausted %d vertices without reaching %r", len(order), end)
        return SearchResult(tuple(order), False)
