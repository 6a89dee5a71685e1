"""
Finished-set Dijkstra implementation for the weighted graph engine.

Selects the cheapest unfinished vertex by a linear scan instead of a heap,
which makes each run O(V^2) but keeps the finalization order easy to observe.
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Set, Tuple, TypeVar
import logging

from algorithms import ShortestPathEngine, ShortestPathResult
from graph import Graph
from observers import AlgorithmPhase, ObserverSet

V = TypeVar("V", bound=Hashable)

logger = logging.getLogger(__name__)


class SimpleDijkstraEngine(ShortestPathEngine):
    """
    Single-source Dijkstra over an explicit finished set.

    The run always covers every vertex reachable from start, whatever the end
    vertex is. Vertices that start cannot reach are never finalized.

    Complexity:
        O(V^2 + E) per run.
    """

    def shortest_paths(
        self, graph: Graph[V], start: V, end: V, observers: ObserverSet[V]
    ) -> ShortestPathResult[V]:
        observers.began(AlgorithmPhase.DIJKSTRA)
        logger.debug("Dijkstra %r -> %r started", start, end)

        vertices: List[V] = list(graph.vertices())
        # None stands for "not yet reached"; it is never added to.
        cost: Dict[V, Optional[int]] = {v: None for v in vertices}
        pred: Dict[V, Optional[V]] = {v: None for v in vertices}
        finished: Set[V] = set()
        cost[start] = 0

        while len(finished) < len(vertices):
            cheapest = self._cheapest_unfinished(vertices, cost, finished)
            if cheapest is None:
                # Everything left is unreachable from start.
                break

            current, current_cost = cheapest
            finished.add(current)
            observers.vertex_finalized(current, current_cost)

            for neighbor, weight in graph.outgoing(current).items():
                if neighbor in finished:
                    continue
                candidate = current_cost + weight
                known = cost[neighbor]
                if known is None or candidate < known:
                    cost[neighbor] = candidate
                    pred[neighbor] = current

        costs = {v: c for v, c in cost.items() if v in finished and c is not None}
        predecessors = {v: pred[v] for v in costs}
        path = self._reconstruct_path(predecessors, start, end)

        observers.completed(path)
        logger.debug(
            "Dijkstra finalized %d/%d vertices, end %s",
            len(finished),
            len(vertices),
            "unreachable" if path is None else f"at cost {costs[end]}",
        )
        return ShortestPathResult(costs, predecessors, path)

    @staticmethod
    def _cheapest_unfinished(
        vertices: List[V], cost: Dict[V, Optional[int]], finished: Set[V]
    ) -> Optional[Tuple[V, int]]:
        """
        Unfinished vertex with the smallest known cost, paired with that cost.

        Ties go to the vertex added to the graph first.
        """
        best: Optional[V] = None
        best_cost: Optional[int] = None
        for vertex in vertices:
            if vertex in finished:
                continue
            c = cost[vertex]
            if c is None:
                continue
            if best_cost is None or c < best_cost:
                best = vertex
                best_cost = c
        if best_cost is None:
            return None
        return best, best_cost  # type: ignore[return-value]

    @staticmethod
    def _reconstruct_path(
        predecessors: Dict[V, Optional[V]], start: V, end: V
    ) -> Optional[Tuple[V, ...]]:
        """
        Walk parents back from end until start.

        Returns None if end was never finalized, i.e. start cannot reach it.
        """
        if end not in predecessors:
            return None

        path: List[V] = [end]
        step = end
        while step != start:
            parent = predecessors[step]
            assert parent is not None
            path.append(parent)
            step = parent
        path.reverse()
        return tuple(path)
