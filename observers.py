"""
Observer protocol for graph algorithm progress.

The graph calls these hooks synchronously, on the caller's thread, while an
algorithm runs. Consumers implement GraphAlgorithmObserver to animate,
record, or log a run.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar
import logging

V = TypeVar("V")


class AlgorithmPhase(Enum):
    """Algorithm announced by the `began` notification."""

    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"


class GraphAlgorithmObserver(ABC, Generic[V]):
    """
    Listener notified as BFS, DFS and Dijkstra make progress.

    Search algorithms emit began -> visited* -> search_concluded (only if the
    end vertex was reached). Dijkstra emits began -> vertex_finalized* ->
    completed.
    """

    @abstractmethod
    def began(self, phase: AlgorithmPhase) -> None:
        """Called once before the algorithm touches any vertex."""
        raise NotImplementedError

    @abstractmethod
    def visited(self, vertex: V) -> None:
        """Called the instant a search marks `vertex` as visited."""
        raise NotImplementedError

    @abstractmethod
    def search_concluded(self) -> None:
        """Called once, right after a search visits its end vertex."""
        raise NotImplementedError

    @abstractmethod
    def vertex_finalized(self, vertex: V, cost: int) -> None:
        """Called when Dijkstra moves `vertex` into the finished set."""
        raise NotImplementedError

    @abstractmethod
    def completed(self, path: Optional[Tuple[V, ...]]) -> None:
        """
        Called once when Dijkstra finishes.

        `path` runs from start to end inclusive, or is None when the end
        vertex cannot be reached from the start vertex.
        """
        raise NotImplementedError


class ObserverSet(Generic[V]):
    """
    Duplicate-free observer collection with stable registration-order dispatch.
    """

    def __init__(self) -> None:
        # dict keys give set semantics while keeping insertion order.
        self._observers: Dict[GraphAlgorithmObserver[V], None] = {}

    def add(self, observer: GraphAlgorithmObserver[V]) -> None:
        self._observers[observer] = None

    def remove(self, observer: GraphAlgorithmObserver[V]) -> None:
        """Unregister an observer, raising ``KeyError`` if it was never added."""
        del self._observers[observer]

    def discard(self, observer: GraphAlgorithmObserver[V]) -> None:
        self._observers.pop(observer, None)

    def __contains__(self, observer: object) -> bool:
        return observer in self._observers

    def __iter__(self) -> Iterator[GraphAlgorithmObserver[V]]:
        return iter(tuple(self._observers))

    def __len__(self) -> int:
        return len(self._observers)

    # --- Dispatch ------------------------------------------------------------

    def began(self, phase: AlgorithmPhase) -> None:
        for observer in self:
            observer.began(phase)

    def visited(self, vertex: V) -> None:
        for observer in self:
            observer.visited(vertex)

    def search_concluded(self) -> None:
        for observer in self:
            observer.search_concluded()

    def vertex_finalized(self, vertex: V, cost: int) -> None:
        for observer in self:
            observer.vertex_finalized(vertex, cost)

    def completed(self, path: Optional[Tuple[V, ...]]) -> None:
        for observer in self:
            observer.completed(path)


class RecordingObserver(GraphAlgorithmObserver[V]):
    """
    Observer that keeps every notification as an (event, payload) tuple.

    Useful for tests and for summarising runs after the fact.
    """

    def __init__(self) -> None:
        self.events: List[Tuple[str, object]] = []

    def began(self, phase: AlgorithmPhase) -> None:
        self.events.append(("began", phase))

    def visited(self, vertex: V) -> None:
        self.events.append(("visited", vertex))

    def search_concluded(self) -> None:
        self.events.append(("search_concluded", None))

    def vertex_finalized(self, vertex: V, cost: int) -> None:
        self.events.append(("vertex_finalized", (vertex, cost)))

    def completed(self, path: Optional[Tuple[V, ...]]) -> None:
        self.events.append(("completed", path))

    def clear(self) -> None:
        self.events.clear()

    @property
    def phases(self) -> List[AlgorithmPhase]:
        return [payload for event, payload in self.events if event == "began"]  # type: ignore[misc]

    @property
    def visited_vertices(self) -> List[V]:
        return [payload for event, payload in self.events if event == "visited"]  # type: ignore[misc]

    @property
    def concluded(self) -> int:
        """Number of search_concluded notifications received."""
        return sum(1 for event, _ in self.events if event == "search_concluded")

    @property
    def finalized_costs(self) -> Dict[V, int]:
        costs: Dict[V, int] = {}
        for event, payload in self.events:
            if event == "vertex_finalized":
                vertex, cost = payload  # type: ignore[misc]
                costs[vertex] = cost
        return costs

    @property
    def finalized_order(self) -> List[V]:
        return [payload[0] for event, payload in self.events if event == "vertex_finalized"]  # type: ignore[index]

    @property
    def path(self) -> Optional[Sequence[V]]:
        """Path from the most recent `completed` notification."""
        for event, payload in reversed(self.events):
            if event == "completed":
                return payload  # type: ignore[return-value]
        return None


class LoggingObserver(GraphAlgorithmObserver[V]):
    """Observer that forwards notifications to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def began(self, phase: AlgorithmPhase) -> None:
        self._logger.info("%s began", phase.name)

    def visited(self, vertex: V) -> None:
        self._logger.debug("visited %r", vertex)

    def search_concluded(self) -> None:
        self._logger.info("search concluded")

    def vertex_finalized(self, vertex: V, cost: int) -> None:
        self._logger.debug("finalized %r at cost %d", vertex, cost)

    def completed(self, path: Optional[Tuple[V, ...]]) -> None:
        if path is None:
            self._logger.info("dijkstra completed: end vertex unreachable")
        else:
            self._logger.info("dijkstra completed: path of %d vertices", len(path))
