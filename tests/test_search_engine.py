"""
Unit tests for the BFS and DFS engines driven through WeightedGraph.
"""

from typing import Iterable, List, Tuple

from observers import AlgorithmPhase, GraphAlgorithmObserver, RecordingObserver
from weighted_graph import WeightedGraph


def _graph(vertices: Iterable[str], edges: Iterable[Tuple[str, str, int]]) -> WeightedGraph[str]:
    g: WeightedGraph[str] = WeightedGraph()
    for v in vertices:
        g.add_vertex(v)
    for src, dst, w in edges:
        g.add_edge(src, dst, w)
    return g


class TaggedObserver(GraphAlgorithmObserver[str]):
    """
    Appends (tag, event) to a log shared between observers.
    """

    def __init__(self, tag: str, log: List[Tuple[str, str]]) -> None:
        self.tag = tag
        self.log = log

    def began(self, phase):
        self.log.append((self.tag, f"began:{phase.name}"))

    def visited(self, vertex):
        self.log.append((self.tag, f"visited:{vertex}"))

    def search_concluded(self):
        self.log.append((self.tag, "concluded"))

    def vertex_finalized(self, vertex, cost):
        self.log.append((self.tag, f"finalized:{vertex}:{cost}"))

    def completed(self, path):
        self.log.append((self.tag, "completed"))


# --- BFS ---------------------------------------------------------------------


def test_bfs_visits_in_level_order():
    g = _graph(
        "ABCDEF",
        [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "E", 1), ("D", "F", 1)],
    )
    rec = RecordingObserver()
    g.add_observer(rec)

    result = g.search_bfs("A", "F")

    assert rec.visited_vertices == ["A", "B", "C", "D", "E", "F"]
    assert rec.events[0] == ("began", AlgorithmPhase.BFS)
    assert rec.events[-1] == ("search_concluded", None)
    assert rec.concluded == 1
    assert result.concluded
    assert list(result.visited) == rec.visited_vertices


def test_bfs_stops_right_after_end_is_visited():
    g = _graph("ABCD", [("A", "B", 1), ("A", "C", 1), ("B", "D", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_bfs("A", "B")

    # C was discovered but never processed.
    assert rec.visited_vertices == ["A", "B"]
    assert rec.events[-1] == ("search_concluded", None)


def test_bfs_disconnected_graph_never_concludes():
    g = _graph("AB", [])
    rec = RecordingObserver()
    g.add_observer(rec)

    result = g.search_bfs("A", "B")

    assert rec.visited_vertices == ["A"]
    assert rec.concluded == 0
    assert not result.concluded


def test_bfs_follows_only_outgoing_edges():
    g = _graph("AB", [("B", "A", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_bfs("A", "B")

    assert rec.visited_vertices == ["A"]
    assert rec.concluded == 0


def test_bfs_start_equals_end():
    g = _graph("AB", [("A", "B", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    result = g.search_bfs("A", "A")

    assert rec.visited_vertices == ["A"]
    assert rec.concluded == 1
    assert result.concluded


def test_bfs_visits_each_vertex_once_in_non_decreasing_distance():
    # Diamond with a back edge and a longer detour.
    g = _graph(
        "ABCDE",
        [
            ("A", "B", 1),
            ("A", "C", 1),
            ("B", "D", 1),
            ("C", "D", 1),
            ("D", "A", 1),
            ("D", "E", 1),
            ("B", "C", 1),
        ],
    )
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_bfs("A", "E")

    hops = {"A": 0, "B": 1, "C": 1, "D": 2, "E": 3}
    visited = rec.visited_vertices
    assert len(visited) == len(set(visited))
    distances = [hops[v] for v in visited]
    assert distances == sorted(distances)


# --- DFS ---------------------------------------------------------------------


def test_dfs_visits_depth_first_in_insertion_order():
    g = _graph("ABCDE", [("A", "B", 1), ("A", "C", 1), ("B", "D", 1), ("C", "E", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    result = g.search_dfs("A", "E")

    assert rec.events[0] == ("began", AlgorithmPhase.DFS)
    assert rec.visited_vertices == ["A", "B", "D", "C", "E"]
    assert rec.concluded == 1
    assert rec.events[-1] == ("search_concluded", None)
    assert result.concluded


def test_dfs_concludes_once_from_deep_in_the_tree():
    # End sits three levels down; enclosing frames must not re-announce.
    g = _graph("ABCDX", [("A", "B", 1), ("B", "C", 1), ("C", "D", 1), ("A", "X", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_dfs("A", "D")

    assert rec.visited_vertices == ["A", "B", "C", "D"]
    assert rec.concluded == 1


def test_dfs_handles_cycles():
    g = _graph("ABC", [("A", "B", 1), ("B", "A", 1), ("B", "C", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_dfs("A", "C")

    assert rec.visited_vertices == ["A", "B", "C"]
    assert rec.concluded == 1


def test_dfs_unreachable_end_visits_everything_reachable_once():
    g = _graph("ABCDZ", [("A", "B", 1), ("B", "C", 1), ("C", "A", 1), ("A", "D", 1), ("Z", "A", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    result = g.search_dfs("A", "Z")

    assert rec.visited_vertices == ["A", "B", "C", "D"]
    assert rec.concluded == 0
    assert not result.concluded


def test_dfs_start_equals_end():
    g = _graph("AB", [("A", "B", 1)])
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_dfs("A", "A")

    assert rec.visited_vertices == ["A"]
    assert rec.concluded == 1


def test_dfs_long_chain_does_not_hit_recursion_limit():
    n = 5000
    g: WeightedGraph[int] = WeightedGraph()
    for i in range(n):
        g.add_vertex(i)
    for i in range(n - 1):
        g.add_edge(i, i + 1, 1)

    result = g.search_dfs(0, n - 1)

    assert result.concluded
    assert len(result.visited) == n


# --- Dispatch order ----------------------------------------------------------


def test_notifications_follow_registration_order():
    g = _graph("AB", [("A", "B", 1)])
    log: List[Tuple[str, str]] = []
    g.add_observer(TaggedObserver("first", log))
    g.add_observer(TaggedObserver("second", log))

    g.search_bfs("A", "B")

    assert log == [
        ("first", "began:BFS"),
        ("second", "began:BFS"),
        ("first", "visited:A"),
        ("second", "visited:A"),
        ("first", "visited:B"),
        ("second", "visited:B"),
        ("first", "concluded"),
        ("second", "concluded"),
    ]
