"""
Unit tests for WeightedGraph storage and construction.
"""

import pytest

from errors import DuplicateVertexError, InvalidEdgeError, UnknownVertexError
from observers import RecordingObserver
from weighted_graph import WeightedGraph


def _abc_graph() -> WeightedGraph[str]:
    g: WeightedGraph[str] = WeightedGraph()
    for v in ("A", "B", "C"):
        g.add_vertex(v)
    return g


def test_add_vertices_and_edges():
    g = _abc_graph()

    g.add_edge("A", "B", 1)
    g.add_edge("A", "C", 2)
    g.add_edge("B", "C", 3)

    assert list(g.vertices()) == ["A", "B", "C"]
    assert len(g) == 3
    assert g.edge_count() == 3

    assert g.outgoing("A") == {"B": 1, "C": 2}
    assert g.outgoing("B") == {"C": 3}
    assert g.outgoing("C") == {}


def test_outgoing_returns_copy():
    g = _abc_graph()
    g.add_edge("A", "B", 1)

    out = g.outgoing("A")
    out.clear()

    # internal structure must remain intact
    assert g.outgoing("A") == {"B": 1}


def test_contains_vertex_never_raises():
    g = _abc_graph()
    assert g.contains_vertex("A")
    assert not g.contains_vertex("Z")
    assert "B" in g
    assert "Z" not in g


def test_duplicate_vertex_rejected_without_mutation():
    g = _abc_graph()
    g.add_edge("A", "B", 4)

    with pytest.raises(DuplicateVertexError):
        g.add_vertex("A")

    # Existing adjacency survives the failed insert.
    assert len(g) == 3
    assert g.outgoing("A") == {"B": 4}


@pytest.mark.parametrize(
    "src, dst, weight",
    [
        ("A", "Z", 1),
        ("Z", "A", 1),
        ("A", "B", -1),
    ],
)
def test_invalid_edge_rejected_without_mutation(src, dst, weight):
    g = _abc_graph()
    g.add_edge("A", "B", 2)

    with pytest.raises(InvalidEdgeError):
        g.add_edge(src, dst, weight)

    assert g.outgoing("A") == {"B": 2}
    assert g.edge_count() == 1


def test_non_integer_weight_rejected():
    g = _abc_graph()
    with pytest.raises(InvalidEdgeError):
        g.add_edge("A", "B", 1.5)
    with pytest.raises(InvalidEdgeError):
        g.add_edge("A", "B", True)


def test_edge_errors_are_value_errors():
    g = _abc_graph()
    with pytest.raises(ValueError):
        g.add_edge("A", "B", -3)
    with pytest.raises(ValueError):
        g.add_vertex("A")


def test_get_weight_tracks_latest_edge_and_direction():
    g = _abc_graph()

    assert g.get_weight("A", "B") is None

    g.add_edge("A", "B", 5)
    g.add_edge("A", "B", 7)

    assert g.get_weight("A", "B") == 7
    # Edges are directed.
    assert g.get_weight("B", "A") is None


def test_zero_weight_is_distinct_from_missing_edge():
    g = _abc_graph()
    g.add_edge("A", "B", 0)

    assert g.get_weight("A", "B") == 0
    assert g.get_weight("A", "B") is not None
    assert g.get_weight("A", "C") is None


def test_get_weight_unknown_vertex():
    g = _abc_graph()

    with pytest.raises(UnknownVertexError):
        g.get_weight("A", "Z")
    with pytest.raises(UnknownVertexError):
        g.get_weight("Z", "A")
    # Also catchable as a lookup failure.
    with pytest.raises(KeyError):
        g.get_weight("Z", "Z")


def test_observer_registered_once():
    g = _abc_graph()
    rec = RecordingObserver()

    g.add_observer(rec)
    g.add_observer(rec)
    assert g.observers() == (rec,)

    g.search_bfs("A", "A")
    assert rec.concluded == 1
    assert rec.visited_vertices == ["A"]


def test_remove_observer():
    g = _abc_graph()
    rec = RecordingObserver()
    g.add_observer(rec)
    g.remove_observer(rec)

    g.search_bfs("A", "A")
    assert rec.events == []

    with pytest.raises(KeyError):
        g.remove_observer(rec)


def test_observers_persist_across_runs():
    g = _abc_graph()
    g.add_edge("A", "B", 1)
    rec = RecordingObserver()
    g.add_observer(rec)

    g.search_bfs("A", "B")
    g.search_dfs("A", "B")
    g.shortest_paths("A", "B")

    assert [phase.name for phase in rec.phases] == ["BFS", "DFS", "DIJKSTRA"]


@pytest.mark.parametrize("run", ["search_bfs", "search_dfs", "shortest_paths"])
def test_algorithms_reject_unknown_vertices_before_notifying(run):
    g = _abc_graph()
    rec = RecordingObserver()
    g.add_observer(rec)

    with pytest.raises(UnknownVertexError):
        getattr(g, run)("A", "Z")
    with pytest.raises(UnknownVertexError):
        getattr(g, run)("Z", "A")

    assert rec.events == []
