"""
Tests for graph storage, path enumeration and the read-only process graph.
"""

import pytest
from pydantic import ValidationError

from bpmn_sim.models.graph import (
    HUMAN_INCOMPLETE_REASONS,
    DirectedGraph,
    IncompleteReason,
    ProcessGraph,
    enumerate_paths,
)
from bpmn_sim.models.nodes import EndEvent, StartEvent, Task


@pytest.fixture
def diamond():
    graph = DirectedGraph()
    graph.add_edge("a", "b")
    graph.add_edge("a", "c")
    graph.add_edge("b", "d")
    graph.add_edge("c", "d")
    return graph


class TestDirectedGraph:
    """Vertex and edge storage."""

    def test_add_edge_adds_vertices(self):
        graph = DirectedGraph()
        graph.add_edge("a", "b")
        assert graph.has_vertex("a")
        assert graph.has_vertex("b")
        assert graph.has_edge("a", "b")
        assert not graph.has_edge("b", "a")

    def test_duplicate_edges_collapse(self):
        """Should keep a single edge per ordered pair."""
        graph = DirectedGraph()
        graph.add_edge("a", "b")
        graph.add_edge("a", "b")
        assert graph.edges() == [("a", "b")]
        assert graph.out_degree("a") == 1

    def test_successor_order_is_insertion_order(self):
        graph = DirectedGraph()
        for target in ["z", "m", "a"]:
            graph.add_edge("root", target)
        assert graph.successors("root") == ["z", "m", "a"]

    def test_isolated_vertex(self):
        graph = DirectedGraph()
        graph.add_vertex("lonely")
        assert len(graph) == 1
        assert list(graph) == ["lonely"]
        assert graph.successors("lonely") == []

    def test_unknown_vertex_has_no_successors(self):
        assert DirectedGraph().successors("missing") == []


class TestFold:
    """Fold along every root-to-sink walk."""

    def test_one_result_per_walk(self, diamond):
        """Should visit shared vertices once per walk through them."""
        counts = diamond.fold("a", 0, lambda count, _vertex: count + 1)
        assert counts == [3, 3]

    def test_single_vertex(self):
        graph = DirectedGraph()
        graph.add_vertex("a")
        assert graph.fold("a", "", lambda acc, vertex: acc + vertex) == ["a"]

    def test_cycle_is_unbounded(self):
        """Should not terminate normally on a reachable cycle."""
        graph = DirectedGraph()
        graph.add_edge("a", "b")
        graph.add_edge("b", "a")
        with pytest.raises(RecursionError):
            enumerate_paths(graph, "a")


class TestEnumeratePaths:
    """Start-to-sink vertex sequences."""

    def test_diamond(self, diamond):
        assert enumerate_paths(diamond, "a") == [["a", "b", "d"], ["a", "c", "d"]]

    def test_no_start(self, diamond):
        assert enumerate_paths(diamond, None) == []

    def test_start_not_in_graph(self, diamond):
        assert enumerate_paths(diamond, "x") == []

    def test_sink_that_is_not_an_end(self):
        """Should still report walks stopping at any sink."""
        graph = DirectedGraph()
        graph.add_edge("s", "t")
        graph.add_edge("s", "e")
        assert enumerate_paths(graph, "s") == [["s", "t"], ["s", "e"]]


def make_process_graph(edges, start="s", ends=("e",), tasks=()):
    nodes = {}
    if start is not None:
        nodes[start] = StartEvent.create(start)
    for end_id in ends:
        nodes[end_id] = EndEvent.create(end_id)
    for task_id in tasks:
        nodes[task_id] = Task.create(task_id, "Work:{role: nurse; length: 3}")

    graph = DirectedGraph()
    for node_id in nodes:
        graph.add_vertex(node_id)
    for source, target in edges:
        graph.add_edge(source, target)

    return ProcessGraph.from_graph(
        nodes,
        graph,
        nodes.get(start) if start is not None else None,
        [nodes[end_id] for end_id in ends],
    )


class TestProcessGraph:
    """Queries on the read-only graph."""

    def test_complete_through_task(self):
        process = make_process_graph([("s", "t"), ("t", "e")], tasks=["t"])

        assert process.is_complete()
        assert process.incomplete_reason() is None
        assert [[node.id for node in path] for path in process.paths()] == [["s", "t", "e"]]
        assert [node.id for node in process.successors("s")] == ["t"]
        assert process.get_node("t").role == "nurse"
        assert process.get_node("missing") is None

    def test_no_start_event(self):
        process = make_process_graph([], start=None)
        assert process.incomplete_reason() == IncompleteReason.NO_START_EVENT
        assert process.paths() == []

    def test_no_end_event(self):
        process = make_process_graph([], ends=())
        assert process.incomplete_reason() == IncompleteReason.NO_END_EVENT

    def test_start_not_connected(self):
        process = make_process_graph([])
        assert process.paths() == [[process.start]]
        assert not process.paths_end_in_end_event()
        assert process.incomplete_reason() == IncompleteReason.NO_PATH_BETWEEN_START_AND_STOP

    def test_one_path_reaching_an_end_is_enough(self):
        """Should be complete even when another path dead-ends at a task."""
        process = make_process_graph([("s", "t"), ("s", "e")], tasks=["t"])
        assert len(process.paths()) == 2
        assert process.is_complete()

    def test_summary(self):
        process = make_process_graph([("s", "t"), ("t", "e")], tasks=["t"])
        assert process.summary() == {
            "node_count": 3,
            "edge_count": 2,
            "start": "s",
            "ends": ["e"],
            "paths": [["s", "t", "e"]],
        }

    def test_is_frozen(self):
        process = make_process_graph([("s", "e")])
        with pytest.raises(ValidationError):
            process.start = None

    def test_human_reasons_cover_every_reason(self):
        assert set(HUMAN_INCOMPLETE_REASONS) == set(IncompleteReason)
        assert HUMAN_INCOMPLETE_REASONS[IncompleteReason.NO_START_EVENT] == "there is no start event"
