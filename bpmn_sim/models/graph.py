"""
Process Graph Representation

Directed graph storage used while a diagram is built, the fold that
enumerates every walk from the start event to a sink, and the read-only
``ProcessGraph`` value produced by a successful build.

Path enumeration has no cycle guard: diagrams are assumed acyclic along every
path reachable from the start event.
"""

from enum import Enum
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from bpmn_sim.models.nodes import AnyNode, Node

V = TypeVar("V", bound=Hashable)
A = TypeVar("A")


class IncompleteReason(str, Enum):
    """Why a diagram cannot be walked from start to end."""

    NO_START_EVENT = "no_start_event"
    NO_END_EVENT = "no_end_event"
    NO_PATH_BETWEEN_START_AND_STOP = "no_path_between_start_and_stop"


HUMAN_INCOMPLETE_REASONS: Dict[IncompleteReason, str] = {
    IncompleteReason.NO_START_EVENT: "there is no start event",
    IncompleteReason.NO_END_EVENT: "there is no end event",
    IncompleteReason.NO_PATH_BETWEEN_START_AND_STOP: "there is no path between start and stop events",
}


class DirectedGraph(Generic[V]):
    """Adjacency-set directed graph with insertion-ordered successors.

    Adding the same edge twice keeps a single edge.
    """

    def __init__(self) -> None:
        self._adjacency: Dict[V, Dict[V, None]] = {}

    def add_vertex(self, vertex: V) -> None:
        self._adjacency.setdefault(vertex, {})

    def add_edge(self, source: V, target: V) -> None:
        self.add_vertex(source)
        self.add_vertex(target)
        self._adjacency[source][target] = None

    def has_vertex(self, vertex: V) -> bool:
        return vertex in self._adjacency

    def has_edge(self, source: V, target: V) -> bool:
        return target in self._adjacency.get(source, {})

    def vertices(self) -> List[V]:
        return list(self._adjacency)

    def edges(self) -> List[Tuple[V, V]]:
        return [(source, target) for source, targets in self._adjacency.items() for target in targets]

    def successors(self, vertex: V) -> List[V]:
        return list(self._adjacency.get(vertex, {}))

    def out_degree(self, vertex: V) -> int:
        return len(self._adjacency.get(vertex, {}))

    def __len__(self) -> int:
        return len(self._adjacency)

    def __iter__(self) -> Iterator[V]:
        return iter(self._adjacency)

    def fold(self, root: V, initial: A, func: Callable[[A, V], A]) -> List[A]:
        """Fold ``func`` along every walk from ``root`` to a vertex with no successors.

        Returns one accumulated value per walk, in successor insertion order.
        A cycle reachable from ``root`` makes the walk unbounded.
        """
        accumulated = func(initial, root)
        successors = self.successors(root)
        if not successors:
            return [accumulated]

        results: List[A] = []
        for successor in successors:
            results.extend(self.fold(successor, accumulated, func))
        return results


def enumerate_paths(graph: DirectedGraph[V], start: Optional[V]) -> List[List[V]]:
    """All root-to-sink vertex sequences beginning at ``start``."""
    if start is None or not graph.has_vertex(start):
        return []
    return graph.fold(start, [], lambda path, vertex: path + [vertex])


class ProcessGraph(BaseModel):
    """Validated, read-only process graph."""

    nodes: Dict[str, AnyNode] = Field(default_factory=dict, description="Nodes by element id")
    edges: List[Tuple[str, str]] = Field(
        default_factory=list, description="Distinct (source id, target id) pairs in scan order"
    )
    start: Optional[AnyNode] = Field(None, description="Distinguished start event")
    ends: List[AnyNode] = Field(default_factory=list, description="End events in scan order")

    model_config = ConfigDict(frozen=True)

    _graph: DirectedGraph[str] = PrivateAttr(default_factory=DirectedGraph)

    def model_post_init(self, __context) -> None:
        graph: DirectedGraph[str] = DirectedGraph()
        for node_id in self.nodes:
            graph.add_vertex(node_id)
        for source_id, target_id in self.edges:
            graph.add_edge(source_id, target_id)
        self._graph = graph

    @classmethod
    def from_graph(
        cls,
        nodes: Dict[str, Node],
        graph: DirectedGraph[str],
        start: Optional[Node],
        ends: List[Node],
    ) -> "ProcessGraph":
        return cls(nodes=dict(nodes), edges=graph.edges(), start=start, ends=list(ends))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def successors(self, node_id: str) -> List[Node]:
        return [self.nodes[target_id] for target_id in self._graph.successors(node_id)]

    def paths(self) -> List[List[Node]]:
        """Every path from the start event to a node without outgoing edges."""
        start_id = self.start.id if self.start is not None else None
        return [
            [self.nodes[node_id] for node_id in path]
            for path in enumerate_paths(self._graph, start_id)
        ]

    def paths_end_in_end_event(self) -> bool:
        end_ids = {end.id for end in self.ends}
        return any(path[-1].id in end_ids for path in self.paths())

    def incomplete_reason(self) -> Optional[IncompleteReason]:
        if self.start is None:
            return IncompleteReason.NO_START_EVENT
        if not self.ends:
            return IncompleteReason.NO_END_EVENT
        if not self.paths_end_in_end_event():
            return IncompleteReason.NO_PATH_BETWEEN_START_AND_STOP
        return None

    def is_complete(self) -> bool:
        return self.incomplete_reason() is None

    def summary(self) -> Dict[str, object]:
        """Counts and path listing for reports."""
        return {
            "node_count": len(self.nodes),
            "edge_count": len(self.edges),
            "start": self.start.id if self.start is not None else None,
            "ends": [end.id for end in self.ends],
            "paths": [[node.id for node in path] for path in self.paths()],
        }


__all__ = [
    "IncompleteReason",
    "HUMAN_INCOMPLETE_REASONS",
    "DirectedGraph",
    "enumerate_paths",
    "ProcessGraph",
]
