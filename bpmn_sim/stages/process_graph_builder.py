"""
Process Graph Construction

Builds a validated process graph from the flattened element list of a
diagram:

- Phase 1 (scan): create nodes for events, gateways and tasks, and connect
  them along sequence flows, recording gateway branches as they appear
- Phase 2 (validate): check each gateway's branch percentages once every
  branch is known

The builder then answers completeness and simulatability queries. A build
stops at the first error; ``build_and_handle_errors`` keeps that error for
the diagnostic accessors instead of raising it.
"""

import logging
from typing import Dict, Iterable, List, Optional, Protocol, Type, Union

from bpmn_sim.core.config import ReaderConfig
from bpmn_sim.core.observability import Timer
from bpmn_sim.models.errors import (
    AttributeRequiredError,
    DiagramError,
    NameParserError,
    StructureError,
    UnknownElementKindError,
)
from bpmn_sim.models.graph import (
    HUMAN_INCOMPLETE_REASONS,
    DirectedGraph,
    IncompleteReason,
    ProcessGraph,
)
from bpmn_sim.models.nodes import NODE_TYPES, Node, NodeKind
from bpmn_sim.stages.xml_reader import BPMNXmlReader

logger = logging.getLogger(__name__)

SEQUENCE_FLOW = "sequenceFlow"

# whitespace between tags in some markup layers
IGNORED_ELEMENT_KINDS = frozenset({"text"})


class DiagramElementLike(Protocol):
    """What the builder needs from a markup element."""

    kind: str

    def get(self, name: str) -> Optional[str]:
        ...


class ProcessGraphBuilder:
    """Builds and validates a process graph from diagram elements."""

    def __init__(self, elements: Iterable[DiagramElementLike]):
        """
        Initialize builder.

        Args:
            elements: Diagram elements in document order
        """
        self.elements: List[DiagramElementLike] = list(elements)
        self._reset()

    @classmethod
    def from_xml(
        cls, xml: Union[str, bytes], config: Optional[ReaderConfig] = None
    ) -> "ProcessGraphBuilder":
        """Create a builder over the process elements of BPMN XML text."""
        return cls(BPMNXmlReader(config).read(xml))

    def _reset(self) -> None:
        self.graph: DirectedGraph[str] = DirectedGraph()
        self.nodes: Dict[str, Node] = {}
        self.start_event: Optional[Node] = None
        self.end_events: List[Node] = []
        self.error: Optional[DiagramError] = None
        self._validated = False

    # ===========================
    # Build
    # ===========================

    def build(self) -> "ProcessGraphBuilder":
        """Scan and validate from a clean state.

        Raises:
            NameParserError: a label does not follow the attribute grammar
            StructureError: the diagram is structurally invalid
        """
        self._reset()
        with Timer("process_graph_build"):
            self.scan()
            self.validate()

        logger.info(
            f"Built process graph: {len(self.nodes)} nodes, {len(self.graph.edges())} edges, "
            f"{len(self.end_events)} end events"
        )
        return self

    def build_and_handle_errors(self) -> "ProcessGraphBuilder":
        """Build, keeping the first diagram error instead of raising it."""
        try:
            self.build()
        except (NameParserError, StructureError) as e:
            self.error = e
            logger.warning(f"Diagram rejected ({e.kind.value}): {e.message}")
        return self

    def scan(self) -> None:
        """Phase 1: create nodes and edges in element order."""
        for element in self.elements:
            kind = element.kind

            if kind in NODE_TYPES:
                self._add_node(element, NODE_TYPES[kind])
            elif kind == SEQUENCE_FLOW:
                self._add_flow(element)
            elif kind in IGNORED_ELEMENT_KINDS:
                continue
            else:
                raise UnknownElementKindError(kind, _element_attributes(element))

    def validate(self) -> None:
        """Phase 2: check outgoing edges of every node."""
        for node in self.nodes.values():
            node.validate_outgoing_nodes()
        self._validated = True

    def _add_node(self, element: DiagramElementLike, node_type: Type[Node]) -> Node:
        node_id = element.get("id")
        if node_id is None:
            raise AttributeRequiredError(element.kind, "id")

        node = node_type.create(node_id, element.get("name"))

        if node_id in self.nodes:
            logger.warning(f"Element id '{node_id}' appears more than once, keeping the last one")
        self.graph.add_vertex(node_id)
        self.nodes[node_id] = node

        if node.kind == NodeKind.START_EVENT:
            if self.start_event is not None:
                logger.warning(
                    f"Start event '{node_id}' replaces earlier start event '{self.start_event.id}'"
                )
            self.start_event = node
        elif node.kind == NodeKind.END_EVENT:
            self.end_events.append(node)

        return node

    def _add_flow(self, element: DiagramElementLike) -> None:
        source_ref = element.get("sourceRef")
        target_ref = element.get("targetRef")
        source = self.nodes.get(source_ref) if source_ref is not None else None
        target = self.nodes.get(target_ref) if target_ref is not None else None

        if source is None or target is None:
            logger.debug(
                f"Skipping sequence flow '{element.get('id')}': "
                f"unresolved reference {source_ref} -> {target_ref}"
            )
            return

        self.graph.add_edge(source.id, target.id)
        source.record_outgoing_edge(target, element.get("name"))

    # ===========================
    # Queries
    # ===========================

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def _view(self) -> ProcessGraph:
        return ProcessGraph.from_graph(self.nodes, self.graph, self.start_event, self.end_events)

    def paths(self) -> List[List[Node]]:
        """Every path from the start event to a node without outgoing edges."""
        return self._view().paths()

    def paths_end_in_end_event(self) -> bool:
        return self._view().paths_end_in_end_event()

    def incomplete_reason(self) -> Optional[IncompleteReason]:
        """Why the diagram is incomplete, or None.

        Always None once a build error was captured: the partial graph says
        nothing reliable about completeness.
        """
        if self.error is not None:
            return None
        return self._view().incomplete_reason()

    def is_complete(self) -> bool:
        return self.incomplete_reason() is None

    def is_simulatable(self) -> bool:
        return self.is_complete() and self.error is None

    def human_incomplete_reason(self) -> Optional[str]:
        reason = self.incomplete_reason()
        return HUMAN_INCOMPLETE_REASONS[reason] if reason is not None else None

    def human_non_simulatable_reason(self) -> Optional[str]:
        """Incompleteness text, else the captured error message, else None."""
        if not self.is_complete():
            return self.human_incomplete_reason()
        if self.error is not None:
            return self.error.message
        return None

    def to_process_graph(self) -> ProcessGraph:
        """Read-only snapshot of a successfully built graph.

        Raises:
            RuntimeError: the build has not run or did not succeed
        """
        if not self._validated or self.error is not None:
            raise RuntimeError("process graph is only available after a successful build")
        return self._view()

    def report(self) -> Dict[str, object]:
        """Build outcome and queries as plain data."""
        reason = self.incomplete_reason()
        return {
            "complete": self.is_complete(),
            "simulatable": self.is_simulatable(),
            "incomplete_reason": reason.value if reason is not None else None,
            "reason": self.human_non_simulatable_reason(),
            "error": self.error.to_dict() if self.error is not None else None,
            "start": self.start_event.id if self.start_event is not None else None,
            "ends": [end.id for end in self.end_events],
            "paths": [[node.id for node in path] for path in self.paths()] if self.error is None else [],
        }


def _element_attributes(element: DiagramElementLike) -> Dict[str, str]:
    attributes = getattr(element, "attributes", None)
    return dict(attributes) if attributes is not None else {}


def build_process_graph(elements: Iterable[DiagramElementLike]) -> ProcessGraph:
    """Build and return the read-only graph, raising on the first diagram error."""
    return ProcessGraphBuilder(elements).build().to_process_graph()


__all__ = [
    "SEQUENCE_FLOW",
    "IGNORED_ELEMENT_KINDS",
    "DiagramElementLike",
    "ProcessGraphBuilder",
    "build_process_graph",
]
