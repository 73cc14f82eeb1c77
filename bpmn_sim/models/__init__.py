"""Domain models: label attributes, process nodes, graphs and errors."""

from bpmn_sim.models.attributes import AttributeBag
from bpmn_sim.models.errors import (
    AttributeRequiredError,
    DiagramError,
    ErrorKind,
    GatewayEdgesRequireAttributesError,
    GatewayPercentagesMustSumTo100Error,
    InvalidAttributeFormatError,
    InvalidAttributesFormatError,
    NameParserError,
    NoClosingBraceError,
    NoSuchAttributeError,
    StructureError,
    UnknownElementKindError,
)
from bpmn_sim.models.graph import (
    HUMAN_INCOMPLETE_REASONS,
    DirectedGraph,
    IncompleteReason,
    ProcessGraph,
    enumerate_paths,
)
from bpmn_sim.models.name_parser import NameParser, parse_label
from bpmn_sim.models.nodes import (
    NODE_TYPES,
    AnyNode,
    EndEvent,
    ExclusiveGateway,
    Node,
    NodeKind,
    OutgoingEdge,
    StartEvent,
    Task,
)

__all__ = [
    "AttributeBag",
    "NameParser",
    "parse_label",
    "NodeKind",
    "Node",
    "StartEvent",
    "EndEvent",
    "ExclusiveGateway",
    "OutgoingEdge",
    "Task",
    "AnyNode",
    "NODE_TYPES",
    "DirectedGraph",
    "enumerate_paths",
    "ProcessGraph",
    "IncompleteReason",
    "HUMAN_INCOMPLETE_REASONS",
    "ErrorKind",
    "DiagramError",
    "NoSuchAttributeError",
    "NameParserError",
    "NoClosingBraceError",
    "InvalidAttributesFormatError",
    "StructureError",
    "AttributeRequiredError",
    "InvalidAttributeFormatError",
    "GatewayEdgesRequireAttributesError",
    "GatewayPercentagesMustSumTo100Error",
    "UnknownElementKindError",
]
