"""
bpmn-sim: Validate Annotated BPMN Process Diagrams

Builds a validated process graph from BPMN 2.0 diagrams whose labels carry
inline attributes (``Review claim:{role: nurse; length: 5}``), checks gateway
branch percentages and answers whether the diagram is complete enough to be
simulated.
"""

# Core components
from bpmn_sim.core import LogLevel, ObservabilityConfig, ObservabilityManager, ReaderConfig, SimConfig

# Models
from bpmn_sim.models import (
    AttributeBag,
    DiagramError,
    EndEvent,
    ErrorKind,
    ExclusiveGateway,
    IncompleteReason,
    NameParser,
    NameParserError,
    Node,
    OutgoingEdge,
    ProcessGraph,
    StartEvent,
    StructureError,
    Task,
    parse_label,
)

# Pipeline stages
from bpmn_sim.stages import (
    BPMNXmlReader,
    DiagramElement,
    ProcessGraphBuilder,
    build_process_graph,
    read_elements,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "LogLevel",
    "ObservabilityConfig",
    "ObservabilityManager",
    "ReaderConfig",
    "SimConfig",
    # Models
    "AttributeBag",
    "NameParser",
    "parse_label",
    "Node",
    "StartEvent",
    "EndEvent",
    "ExclusiveGateway",
    "OutgoingEdge",
    "Task",
    "ProcessGraph",
    "IncompleteReason",
    "ErrorKind",
    "DiagramError",
    "NameParserError",
    "StructureError",
    # Stages
    "BPMNXmlReader",
    "DiagramElement",
    "read_elements",
    "ProcessGraphBuilder",
    "build_process_graph",
]
