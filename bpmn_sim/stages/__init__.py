"""
Pipeline stages: read diagram markup, then build and validate the process graph.
"""

from bpmn_sim.stages.process_graph_builder import (
    IGNORED_ELEMENT_KINDS,
    SEQUENCE_FLOW,
    ProcessGraphBuilder,
    build_process_graph,
)
from bpmn_sim.stages.xml_reader import BPMNXmlReader, DiagramElement, MarkupError, read_elements

__all__ = [
    # Markup
    "BPMNXmlReader",
    "DiagramElement",
    "MarkupError",
    "read_elements",
    # Graph construction
    "ProcessGraphBuilder",
    "build_process_graph",
    "SEQUENCE_FLOW",
    "IGNORED_ELEMENT_KINDS",
]
