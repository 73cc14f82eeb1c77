"""
Process Node Model

The closed set of node variants a diagram may contain:

- StartEvent / EndEvent: sentinels marking process entry and exit
- ExclusiveGateway: branching node whose outgoing edges carry percentages
- Task: a processing step with a required role and time length

Nodes are built from an element id and its optional label. Labels are parsed
with the inline attribute language (see ``bpmn_sim.models.name_parser``) and
then checked against the attributes each kind requires.
"""

import re
from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Type, Union

from pydantic import BaseModel, Field

from bpmn_sim.models.attributes import AttributeBag
from bpmn_sim.models.errors import (
    AttributeRequiredError,
    GatewayEdgesRequireAttributesError,
    GatewayPercentagesMustSumTo100Error,
    InvalidAttributeFormatError,
)
from bpmn_sim.models.name_parser import parse_label

_DIGITS = re.compile(r"\d+", re.ASCII)

GATEWAY_EDGE_TYPE = "gateway outgoing edge"
GATEWAY_PERCENTAGE_TOTAL = 100


class NodeKind(str, Enum):
    """Element kinds that become graph nodes."""

    START_EVENT = "startEvent"
    END_EVENT = "endEvent"
    EXCLUSIVE_GATEWAY = "exclusiveGateway"
    TASK = "task"


def _parse_digits(attribute_name: str, value: str) -> int:
    if not _DIGITS.fullmatch(value):
        raise InvalidAttributeFormatError(attribute_name, value)
    return int(value)


class Node(BaseModel):
    """Base class for process nodes."""

    id: str = Field(..., description="Element id, unique within the diagram")
    kind: NodeKind = Field(..., description="Node variant discriminator")
    attributes: Optional[AttributeBag] = Field(None, description="Parsed label, if any")

    @classmethod
    def create(cls, node_id: str, label: Optional[str] = None) -> "Node":
        """Build a node from its id and raw label text.

        Raises:
            NameParserError: the label does not follow the attribute grammar
            StructureError: a required attribute is missing or malformed
        """
        attributes = parse_label(label) if label is not None else None
        node = cls(id=node_id, attributes=attributes)
        if attributes is not None:
            node.validate_and_set_node_specific_attributes()
        return node

    @property
    def name(self) -> Optional[str]:
        return self.attributes.name if self.attributes is not None else None

    @property
    def display_name(self) -> str:
        """Name for messages; falls back to the id for unlabelled nodes."""
        return self.name if self.name is not None else self.id

    # Capabilities =============================

    @property
    def is_start_event(self) -> bool:
        return False

    @property
    def is_end_event(self) -> bool:
        return False

    @property
    def is_gateway(self) -> bool:
        return False

    @property
    def takes_time(self) -> bool:
        return False

    # Behaviors ================================

    def validate_and_set_node_specific_attributes(self) -> None:
        """Check and store the attributes this kind requires. No-op by default."""

    def record_outgoing_edge(self, target: "Node", label: Optional[str]) -> None:
        """Note an edge leaving this node while the diagram is scanned."""

    def validate_outgoing_nodes(self) -> None:
        """Check outgoing edges once all of them are known."""


class StartEvent(Node):
    kind: Literal[NodeKind.START_EVENT] = NodeKind.START_EVENT

    @property
    def is_start_event(self) -> bool:
        return True


class EndEvent(Node):
    kind: Literal[NodeKind.END_EVENT] = NodeKind.END_EVENT

    @property
    def is_end_event(self) -> bool:
        return True


class OutgoingEdge(BaseModel):
    """A branch leaving an exclusive gateway."""

    target: Node = Field(..., description="Node the branch leads to (not owned)")
    attributes: Optional[AttributeBag] = Field(None, description="Parsed edge label")
    percentage: int = Field(..., ge=0, description="Relative likelihood of the branch")

    @classmethod
    def create(cls, target: Node, label: Optional[str], gateway_name: str) -> "OutgoingEdge":
        """Parse an edge label and extract its percentage.

        Raises:
            GatewayEdgesRequireAttributesError: the edge has no label
            AttributeRequiredError: the label has no percentage
            InvalidAttributeFormatError: the percentage is not digits only
        """
        if label is None:
            raise GatewayEdgesRequireAttributesError(gateway_name)

        attributes = parse_label(label)
        if not attributes.has_attribute("percentage"):
            raise AttributeRequiredError(GATEWAY_EDGE_TYPE, "percentage", gateway_name=gateway_name)

        percentage = _parse_digits("percentage", attributes.get_attribute("percentage"))
        return cls(target=target, attributes=attributes, percentage=percentage)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.name if self.attributes is not None else None


class ExclusiveGateway(Node):
    kind: Literal[NodeKind.EXCLUSIVE_GATEWAY] = NodeKind.EXCLUSIVE_GATEWAY
    outgoing: List[OutgoingEdge] = Field(default_factory=list, description="Branches in scan order")

    @property
    def is_gateway(self) -> bool:
        return True

    def record_outgoing_edge(self, target: Node, label: Optional[str]) -> None:
        self.outgoing.append(OutgoingEdge.create(target, label, self.display_name))

    def percentage_sum(self) -> int:
        return sum(edge.percentage for edge in self.outgoing)

    def validate_outgoing_nodes(self) -> None:
        total = self.percentage_sum()
        if total != GATEWAY_PERCENTAGE_TOTAL:
            raise GatewayPercentagesMustSumTo100Error(self.display_name, total)


class Task(Node):
    kind: Literal[NodeKind.TASK] = NodeKind.TASK
    role: Optional[str] = Field(None, description="Who performs the task")
    length: Optional[int] = Field(None, ge=0, description="Time the task takes")

    @property
    def takes_time(self) -> bool:
        return True

    @property
    def time_length(self) -> Optional[int]:
        return self.length

    def validate_and_set_node_specific_attributes(self) -> None:
        attributes = self.attributes
        if attributes is None:
            return

        if not attributes.has_attribute("role"):
            raise AttributeRequiredError("task", "role", node_id=self.id)
        self.role = attributes.get_attribute("role")

        if not attributes.has_attribute("length"):
            raise AttributeRequiredError("task", "length", node_id=self.id)
        self.length = _parse_digits("length", attributes.get_attribute("length"))


AnyNode = Annotated[
    Union[StartEvent, EndEvent, ExclusiveGateway, Task],
    Field(discriminator="kind"),
]

NODE_TYPES: Dict[str, Type[Node]] = {
    NodeKind.START_EVENT.value: StartEvent,
    NodeKind.END_EVENT.value: EndEvent,
    NodeKind.EXCLUSIVE_GATEWAY.value: ExclusiveGateway,
    NodeKind.TASK.value: Task,
}


__all__ = [
    "NodeKind",
    "Node",
    "StartEvent",
    "EndEvent",
    "ExclusiveGateway",
    "OutgoingEdge",
    "Task",
    "AnyNode",
    "NODE_TYPES",
    "GATEWAY_EDGE_TYPE",
]
