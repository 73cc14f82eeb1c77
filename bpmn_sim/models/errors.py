"""
Diagram Error Hierarchy

Typed errors raised while parsing labels and building a process graph.
Every error carries an ``ErrorKind`` discriminator and a ``context`` mapping
so callers can branch on the failure without parsing messages.

Two families are fatal to a build:
- label-grammar errors (``NameParserError``)
- structural errors (``StructureError``)
"""

from enum import Enum
from typing import Any, Dict, Optional

VALID_LABEL_FORMAT = (
    "descriptive name | descriptive name:{role: value} | "
    "descriptive name:{role: value; length: other_value}"
)


class ErrorKind(str, Enum):
    """Discriminator for diagram errors."""

    NO_CLOSING_BRACE = "no_closing_brace"
    INVALID_ATTRIBUTES_FORMAT = "invalid_attributes_format"
    NO_SUCH_ATTRIBUTE = "no_such_attribute"
    ATTRIBUTE_REQUIRED = "attribute_required"
    INVALID_ATTRIBUTE_FORMAT = "invalid_attribute_format"
    GATEWAY_EDGES_REQUIRE_ATTRIBUTES = "gateway_edges_require_attributes"
    GATEWAY_PERCENTAGES_MUST_SUM_TO_100 = "gateway_percentages_must_sum_to_100"
    UNKNOWN_ELEMENT_KIND = "unknown_element_kind"


class DiagramError(Exception):
    """Base class for all diagram errors."""

    kind: ErrorKind

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by the CLI JSON output."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "context": dict(self.context),
        }


class NoSuchAttributeError(DiagramError, KeyError):
    """Raised when reading an attribute a bag does not carry."""

    kind = ErrorKind.NO_SUCH_ATTRIBUTE

    def __init__(self, name: str, attribute_name: str):
        super().__init__(
            f"'{name}' has no attribute '{attribute_name}'",
            name=name,
            attribute_name=attribute_name,
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message


# Label grammar ==============================


class NameParserError(DiagramError):
    """Label did not match the inline attribute grammar."""

    def __init__(self, message: str, **context: Any):
        super().__init__(f"{message}. Valid format is: {VALID_LABEL_FORMAT}", **context)


class NoClosingBraceError(NameParserError):
    kind = ErrorKind.NO_CLOSING_BRACE

    def __init__(self, label: Optional[str] = None):
        super().__init__("no closing brace found for attributes", label=label)


class InvalidAttributesFormatError(NameParserError):
    kind = ErrorKind.INVALID_ATTRIBUTES_FORMAT

    def __init__(self, name: str, attributes_str: str):
        super().__init__(
            f"attributes '{attributes_str}' for {name} are in an invalid format",
            name=name,
            attributes_str=attributes_str,
        )


# Structure ==================================


class StructureError(DiagramError):
    """Diagram elements are individually parseable but structurally invalid."""


class AttributeRequiredError(StructureError):
    kind = ErrorKind.ATTRIBUTE_REQUIRED

    def __init__(self, node_type: str, attribute_name: str, **context: Any):
        super().__init__(
            f"for node type '{node_type}', attribute {attribute_name} is required",
            node_type=node_type,
            attribute_name=attribute_name,
            **context,
        )


class InvalidAttributeFormatError(StructureError):
    kind = ErrorKind.INVALID_ATTRIBUTE_FORMAT

    def __init__(self, attribute_name: str, attribute_value: str):
        super().__init__(
            f"for attribute '{attribute_name}', the value {attribute_value} "
            f"is in an invalid format",
            attribute_name=attribute_name,
            attribute_value=attribute_value,
        )


class GatewayEdgesRequireAttributesError(AttributeRequiredError):
    """A gateway edge has no label at all, so it has no percentage either."""

    kind = ErrorKind.GATEWAY_EDGES_REQUIRE_ATTRIBUTES

    def __init__(self, gateway_name: Optional[str]):
        StructureError.__init__(
            self,
            f"all edges out of gateway '{gateway_name}', need to have names and percentages",
            node_type="gateway outgoing edge",
            attribute_name="percentage",
            gateway_name=gateway_name,
        )


class GatewayPercentagesMustSumTo100Error(StructureError):
    kind = ErrorKind.GATEWAY_PERCENTAGES_MUST_SUM_TO_100

    def __init__(self, gateway_name: Optional[str], percentage_sum: Optional[int] = None):
        super().__init__(
            f"all edges out of gateway '{gateway_name}', need to have percentages that add to 100",
            gateway_name=gateway_name,
            percentage_sum=percentage_sum,
        )


class UnknownElementKindError(StructureError):
    kind = ErrorKind.UNKNOWN_ELEMENT_KIND

    def __init__(self, element_kind: str, attributes: Dict[str, str]):
        super().__init__(
            f"unknown xml node: {element_kind}, {attributes}",
            element_kind=element_kind,
            attributes=dict(attributes),
        )


__all__ = [
    "VALID_LABEL_FORMAT",
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
