"""
Label Name Parser

Parses the inline attribute language used in diagram labels:

    Label    := Name (":{" AttrList "}")?
    AttrList := Attr (";" Attr)*
    Attr     := Key ":" Value

Examples:
    "Review claim"                          -> name only
    "Review claim:{role: nurse}"            -> name + role
    "Review claim:{role: nurse; length: 5}" -> name + role + length
"""

import logging
import re
from typing import Dict

from bpmn_sim.models.attributes import AttributeBag
from bpmn_sim.models.errors import InvalidAttributesFormatError, NoClosingBraceError

logger = logging.getLogger(__name__)

ATTRIBUTES_MARKER = ":{"

_LABEL_PATTERN = re.compile(r"(.*):\{(.*)\}", re.DOTALL)
_ATTRIBUTE_PATTERN = re.compile(r"([^:]*):([^:]*)")


class NameParser:
    """Parses a single label into an ``AttributeBag``."""

    def __init__(self, label: str):
        self.label = label.strip()

    def parse(self) -> AttributeBag:
        """Parse the label.

        Returns:
            AttributeBag with the descriptive name and any inline attributes

        Raises:
            NoClosingBraceError: attributes are opened but the label does not
                end with the closing brace
            InvalidAttributesFormatError: an attribute is not a single
                ``key: value`` pair
        """
        if ATTRIBUTES_MARKER not in self.label:
            return AttributeBag(name=self.label)

        match = _LABEL_PATTERN.fullmatch(self.label)
        if match is None:
            raise NoClosingBraceError(self.label)

        name = match.group(1).strip()
        attributes_str = match.group(2)

        return AttributeBag(name=name, attributes=self.parse_attributes(attributes_str))

    def parse_attributes(self, attributes_str: str) -> Dict[str, str]:
        """Split ``key: value; key: value`` into a mapping.

        An empty attribute list is rejected, as is a trailing ``;``.
        """
        attributes: Dict[str, str] = {}

        for attribute in (piece.strip() for piece in attributes_str.split(";")):
            match = _ATTRIBUTE_PATTERN.fullmatch(attribute)
            if match is None:
                raise InvalidAttributesFormatError(self.label, attributes_str)

            key, value = (group.strip() for group in match.groups())
            if key in attributes:
                logger.debug(f"Duplicate attribute '{key}' in label '{self.label}', last one wins")
            attributes[key] = value

        return attributes


def parse_label(label: str) -> AttributeBag:
    """Convenience wrapper around ``NameParser(label).parse()``."""
    return NameParser(label).parse()


__all__ = ["ATTRIBUTES_MARKER", "NameParser", "parse_label"]
