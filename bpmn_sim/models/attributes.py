"""
Attribute Bag

Immutable result of parsing an element label such as
``Handle failure:{role: nurse; length: 5}``: a descriptive name plus the
key/value attributes written inside the braces.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

from bpmn_sim.models.errors import NoSuchAttributeError


class AttributeBag(BaseModel):
    """Name and inline attributes parsed from one label."""

    name: str = Field(..., description="Descriptive name (label text before ':{')")
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Attribute values as written, trimmed"
    )

    model_config = ConfigDict(frozen=True)

    def has_attribute(self, key: str) -> bool:
        """Whether the label declared ``key``."""
        return key in self.attributes

    def get_attribute(self, key: str) -> str:
        """Return the raw string value of ``key``.

        Raises:
            NoSuchAttributeError: if the label did not declare ``key``
        """
        try:
            return self.attributes[key]
        except KeyError:
            raise NoSuchAttributeError(self.name, key) from None

    def is_empty(self) -> bool:
        return not self.attributes


__all__ = ["AttributeBag"]
