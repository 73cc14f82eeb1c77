"""
BPMN XML Reader

Reads BPMN 2.0 XML and flattens the children of every ``<process>`` into an
ordered list of ``DiagramElement`` values: the element kind (local tag name)
plus its attributes keyed by local name. Nested children such as
``<incoming>``/``<outgoing>`` are not emitted; the builder only needs the
direct flow elements and their references.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field

from bpmn_sim.core.config import ReaderConfig

logger = logging.getLogger(__name__)


class MarkupError(ValueError):
    """The diagram text could not be read as XML."""


class DiagramElement(BaseModel):
    """One flattened diagram element."""

    kind: str = Field(..., description="Element kind, e.g. 'task' or 'sequenceFlow'")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Attributes by local name")
    line: Optional[int] = Field(None, description="Source line, when known")

    model_config = ConfigDict(frozen=True)

    def get(self, name: str) -> Optional[str]:
        """Attribute value by name, or None."""
        return self.attributes.get(name)


class BPMNXmlReader:
    """Turns BPMN XML into the flat element list consumed by the graph builder."""

    def __init__(self, config: Optional[ReaderConfig] = None):
        self.config = config or ReaderConfig()
        self._parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
            recover=self.config.recover,
        )

    def read(self, xml: Union[str, bytes]) -> List[DiagramElement]:
        """Parse XML text.

        Raises:
            lxml.etree.XMLSyntaxError: the text is not well-formed XML
            MarkupError: nothing could be recovered from the text
        """
        if isinstance(xml, str):
            xml = xml.encode("utf-8")
        root = etree.fromstring(xml, parser=self._parser)
        if root is None:
            raise MarkupError("diagram has no root element")
        return self._flatten(root)

    def read_file(self, path: Union[str, Path]) -> List[DiagramElement]:
        return self.read(Path(path).read_bytes())

    def _process_elements(self, root: etree._Element) -> List[etree._Element]:
        qualified = f"{{{self.config.namespace}}}{self.config.process_tag}"
        processes = [root] if root.tag == qualified else list(root.iter(qualified))

        if not processes and self.config.allow_unqualified:
            processes = [root] if root.tag == self.config.process_tag else list(
                root.iter(self.config.process_tag)
            )

        if not processes:
            logger.warning(f"No <{self.config.process_tag}> element found in diagram")
        return processes

    def _flatten(self, root: etree._Element) -> List[DiagramElement]:
        elements: List[DiagramElement] = []

        for process in self._process_elements(root):
            for child in process:
                if not isinstance(child.tag, str):
                    continue
                elements.append(
                    DiagramElement(
                        kind=etree.QName(child).localname,
                        attributes={
                            etree.QName(key).localname: value for key, value in child.attrib.items()
                        },
                        line=child.sourceline,
                    )
                )

        logger.debug(f"Flattened {len(elements)} diagram elements")
        return elements


def read_elements(xml: Union[str, bytes], config: Optional[ReaderConfig] = None) -> List[DiagramElement]:
    """Convenience wrapper around ``BPMNXmlReader(config).read(xml)``."""
    return BPMNXmlReader(config).read(xml)


__all__ = ["MarkupError", "DiagramElement", "BPMNXmlReader", "read_elements"]
