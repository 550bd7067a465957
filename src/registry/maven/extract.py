"""Maven coordinate extraction from pom.xml documents.

Parsing is namespace-unaware: element names are compared by local name, so
``<dependency>``, ``<m:dependency>`` and ``{http://maven.apache.org/POM/4.0.0}dependency``
are treated alike.
"""
from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
from xml.parsers import expat

from constants import Constants


class PomParseError(ValueError):
    """Raised when a POM document is not well-formed XML."""


@dataclass(frozen=True)
class MavenDependency:
    """A single ``<dependency>`` declaration."""
    group_id: str
    artifact_id: str
    scope: str
    node: Optional[ET.Element] = field(default=None, compare=False, repr=False)

    @property
    def identifier(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class PomDocument:
    """Parsed POM tree plus the source position of every element."""
    root: ET.Element
    positions: Dict[ET.Element, Tuple[int, int]] = field(default_factory=dict, repr=False)

    def position_of(self, node: Optional[ET.Element]) -> Tuple[Optional[int], Optional[int]]:
        """Return (1-based line, 0-based column) of an element's start tag."""
        if node is None or node not in self.positions:
            return None, None
        return self.positions[node]


def is_maven_descriptor(filename: str) -> bool:
    """Return True for file names the Maven extractor accepts."""
    base = os.path.basename(filename).lower()
    return base in (name.lower() for name in Constants.MAVEN_DESCRIPTOR_FILES)


def parse_pom(text: str) -> PomDocument:
    """Parse POM text into an ElementTree, recording element positions.

    Raises:
        PomParseError: if the text is not well-formed XML.
    """
    builder = ET.TreeBuilder()
    parser = expat.ParserCreate()
    positions: Dict[ET.Element, Tuple[int, int]] = {}

    def _start(tag, attrs):
        element = builder.start(tag, attrs)
        positions[element] = (parser.CurrentLineNumber, parser.CurrentColumnNumber)

    parser.StartElementHandler = _start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data
    try:
        parser.Parse(text, True)
    except expat.ExpatError as e:
        raise PomParseError(f"Malformed POM: {e}") from e
    return PomDocument(root=builder.close(), positions=positions)


def _local_name(tag) -> str:
    if not isinstance(tag, str):
        return ""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    if ":" in tag:
        tag = tag.rsplit(":", 1)[1]
    return tag


def _child_text(parent: ET.Element, name: str, default: str) -> str:
    """Text content of the first child element called ``name``."""
    for child in parent:
        if _local_name(child.tag) == name:
            return "".join(child.itertext()).strip()
    return default


def iter_dependency_nodes(root: ET.Element) -> Iterator[ET.Element]:
    """Yield every dependencies/dependency element in document order."""
    for parent in root.iter():
        if _local_name(parent.tag) != "dependencies":
            continue
        for child in parent:
            if _local_name(child.tag) == "dependency":
                yield child


def extract_dependencies(root: ET.Element) -> List[MavenDependency]:
    """Extract every declared dependency from a POM tree.

    Declarations are returned in document order and are not deduplicated.
    Missing groupId/artifactId become empty strings; a missing scope becomes
    the default Maven scope.
    """
    nodes = sorted(iter_dependency_nodes(root), key=_document_order(root))
    return [
        MavenDependency(
            group_id=_child_text(node, "groupId", ""),
            artifact_id=_child_text(node, "artifactId", ""),
            scope=_child_text(node, "scope", Constants.DEFAULT_MAVEN_SCOPE),
            node=node,
        )
        for node in nodes
    ]


def _document_order(root: ET.Element):
    order = {id(element): index for index, element in enumerate(root.iter())}
    return lambda element: order[id(element)]
