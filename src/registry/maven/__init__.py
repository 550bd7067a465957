"""Maven descriptor support.

- extract.py: position-tracking pom.xml parsing and dependency extraction
"""

from .extract import (  # noqa: F401
    MavenDependency,
    PomDocument,
    PomParseError,
    extract_dependencies,
    is_maven_descriptor,
    parse_pom,
)

__all__ = [
    "MavenDependency",
    "PomDocument",
    "PomParseError",
    "extract_dependencies",
    "is_maven_descriptor",
    "parse_pom",
]
