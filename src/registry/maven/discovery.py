"""Parsing helpers for Maven index (maven-metadata.xml) and POM documents."""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import List, Optional

_PLACEHOLDER_RE = re.compile(r"\$\{.*?\}")


class MavenDocument:
    """Namespace-agnostic view over a parsed XML document.

    Paths are dot separated and relative to the root element, e.g.
    ``"versioning.versions"`` or ``"scm.url"``.
    """

    def __init__(self, root: ET.Element):
        self.root = root

    @classmethod
    def parse(cls, text: str) -> "MavenDocument":
        """Parse raw XML text.

        Raises:
            ET.ParseError: If the text is not well-formed XML.
        """
        root = ET.fromstring(text)
        for elem in root.iter():
            if isinstance(elem.tag, str) and "}" in elem.tag:
                elem.tag = elem.tag.split("}", 1)[1]
        return cls(root)

    def _find(self, path: str) -> Optional[ET.Element]:
        return self.root.find(path.replace(".", "/"))

    def value_at(self, path: str) -> Optional[str]:
        """Return the stripped text at ``path``, or None when missing or empty."""
        elem = self._find(path)
        if elem is None or elem.text is None:
            return None
        value = elem.text.strip()
        return value or None

    def children_at(self, path: str, tag: Optional[str] = None) -> Optional[List[ET.Element]]:
        """Return the children of the element at ``path`` (optionally filtered by tag)."""
        elem = self._find(path)
        if elem is None:
            return None
        return [child for child in elem if tag is None or child.tag == tag]


def extract_versions(metadata: MavenDocument) -> List[str]:
    """Return versions listed in maven-metadata.xml in source order."""
    elements = metadata.children_at("versioning.versions", "version")
    if not elements:
        return []
    versions = []
    for item in elements:
        if isinstance(item.text, str) and item.text.strip():
            versions.append(item.text.strip())
    return versions


def contains_placeholder(value: str) -> bool:
    """True when ``value`` still holds an unresolved ``${...}`` build property."""
    return bool(_PLACEHOLDER_RE.search(value))
