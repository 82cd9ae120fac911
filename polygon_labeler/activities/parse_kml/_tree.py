"""Minimal element-tree view over an lxml document.

The extractor only needs three capabilities: find descendants by local
tag name, take the first such descendant, and read an element's text
content.  ``KmlNode`` exposes exactly those so the walk in
``_lxml_parser`` stays independent of lxml's namespace handling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from polygon_labeler.core.exceptions import FormatError

if TYPE_CHECKING:
    from lxml.etree import _Element

# XPath string-value: concatenated descendant text nodes, comments excluded.
_STRING_VALUE = etree.XPath("string()")


def _any_namespace(tag: str) -> str:
    return f"{{*}}{tag}"


class KmlNode:
    """Read-only wrapper around a single lxml element."""

    __slots__ = ("_element",)

    def __init__(self, element: _Element) -> None:
        self._element = element

    def iter(self, tag: str) -> list[KmlNode]:
        """Return this element (if it matches) and all matching descendants, in document order."""
        return [KmlNode(e) for e in self._element.iter(_any_namespace(tag))]

    def descendants(self, tag: str) -> list[KmlNode]:
        """Return all descendant elements with local name *tag*, in document order."""
        return [KmlNode(e) for e in self._element.iterdescendants(_any_namespace(tag))]

    def first_descendant(self, tag: str) -> KmlNode | None:
        """Return the first descendant with local name *tag*, or ``None``."""
        for element in self._element.iterdescendants(_any_namespace(tag)):
            return KmlNode(element)
        return None

    def find_path(self, tags: tuple[str, ...]) -> KmlNode | None:
        """Follow *tags* one ``first_descendant`` hop at a time.

        Returns ``None`` as soon as any link of the chain is missing.
        """
        node: KmlNode | None = self
        for tag in tags:
            if node is None:
                return None
            node = node.first_descendant(tag)
        return node

    def text(self) -> str:
        """Return the element's full text content (all descendant text)."""
        return str(_STRING_VALUE(self._element))


def parse_document(content: str | bytes, source_filename: str) -> KmlNode:
    """Parse KML/XML content into a ``KmlNode`` for the root element.

    ``str`` input is parsed as already-decoded text; ``bytes`` honour the
    document's own encoding declaration.  Entity resolution and network
    access are disabled.

    Raises:
        FormatError: If the content is empty or not well-formed XML.
    """
    if isinstance(content, str):
        raw = content.encode("utf-8")
        encoding: str | None = "utf-8"
    else:
        raw = content
        encoding = None

    if not raw.strip():
        msg = f"KML file {source_filename!r} is empty"
        raise FormatError(msg)

    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
        encoding=encoding,
    )
    try:
        root: _Element = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"KML file {source_filename!r} is not valid XML: {exc}"
        raise FormatError(msg) from exc

    return KmlNode(root)
