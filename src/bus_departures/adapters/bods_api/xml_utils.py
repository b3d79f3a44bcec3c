"""Namespace-agnostic helpers over xml.etree.ElementTree.

TransXChange and SIRI documents declare a default namespace, so tags are
matched on their local name only.
"""

import xml.etree.ElementTree as ET
from collections.abc import Iterator

from bus_departures.domain.errors import DocumentParseError


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from a tag."""
    return tag.rsplit("}", 1)[-1]


def parse_document(data: bytes | str, root_name: str) -> ET.Element:
    """Parse a document and check its root element.

    Raises:
        DocumentParseError: If the document is malformed or has a different root.
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DocumentParseError(f"Malformed {root_name} document: {e}") from e

    if local_name(root.tag) != root_name:
        raise DocumentParseError(f"Expected <{root_name}> root, got <{local_name(root.tag)}>")
    return root


def children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield direct children with the given local name."""
    for child in element:
        if local_name(child.tag) == name:
            yield child


def child(element: ET.Element, name: str) -> ET.Element | None:
    """Get the first direct child with the given local name."""
    return next(children(element, name), None)


def descendants(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield all descendants with the given local name."""
    for node in element.iter():
        if node is not element and local_name(node.tag) == name:
            yield node


def child_text(element: ET.Element, name: str) -> str | None:
    """Get the stripped text of the first matching child, or None when empty."""
    node = child(element, name)
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None


def path(element: ET.Element | None, *names: str) -> ET.Element | None:
    """Follow a chain of child names, returning None if any link is missing."""
    current = element
    for name in names:
        if current is None:
            return None
        current = child(current, name)
    return current
