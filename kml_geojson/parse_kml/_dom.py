"""Element lookup helpers over an lxml tree.

KML documents appear both with and without the KML 2.2 default namespace,
and extension elements live under ``gx:``. Every lookup here matches on
the local tag name (``{*}`` wildcard) so callers never deal with
namespaces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kml_geojson.core.constants import KML_NAMESPACE

if TYPE_CHECKING:
    from collections.abc import Iterator

    from lxml.etree import _Element


def local_name(node: _Element) -> str:
    """Tag name without namespace, ``""`` for comments and processing instructions."""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def is_element(node: _Element) -> bool:
    """Whether ``node`` is an element (not a comment, PI or entity)."""
    return isinstance(node.tag, str)


def get(node: _Element, name: str) -> list[_Element]:
    """All descendants of ``node`` named ``name``, in document order."""
    return list(node.iterdescendants(f"{{*}}{name}"))


def get1(node: _Element, name: str) -> _Element | None:
    """First descendant of ``node`` named ``name``, or ``None``."""
    return next(node.iterdescendants(f"{{*}}{name}"), None)


def child(node: _Element, name: str) -> _Element | None:
    """First direct child of ``node`` named ``name``, or ``None``."""
    return next(node.iterchildren(f"{{*}}{name}"), None)


def element_children(node: _Element) -> Iterator[_Element]:
    """Direct element children of ``node``, skipping comments and PIs."""
    return (c for c in node.iterchildren() if is_element(c))


def text(node: _Element | None) -> str | None:
    """Full text content of ``node`` (including nested text), ``None`` if absent."""
    if node is None:
        return None
    return "".join(node.itertext())


def kml_id(node: _Element) -> str | None:
    """The node's ``kml:id`` attribute, falling back to a plain ``id``."""
    value = node.get(f"{{{KML_NAMESPACE}}}id")
    if value is None:
        value = node.get("id")
    return value
