"""Validation helpers for KML parsing.

Responsibilities:
- Loading KML text into an lxml tree with a hardened parser
- Locating the ``kml`` root element
- Geometry coordinate shape checks (NaN leaves, nesting depth)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from kml_geojson.core.constants import MAX_COORDINATE_DEPTH
from kml_geojson.core.exceptions import PermanentError
from kml_geojson.parse_kml._dom import get1, local_name

if TYPE_CHECKING:
    from lxml.etree import _Element

    from kml_geojson.models.feature import Coordinates

logger = logging.getLogger("kml_geojson.parse_kml")


# ---------------------------------------------------------------------------
# Exceptions (public API, re-exported from __init__)
# ---------------------------------------------------------------------------


class KmlParseError(PermanentError):
    """Raised when a document cannot be read as KML."""

    default_stage = "parse_kml"
    default_code = "KML_PARSE_FAILED"


class MissingKmlRootError(KmlParseError):
    """Raised when the document has no ``kml`` element to start from."""

    default_code = "KML_ROOT_MISSING"


# ---------------------------------------------------------------------------
# XML loading
# ---------------------------------------------------------------------------


def load_kml_root(source: str | bytes | object) -> _Element:
    """Return the ``kml`` element of a document.

    ``source`` may be KML text (``str`` or ``bytes``), an lxml element or
    an lxml element tree. When given an element, the element itself is
    used if it is ``kml``, otherwise its first ``kml`` descendant.

    Raises:
        KmlParseError: If text input is empty or not well-formed XML.
        MissingKmlRootError: If no ``kml`` element exists.
    """
    from lxml import etree  # type: ignore[attr-defined]

    if isinstance(source, str | bytes):
        content = source.encode("utf-8") if isinstance(source, str) else source
        if not content.strip():
            msg = "KML document is empty"
            raise KmlParseError(msg)
        # text input is already decoded; its encoding declaration no longer applies
        encoding = "utf-8" if isinstance(source, str) else None
        parser = etree.XMLParser(
            resolve_entities=False, no_network=True, huge_tree=False, encoding=encoding
        )
        try:
            node = etree.fromstring(content, parser=parser)
        except etree.XMLSyntaxError as exc:
            msg = f"Not valid XML: {exc}"
            raise KmlParseError(msg) from exc
    elif isinstance(source, etree._ElementTree):
        node = source.getroot()
    elif isinstance(source, etree._Element):
        node = source
    else:
        msg = f"Cannot read KML from {type(source).__name__}"
        raise KmlParseError(msg)

    if local_name(node) == "kml":
        return node

    root = get1(node, "kml")
    if root is None:
        msg = f"No <kml> element found (document root is <{local_name(node)}>)"
        raise MissingKmlRootError(msg)
    return root


# ---------------------------------------------------------------------------
# Geometry validation
# ---------------------------------------------------------------------------


def geometry_is_valid(coordinates: Coordinates, level: int = 1) -> bool:
    """Check a coordinate structure for non-finite leaves and excessive nesting.

    The outermost array is level 1; a Polygon (rings → tuples → numbers)
    reaches level 3. Anything deeper, or any leaf that is NaN, infinite or
    not a number, makes the geometry invalid.
    """
    if level > MAX_COORDINATE_DEPTH:
        return False

    for item in coordinates:
        if isinstance(item, list | tuple):
            if not geometry_is_valid(item, level + 1):
                return False
        elif not isinstance(item, int | float) or not math.isfinite(item):
            logger.debug("Geometry is invalid: %r", coordinates)
            return False

    return True
