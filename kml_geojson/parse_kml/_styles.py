"""KML style parsing and resolution.

KML styles a Placemark indirectly: ``styleUrl`` points at a ``Style``
or at a ``StyleMap`` whose ``normal``/``highlight`` pairs point at two
more ``Style`` elements. This module flattens that into per-feature
properties:

- **parse_style**: one ``Style`` element → flat property dict
- **build_style_tables**: one pass over the document → style and style-map tables
- **resolve_style**: ``styleUrl`` + geometry type → properties for one feature

Style properties form a closed schema grouped by family (``icon``,
``line``, ``fill``, ``text``). Each geometry type only keeps the families
that apply to it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NamedTuple

from kml_geojson.core.constants import HIGHLIGHT_PREFIX, LABEL_SCALE_PX, STYLE_ID_KEY
from kml_geojson.models.feature import GeometryType
from kml_geojson.parse_kml._color import kml_color
from kml_geojson.parse_kml._coordinates import parse_number
from kml_geojson.parse_kml._dom import get, get1, kml_id, text

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_geojson.parse_kml")

# ---------------------------------------------------------------------------
# Property schema
# ---------------------------------------------------------------------------

STYLE_PROPERTIES: dict[str, tuple[str, ...]] = {
    "icon": ("icon-color", "icon-opacity", "icon-size", "icon-image"),
    "line": ("line-color", "line-opacity", "line-width"),
    "fill": ("fill-color", "fill-opacity", "fill-outline-color"),
    "text": ("text-color", "text-opacity", "text-size"),
}

GEOMETRY_STYLE_FAMILIES: dict[GeometryType, tuple[str, ...]] = {
    GeometryType.POINT: ("icon", "text"),
    GeometryType.LINE_STRING: ("line", "text"),
    GeometryType.POLYGON: ("fill", "text"),
}


def _family_keys(families: tuple[str, ...]) -> frozenset[str]:
    keys = [key for family in families for key in STYLE_PROPERTIES[family]]
    return frozenset(keys + [HIGHLIGHT_PREFIX + key for key in keys])


_ALLOWED_KEYS: dict[GeometryType, frozenset[str]] = {
    geometry_type: _family_keys(families)
    for geometry_type, families in GEOMETRY_STYLE_FAMILIES.items()
}

StyleTable = dict[str, dict[str, Any]]


@dataclass(frozen=True, slots=True)
class StyleMapEntry:
    """A ``StyleMap`` reduced to its two style references.

    Attributes:
        id: The StyleMap's id.
        normal: Style id of the ``normal`` pair, ``None`` if absent.
        highlight: Style id of the ``highlight`` pair, ``None`` if absent.
    """

    id: str
    normal: str | None = None
    highlight: str | None = None


StyleMapTable = dict[str, StyleMapEntry]


class StyleTables(NamedTuple):
    """Style lookups built once per document."""

    styles: StyleTable
    style_maps: StyleMapTable


# ---------------------------------------------------------------------------
# Style node parsing
# ---------------------------------------------------------------------------


def _finite_number(node: _Element | None) -> float | None:
    if node is None:
        return None
    value = parse_number(text(node))
    return value if math.isfinite(value) else None


def _set_color(obj: dict[str, Any], prefix: str, sub_style: _Element) -> str | None:
    color_node = get1(sub_style, "color")
    if color_node is None:
        return None
    color, opacity = kml_color(text(color_node))
    if color is not None:
        obj[f"{prefix}-color"] = color
    if opacity is not None:
        obj[f"{prefix}-opacity"] = opacity
    return color


def parse_style(
    node: _Element,
    style_id: str | None = None,
    *,
    label_scale_px: float = LABEL_SCALE_PX,
) -> dict[str, Any]:
    """Parse one ``Style`` element into a flat property dict.

    ``style_id`` overrides the node's own ``id`` (used for
    ``gx:CascadingStyle``, whose id sits on the wrapper). The id is stored
    under ``style_id`` and is never copied onto features.
    """
    obj: dict[str, Any] = {STYLE_ID_KEY: style_id if style_id is not None else kml_id(node)}

    icon_style = get1(node, "IconStyle")
    if icon_style is not None:
        _set_color(obj, "icon", icon_style)
        scale = _finite_number(get1(icon_style, "scale"))
        if scale is not None:
            obj["icon-size"] = scale
        icon = get1(icon_style, "Icon")
        href = text(get1(icon, "href")) if icon is not None else None
        if href:
            obj["icon-image"] = href

    line_style = get1(node, "LineStyle")
    if line_style is not None:
        _set_color(obj, "line", line_style)
        width = _finite_number(get1(line_style, "width"))
        if width is not None:
            obj["line-width"] = width

    poly_style = get1(node, "PolyStyle")
    if poly_style is not None:
        # KML has no separate outline color
        color = _set_color(obj, "fill", poly_style)
        if color is not None:
            obj["fill-outline-color"] = color

    label_style = get1(node, "LabelStyle")
    if label_style is not None:
        _set_color(obj, "text", label_style)
        scale = _finite_number(get1(label_style, "scale"))
        if scale is not None:
            obj["text-size"] = math.floor(scale * label_scale_px + 0.5)

    return obj


# ---------------------------------------------------------------------------
# Style tables
# ---------------------------------------------------------------------------


def _strip_ref(value: str | None) -> str:
    return (value or "").strip().removeprefix("#")


def parse_style_map(node: _Element) -> StyleMapEntry:
    """Reduce a ``StyleMap`` element to its normal/highlight style ids."""
    pairs: dict[str, str] = {}
    for pair in get(node, "Pair"):
        key_node = get1(pair, "key")
        url_node = get1(pair, "styleUrl")
        if key_node is not None and url_node is not None:
            pairs[(text(key_node) or "").strip()] = _strip_ref(text(url_node))
    return StyleMapEntry(
        id=kml_id(node) or "",
        normal=pairs.get("normal"),
        highlight=pairs.get("highlight"),
    )


def build_style_tables(root: _Element, *, label_scale_px: float = LABEL_SCALE_PX) -> StyleTables:
    """Scan the whole document once for styles and style maps.

    - every ``Style`` with an id, keyed by that id
    - every ``gx:CascadingStyle``'s inner ``Style``, keyed by the wrapper's id
    - every ``StyleMap`` with an id

    When an id is defined twice, the first definition in document order wins.
    """
    styles: StyleTable = {}
    style_maps: StyleMapTable = {}

    for node in get(root, "Style"):
        style_id = kml_id(node)
        if style_id is not None:
            styles.setdefault(style_id, parse_style(node, label_scale_px=label_scale_px))

    for cascading in get(root, "CascadingStyle"):
        inner = get1(cascading, "Style")
        if inner is not None:
            style_id = kml_id(cascading) or ""
            styles.setdefault(
                style_id, parse_style(inner, style_id, label_scale_px=label_scale_px)
            )

    for node in get(root, "StyleMap"):
        entry = parse_style_map(node)
        if entry.id:
            style_maps.setdefault(entry.id, entry)

    logger.debug("Built %d style(s) and %d style map(s)", len(styles), len(style_maps))
    return StyleTables(styles, style_maps)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _style_properties(style: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in style.items() if key != STYLE_ID_KEY}


def resolve_style(
    style_url: str,
    geometry_type: GeometryType,
    styles: StyleTable,
    style_maps: StyleMapTable,
) -> dict[str, Any]:
    """Resolve a ``styleUrl`` into the style properties of one feature.

    A StyleMap with the referenced id takes precedence over a Style with
    the same id. For a StyleMap, the normal style's properties are used
    as-is and each highlight property is added as ``highlight-<key>``
    unless it equals the normal value. The result only keeps the style
    families relevant to ``geometry_type``.
    """
    ref = _strip_ref(style_url)
    resolved: dict[str, Any] = {}

    style_map = style_maps.get(ref)
    if style_map is not None:
        normal = styles.get(style_map.normal) if style_map.normal else None
        highlight = styles.get(style_map.highlight) if style_map.highlight else None

        if normal is not None:
            resolved.update(_style_properties(normal))
        elif style_map.normal:
            logger.debug("StyleMap '%s' references unknown style '%s'", ref, style_map.normal)

        if highlight is not None:
            for key, value in _style_properties(highlight).items():
                if normal is None or normal.get(key) != value:
                    resolved[HIGHLIGHT_PREFIX + key] = value
        elif style_map.highlight:
            logger.debug("StyleMap '%s' references unknown style '%s'", ref, style_map.highlight)
    elif ref in styles:
        resolved.update(_style_properties(styles[ref]))
    else:
        logger.debug("Unresolved style reference '%s'", style_url)

    allowed = _ALLOWED_KEYS[geometry_type]
    return {key: value for key, value in resolved.items() if key in allowed}
