"""Folder and Placemark conversion.

Turns single ``Folder`` and ``Placemark`` elements into ``KmlFolder`` and
``KmlFeature`` records. Traversal (which folder is current) is the
walker's job; these functions only convert the node they are given.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from kml_geojson.core.constants import DEFAULT_FOLDER_NAME
from kml_geojson.models.feature import GeometryType, KmlFeature
from kml_geojson.models.folder import KmlFolder
from kml_geojson.parse_kml._coordinates import extract_coordinates
from kml_geojson.parse_kml._dom import child, get, text
from kml_geojson.parse_kml._styles import StyleMapTable, StyleTable, resolve_style
from kml_geojson.parse_kml._validation import geometry_is_valid

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("kml_geojson.parse_kml")


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Per-parse state shared by every node conversion.

    Attributes:
        styles: Style table built for this document.
        style_maps: StyleMap table built for this document.
        new_id: Generator of fresh opaque ids for folders and features.
        include_altitude: Keep altitude in coordinate tuples.
        default_folder_name: Name for Folders without a ``<name>``.
    """

    styles: StyleTable
    style_maps: StyleMapTable
    new_id: Callable[[], str]
    include_altitude: bool = True
    default_folder_name: str = DEFAULT_FOLDER_NAME


def parse_folder(node: _Element, parent_folder_id: str | None, context: ParseContext) -> KmlFolder:
    """Convert a ``Folder`` element; an empty ``<name/>`` keeps its empty name."""
    name = text(child(node, "name"))
    return KmlFolder(
        folder_id=context.new_id(),
        name=context.default_folder_name if name is None else name,
        parent_folder_id=parent_folder_id,
    )


def parse_placemark(
    node: _Element, folder_id: str | None, context: ParseContext
) -> list[KmlFeature]:
    """Convert a ``Placemark`` into one feature per Point, LineString and Polygon.

    Name, description and style are shared by all geometries of the
    Placemark. Geometries with malformed coordinates are skipped; the
    Placemark's other geometries are still converted.
    """
    name = text(child(node, "name")) or ""
    description = text(child(node, "description")) or ""
    style_url = text(child(node, "styleUrl"))

    features: list[KmlFeature] = []

    for geometry_type in GeometryType:
        for element in get(node, geometry_type.value):
            coordinates = extract_coordinates(
                element, geometry_type, include_altitude=context.include_altitude
            )
            if not geometry_is_valid(coordinates):
                logger.warning(
                    "Skipping invalid %s geometry in Placemark '%s'",
                    geometry_type.value,
                    name,
                )
                continue

            properties: dict[str, Any] = {
                "name": name,
                "description": description,
                "folder_id": folder_id,
            }
            if style_url:
                properties.update(
                    resolve_style(style_url, geometry_type, context.styles, context.style_maps)
                )

            features.append(
                KmlFeature(
                    id=context.new_id(),
                    geometry_type=geometry_type,
                    coordinates=coordinates,
                    properties=properties,
                )
            )

    return features
