"""Data model for a converted KML geometry.

A KmlFeature is one GeoJSON Feature: a single Point, LineString or
Polygon taken from a Placemark, with the Placemark's name, description,
enclosing folder id and resolved style properties. A Placemark holding
several geometries yields one KmlFeature per geometry.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

Coordinates = list[float] | list[list[float]] | list[list[list[float]]]
"""Point = one tuple, LineString = list of tuples, Polygon = list of rings."""


class GeometryType(enum.Enum):
    """KML geometry elements converted to GeoJSON.

    The value is both the KML element name and the GeoJSON geometry type.
    """

    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"


@dataclass(frozen=True, slots=True)
class KmlFeature:
    """A single GeoJSON Feature extracted from a KML Placemark.

    Attributes:
        id: Freshly generated opaque id.
        geometry_type: Kind of geometry.
        coordinates: Nested coordinate arrays (see ``Coordinates``).
        properties: ``name``, ``description``, ``folder_id`` plus resolved
            style properties (``icon-*``, ``line-*``, ``fill-*``, ``text-*``
            and their ``highlight-`` variants).
    """

    id: str
    geometry_type: GeometryType
    coordinates: Coordinates
    properties: dict[str, Any] = field(default_factory=dict)

    @property
    def geometry(self) -> dict[str, object]:
        """GeoJSON geometry object."""
        return {"type": self.geometry_type.value, "coordinates": self.coordinates}

    @property
    def folder_id(self) -> str | None:
        """Id of the innermost enclosing Folder, ``None`` outside any folder."""
        return self.properties.get("folder_id")

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON Feature mapping."""
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": self.geometry,
            "properties": dict(self.properties),
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> KmlFeature:
        """Deserialise from a GeoJSON Feature mapping.

        Raises:
            TypeError: If ``geometry`` or ``properties`` have unexpected types.
            ValueError: If the geometry type is not Point, LineString or Polygon.
        """
        geometry = data.get("geometry")
        if not isinstance(geometry, dict):
            msg = f"geometry must be a dict, got {type(geometry).__name__}"
            raise TypeError(msg)

        properties = data.get("properties", {})
        if not isinstance(properties, dict):
            msg = f"properties must be a dict, got {type(properties).__name__}"
            raise TypeError(msg)

        return cls(
            id=str(data.get("id", "")),
            geometry_type=GeometryType(geometry.get("type")),
            coordinates=geometry.get("coordinates", []),
            properties=dict(properties),
        )
