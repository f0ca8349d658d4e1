"""Data models and schemas.

Defines the records produced by a conversion:
- KmlFolder: one flattened KML Folder with its parent link
- KmlFeature: one GeoJSON Feature per Placemark geometry
- ParseResult: batch output (folders + FeatureCollection)
"""

from kml_geojson.models.collection import ParseResult
from kml_geojson.models.feature import Coordinates, GeometryType, KmlFeature
from kml_geojson.models.folder import KmlFolder

__all__ = [
    "Coordinates",
    "GeometryType",
    "KmlFeature",
    "KmlFolder",
    "ParseResult",
]
