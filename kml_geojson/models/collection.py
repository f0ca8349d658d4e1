"""Batch conversion result: flat folder list plus a FeatureCollection."""

from __future__ import annotations

from dataclasses import dataclass, field

from kml_geojson.models.feature import KmlFeature
from kml_geojson.models.folder import KmlFolder


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Output of a batch parse, both lists in document order.

    Attributes:
        folders: Every Folder encountered, parents before children.
        features: Every valid Placemark geometry.
    """

    folders: list[KmlFolder] = field(default_factory=list)
    features: list[KmlFeature] = field(default_factory=list)

    @property
    def geojson(self) -> dict[str, object]:
        """The features as a GeoJSON ``FeatureCollection`` mapping."""
        return {
            "type": "FeatureCollection",
            "features": [feature.to_dict() for feature in self.features],
        }

    def to_dict(self) -> dict[str, object]:
        """Serialise to ``{folders, geojson}``."""
        return {
            "folders": [folder.to_dict() for folder in self.folders],
            "geojson": self.geojson,
        }

    def features_in_folder(self, folder_id: str | None) -> list[KmlFeature]:
        """Features whose innermost enclosing folder is ``folder_id``."""
        return [f for f in self.features if f.folder_id == folder_id]
