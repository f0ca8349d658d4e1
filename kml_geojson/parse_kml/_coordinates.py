"""KML coordinate text parsing.

KML stores coordinates as ``lon,lat[,alt]`` tuples separated by
whitespace. Malformed or infinite numbers are kept as NaN rather than rejected here;
``geometry_is_valid`` decides what to drop.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from kml_geojson.models.feature import GeometryType
from kml_geojson.parse_kml._dom import get, text

if TYPE_CHECKING:
    from lxml.etree import _Element

    from kml_geojson.models.feature import Coordinates


def parse_number(value: str | None) -> float:
    """Parse a numeric KML field.

    Missing, malformed and non-finite values (``inf``, ``nan``, overflow
    such as ``1e999``) all come back as NaN.
    """
    if value is None:
        return math.nan
    try:
        number = float(value)
    except ValueError:
        return math.nan
    return number if math.isfinite(number) else math.nan


def parse_coordinate(token: str, *, include_altitude: bool) -> list[float]:
    """Parse one ``lon,lat[,alt]`` token.

    A missing altitude is 0. The altitude is only included in the output
    when ``include_altitude`` is set.
    """
    fields = token.strip().split(",")
    lon = parse_number(fields[0])
    lat = parse_number(fields[1] if len(fields) > 1 else None)
    if not include_altitude:
        return [lon, lat]
    alt = parse_number(fields[2]) if len(fields) > 2 else 0.0
    return [lon, lat, alt]


def parse_coordinate_list(value: str, *, include_altitude: bool) -> list[list[float]]:
    """Parse whitespace-separated coordinate tokens.

    Empty text still yields one (NaN) tuple so the geometry is rejected
    downstream instead of becoming an empty coordinate list.
    """
    tokens = value.split() or [""]
    return [parse_coordinate(token, include_altitude=include_altitude) for token in tokens]


def extract_coordinates(
    element: _Element,
    geometry_type: GeometryType,
    *,
    include_altitude: bool,
) -> Coordinates:
    """Extract the coordinates of a Point, LineString or Polygon element.

    - Point: first ``coordinates`` node, a single tuple.
    - LineString: first ``coordinates`` node, a list of tuples.
    - Polygon: every ``coordinates`` node is one ring (outer boundary and
      inner holes), giving a list of rings.

    Without any ``coordinates`` node the result is a single zero tuple.
    """
    nodes = get(element, "coordinates")

    if nodes:
        if geometry_type is GeometryType.POINT:
            return parse_coordinate(text(nodes[0]) or "", include_altitude=include_altitude)
        if geometry_type is GeometryType.LINE_STRING:
            return parse_coordinate_list(text(nodes[0]) or "", include_altitude=include_altitude)
        if geometry_type is GeometryType.POLYGON:
            return [
                parse_coordinate_list(text(node) or "", include_altitude=include_altitude)
                for node in nodes
            ]

    return [0.0, 0.0, 0.0] if include_altitude else [0.0, 0.0]
