"""Shared pytest fixtures for the kml_geojson test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Sample KML documents
# ---------------------------------------------------------------------------

SURVEY_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Survey</name>
    <Style id="pin">
      <IconStyle>
        <color>ff0000ff</color>
        <scale>1.5</scale>
        <Icon><href>https://maps.example.com/pin.png</href></Icon>
      </IconStyle>
      <LabelStyle>
        <color>ffffffff</color>
        <scale>0.75</scale>
      </LabelStyle>
    </Style>
    <Style id="route">
      <LineStyle>
        <color>80112233</color>
        <width>4</width>
      </LineStyle>
      <PolyStyle>
        <color>ff00ff00</color>
      </PolyStyle>
    </Style>
    <Style id="route-hover">
      <LineStyle>
        <color>80112233</color>
        <width>6</width>
      </LineStyle>
    </Style>
    <StyleMap id="route-map">
      <Pair><key>normal</key><styleUrl>#route</styleUrl></Pair>
      <Pair><key>highlight</key><styleUrl>#route-hover</styleUrl></Pair>
    </StyleMap>
    <Placemark>
      <name>Loose pin</name>
      <styleUrl>#pin</styleUrl>
      <Point><coordinates>-122.0,37.0,10</coordinates></Point>
    </Placemark>
    <Folder>
      <name>Outer</name>
      <Folder>
        <name>Inner</name>
        <Placemark>
          <name>Trail</name>
          <description>Ridge trail</description>
          <styleUrl>#route-map</styleUrl>
          <LineString><coordinates>1,2 3,4,5</coordinates></LineString>
        </Placemark>
      </Folder>
      <Placemark>
        <name>Field</name>
        <styleUrl>#route</styleUrl>
        <Polygon>
          <outerBoundaryIs>
            <LinearRing><coordinates>0,0 4,0 4,4 0,4 0,0</coordinates></LinearRing>
          </outerBoundaryIs>
          <innerBoundaryIs>
            <LinearRing><coordinates>1,1 2,1 2,2 1,1</coordinates></LinearRing>
          </innerBoundaryIs>
        </Polygon>
      </Placemark>
    </Folder>
  </Document>
</kml>
"""

MIXED_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>Broken</name>
      <Point><coordinates>1,abc</coordinates></Point>
    </Placemark>
    <Placemark>
      <name>Multi</name>
      <MultiGeometry>
        <Point><coordinates>5,6</coordinates></Point>
        <LineString><coordinates>0,0 1,1</coordinates></LineString>
        <Point><coordinates>oops,6</coordinates></Point>
      </MultiGeometry>
    </Placemark>
    <Placemark>
      <name>Healthy</name>
      <Point><coordinates>7,8</coordinates></Point>
    </Placemark>
  </Document>
</kml>
"""

CASCADING_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2"
     xmlns:gx="http://www.google.com/kml/ext/2.2"
     xmlns:kml="http://www.opengis.net/kml/2.2">
  <Document>
    <gx:CascadingStyle kml:id="__managed_style_1">
      <Style>
        <IconStyle><scale>1.2</scale></IconStyle>
        <LineStyle><color>ff0000ff</color><width>2.5</width></LineStyle>
      </Style>
    </gx:CascadingStyle>
    <Placemark>
      <name>Cafe</name>
      <styleUrl>#__managed_style_1</styleUrl>
      <Point><coordinates>2.35,48.85</coordinates></Point>
    </Placemark>
  </Document>
</kml>
"""

PLAIN_KML = """<kml>
  <Folder>
    <Placemark><name>No namespace</name><Point><coordinates>1,2</coordinates></Point></Placemark>
  </Folder>
</kml>
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def survey_kml() -> str:
    """Document with styles, a style map, nested folders and all geometry types."""
    return SURVEY_KML


@pytest.fixture()
def mixed_kml() -> str:
    """Document mixing valid and malformed geometries, including MultiGeometry."""
    return MIXED_KML


@pytest.fixture()
def cascading_kml() -> str:
    """Document styled through a gx:CascadingStyle."""
    return CASCADING_KML


@pytest.fixture()
def plain_kml() -> str:
    """Document without the KML namespace."""
    return PLAIN_KML


@pytest.fixture()
def survey_kml_path(tmp_path: Path) -> Path:
    """SURVEY_KML written to a temporary file."""
    path = tmp_path / "survey.kml"
    path.write_text(SURVEY_KML, encoding="utf-8")
    return path


@pytest.fixture()
def id_factory() -> Callable[[], str]:
    """Deterministic id generator: ``id-1``, ``id-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"
