"""KML → GeoJSON conversion — composable pipeline.

Converts a KML document into a GeoJSON ``FeatureCollection`` plus a flat
list of folders, resolving styles into per-feature properties.

The pipeline is split into focused stages:
- **_dom**: namespace-agnostic element lookups over lxml
- **_color**: KML ``aabbggrr`` color decoding
- **_coordinates**: coordinate text → nested float arrays
- **_validation**: XML loading, ``kml`` root lookup, geometry shape checks
- **_styles**: Style / StyleMap / gx:CascadingStyle tables and resolution
- **_placemark**: Folder and Placemark conversion
- **_walker**: depth-first traversal shared by batch and streaming modes

Supported KML structures:
- Placemarks with Point, LineString and Polygon (several per Placemark,
  including inside MultiGeometry)
- Polygons with inner boundaries (holes)
- Nested Folders, anywhere below ``kml`` (e.g. inside ``Document``)
- Style, StyleMap (normal/highlight) and gx:CascadingStyle
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from kml_geojson.core.config import ConverterConfig
from kml_geojson.parse_kml._color import KmlColor, kml_color
from kml_geojson.parse_kml._coordinates import (
    extract_coordinates,
    parse_coordinate,
    parse_coordinate_list,
    parse_number,
)
from kml_geojson.parse_kml._placemark import ParseContext, parse_folder, parse_placemark
from kml_geojson.parse_kml._styles import (
    StyleMapEntry,
    StyleTables,
    build_style_tables,
    parse_style,
    resolve_style,
)
from kml_geojson.parse_kml._validation import (
    KmlParseError,
    MissingKmlRootError,
    geometry_is_valid,
    load_kml_root,
)
from kml_geojson.parse_kml._walker import (
    FeatureCallback,
    FolderCallback,
    collect,
    dispatch,
    walk,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from lxml.etree import _Element

    from kml_geojson.models.collection import ParseResult

logger = logging.getLogger("kml_geojson.parse_kml")

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "KmlColor",
    "KmlParseError",
    "KmlToGeojson",
    "MissingKmlRootError",
    "ParseContext",
    "StyleMapEntry",
    "StyleTables",
    "build_style_tables",
    "extract_coordinates",
    "geometry_is_valid",
    "kml_color",
    "load_kml_root",
    "parse",
    "parse_coordinate",
    "parse_coordinate_list",
    "parse_folder",
    "parse_kml_file",
    "parse_number",
    "parse_placemark",
    "parse_style",
    "resolve_style",
    "stream_parse",
    "walk",
]


def _uuid4() -> str:
    return str(uuid.uuid4())


class KmlToGeojson:
    """Convert KML documents to GeoJSON.

    Args:
        include_altitude: Keep the altitude as a third coordinate value.
            Overrides ``config.include_altitude`` when given.
        id_factory: Callable returning a fresh unique string per call,
            used for folder and feature ids. Defaults to UUID4 strings.
        config: Converter configuration; defaults to ``ConverterConfig()``.
    """

    def __init__(
        self,
        include_altitude: bool | None = None,
        *,
        id_factory: Callable[[], str] | None = None,
        config: ConverterConfig | None = None,
    ) -> None:
        self.config = config or ConverterConfig()
        self.include_altitude = (
            self.config.include_altitude if include_altitude is None else include_altitude
        )
        self.id_factory = id_factory or _uuid4

    def _prepare(self, kml: str | bytes | _Element) -> tuple[_Element, ParseContext]:
        root = load_kml_root(kml)
        styles, style_maps = build_style_tables(root, label_scale_px=self.config.label_scale_px)
        context = ParseContext(
            styles=styles,
            style_maps=style_maps,
            new_id=self.id_factory,
            include_altitude=self.include_altitude,
            default_folder_name=self.config.default_folder_name,
        )
        return root, context

    def parse(self, kml: str | bytes | _Element) -> ParseResult:
        """Convert a whole document in one go.

        Args:
            kml: KML text, or an already parsed lxml element / element tree.

        Returns:
            ``ParseResult`` with folders and features in document order.
            ``result.to_dict()`` gives ``{folders, geojson}``.

        Raises:
            KmlParseError: If text input is not valid XML.
            MissingKmlRootError: If the document has no ``kml`` element.
        """
        root, context = self._prepare(kml)
        result = collect(walk(root, context))
        logger.info(
            "Converted %d feature(s) in %d folder(s)",
            len(result.features),
            len(result.folders),
        )
        return result

    async def stream_parse(
        self,
        kml: str | bytes | _Element,
        on_folder: FolderCallback,
        on_geometry: FeatureCallback,
    ) -> None:
        """Convert a document, handing each folder and feature to a callback.

        Callbacks fire in document order, each one (if it returns an
        awaitable) awaited before the traversal moves on. Their return
        values are ignored. An exception raised by a callback stops the
        traversal and propagates to the caller unchanged.

        Raises:
            KmlParseError: If text input is not valid XML.
            MissingKmlRootError: If the document has no ``kml`` element.
        """
        root, context = self._prepare(kml)
        await dispatch(walk(root, context), on_folder, on_geometry)


def parse(kml: str | bytes | _Element, *, include_altitude: bool = True) -> ParseResult:
    """Convert a KML document with a default ``KmlToGeojson``."""
    return KmlToGeojson(include_altitude).parse(kml)


async def stream_parse(
    kml: str | bytes | _Element,
    on_folder: FolderCallback,
    on_geometry: FeatureCallback,
    *,
    include_altitude: bool = True,
) -> None:
    """Stream a KML document through a default ``KmlToGeojson``."""
    await KmlToGeojson(include_altitude).stream_parse(kml, on_folder, on_geometry)


def parse_kml_file(kml_path: Path | str, *, include_altitude: bool = True) -> ParseResult:
    """Read a KML file from disk and convert it.

    Raises:
        KmlParseError: If the file cannot be read or is not valid XML.
        MissingKmlRootError: If the document has no ``kml`` element.
    """
    from pathlib import Path

    kml_path = Path(kml_path)
    logger.info("Parsing KML file: %s", kml_path.name)

    try:
        content = kml_path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read KML file: {exc}"
        raise KmlParseError(msg) from exc

    return KmlToGeojson(include_altitude).parse(content)
