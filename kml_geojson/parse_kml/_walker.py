"""Document traversal shared by the batch and streaming entry points.

``walk`` visits the tree depth-first in document (pre-)order and yields
folders and features as it finds them. It is a lazy generator with an
explicit stack, so deeply nested documents do not hit the recursion
limit and a streaming consumer can suspend between items.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any

from kml_geojson.models.collection import ParseResult
from kml_geojson.models.feature import KmlFeature
from kml_geojson.models.folder import KmlFolder
from kml_geojson.parse_kml._dom import element_children, local_name
from kml_geojson.parse_kml._placemark import ParseContext, parse_folder, parse_placemark

if TYPE_CHECKING:
    from lxml.etree import _Element

# Callbacks may return an awaitable; the result value itself is ignored.
FolderCallback = Callable[[KmlFolder], Any]
FeatureCallback = Callable[[KmlFeature], Any]


def walk(root: _Element, context: ParseContext) -> Iterator[KmlFolder | KmlFeature]:
    """Yield every folder and feature under ``root`` in document order.

    Each stack entry carries the folder id in effect for that node, so a
    Folder changes the context of its own descendants only.
    """
    stack: list[tuple[_Element, str | None]] = [(root, None)]

    while stack:
        node, folder_id = stack.pop()
        name = local_name(node)

        if name == "Placemark":
            yield from parse_placemark(node, folder_id, context)
        elif name == "Folder":
            folder = parse_folder(node, folder_id, context)
            yield folder
            folder_id = folder.folder_id

        children = list(element_children(node))
        stack.extend((node_child, folder_id) for node_child in reversed(children))


def collect(items: Iterable[KmlFolder | KmlFeature]) -> ParseResult:
    """Batch mode: gather walked items into a ``ParseResult``."""
    folders: list[KmlFolder] = []
    features: list[KmlFeature] = []
    for item in items:
        if isinstance(item, KmlFolder):
            folders.append(item)
        else:
            features.append(item)
    return ParseResult(folders=folders, features=features)


async def dispatch(
    items: Iterable[KmlFolder | KmlFeature],
    on_folder: FolderCallback,
    on_geometry: FeatureCallback,
) -> None:
    """Streaming mode: hand each walked item to its callback, in order.

    Awaitable callback results are awaited before the walk continues.
    Callback exceptions propagate and stop the walk.
    """
    for item in items:
        callback = on_folder if isinstance(item, KmlFolder) else on_geometry
        result = callback(item)
        if inspect.isawaitable(result):
            await result
