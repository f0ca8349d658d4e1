"""KML to GeoJSON conversion.

Flattens a KML document (nested Folders, Placemarks, Style / StyleMap
definitions) into a GeoJSON ``FeatureCollection`` plus a flat folder list.
Folder ancestry is preserved through ``folder_id`` / ``parent_folder_id``
and KML's indirect styling is resolved into per-feature style properties.
"""

__version__ = "0.1.0"
