"""Shared converter constants — single source of truth.

Centralises the KML namespace, default values and the
style property prefixes used by the parser and style resolver.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# XML namespace
# ---------------------------------------------------------------------------

KML_NAMESPACE: str = "http://www.opengis.net/kml/2.2"
"""KML 2.2 namespace (also used for the ``kml:id`` attribute)."""

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_FOLDER_NAME: str = "Untitled folder"
"""Name given to a Folder without a ``<name>`` child."""

LABEL_SCALE_PX: float = 16.0
"""Multiplier mapping a unitless ``LabelStyle/scale`` to ``text-size``."""

MAX_COORDINATE_DEPTH: int = 3
"""Deepest array nesting a geometry may have (Polygon: rings → tuples)."""

# ---------------------------------------------------------------------------
# Style properties
# ---------------------------------------------------------------------------

STYLE_ID_KEY: str = "style_id"
"""Internal key carrying a parsed style's id; never copied onto features."""

HIGHLIGHT_PREFIX: str = "highlight-"
"""Prefix for StyleMap highlight properties that differ from the normal style."""
