"""KML color decoding.

KML writes colors as ``aabbggrr`` hex: alpha first, then the channels in
blue-green-red order. GeoJSON styling expects ``#rrggbb`` plus a separate
opacity in ``[0, 1]``.
"""

from __future__ import annotations

from typing import NamedTuple


class KmlColor(NamedTuple):
    """A decoded KML color.

    Attributes:
        color: ``#rrggbb`` for 8-digit input, the bare token for 3/6-digit
            input, ``None`` when undecodable.
        opacity: Alpha as a fraction of 255, ``None`` when not given.
    """

    color: str | None
    opacity: float | None


def kml_color(value: str | None) -> KmlColor:
    """Decode a KML color token into a color string and opacity.

    Examples:
        >>> kml_color("ff0000ff")
        KmlColor(color='#ff0000', opacity=1.0)
        >>> kml_color("#abc")
        KmlColor(color='abc', opacity=None)
    """
    value = (value or "").strip().removeprefix("#")

    if len(value) in (3, 6):
        return KmlColor(value, None)

    if len(value) == 8:
        try:
            opacity: float | None = int(value[0:2], 16) / 255
        except ValueError:
            opacity = None
        return KmlColor(f"#{value[6:8]}{value[4:6]}{value[2:4]}", opacity)

    return KmlColor(None, None)
