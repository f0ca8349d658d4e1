"""Converter configuration loaded from environment variables.

All configuration values have defaults matching the KML → GeoJSON
conventions (altitude kept, ``"Untitled folder"`` for unnamed folders,
label scale × 16 for ``text-size``).

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so a bad deployment setting surfaces at startup
    rather than as silently odd output.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from kml_geojson.core.constants import DEFAULT_FOLDER_NAME, LABEL_SCALE_PX
from kml_geojson.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class ConverterConfig:
    """Immutable converter configuration.

    Fixed for the lifetime of a ``KmlToGeojson`` instance and applied
    uniformly to every folder and feature it produces.

    Attributes:
        include_altitude: Append the altitude (third value) to every coordinate tuple.
        default_folder_name: Name given to a Folder without a ``<name>`` child.
        label_scale_px: Multiplier from ``LabelStyle/scale`` to ``text-size``.
    """

    include_altitude: bool = True
    default_folder_name: str = DEFAULT_FOLDER_NAME
    label_scale_px: float = LABEL_SCALE_PX

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a boolean
                flag is not one of ``1/0``, ``true/false``, ``yes/no``, ``on/off``.
            ValueError: If ``KML_GEOJSON_LABEL_SCALE_PX`` is not a number.
        """
        config = cls(
            include_altitude=_parse_bool(
                "KML_GEOJSON_INCLUDE_ALTITUDE",
                os.getenv("KML_GEOJSON_INCLUDE_ALTITUDE", "true"),
            ),
            default_folder_name=os.getenv("KML_GEOJSON_DEFAULT_FOLDER_NAME", DEFAULT_FOLDER_NAME),
            label_scale_px=float(os.getenv("KML_GEOJSON_LABEL_SCALE_PX", str(LABEL_SCALE_PX))),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false, 1/0, yes/no, on/off)")


def _validate(config: ConverterConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.default_folder_name:
        raise ConfigValidationError(
            "KML_GEOJSON_DEFAULT_FOLDER_NAME",
            config.default_folder_name,
            "must not be empty",
        )

    if config.label_scale_px <= 0:
        raise ConfigValidationError(
            "KML_GEOJSON_LABEL_SCALE_PX",
            config.label_scale_px,
            "must be > 0 (pixels per unit of label scale)",
        )
