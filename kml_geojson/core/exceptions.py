"""Unified conversion exception taxonomy.

Every domain exception raised by the converter inherits from
``ConversionError`` and carries structured context fields so callers
can classify a failure without parsing its message.

Taxonomy categories
-------------------
- ``ValidationError``   — input/configuration violations.
- ``PermanentError``    — unrecoverable document failures.

Conversion is a deterministic transform, so no failure is worth retrying.
Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and API responses.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for all conversion-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Conversion stage where the error occurred
            (e.g. ``"parse_kml"``, ``"config"``).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ConversionError):
    """Input or configuration validation failure."""


class PermanentError(ConversionError):
    """Unrecoverable document failure."""
