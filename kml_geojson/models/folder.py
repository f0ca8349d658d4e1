"""Data model for a flattened KML Folder.

KML folders nest arbitrarily; the converter flattens them into a list
where each record points at its enclosing folder by id.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KmlFolder:
    """A single KML Folder, flattened.

    Attributes:
        folder_id: Freshly generated opaque id.
        name: Text of the Folder's ``<name>`` child, or the configured default.
        parent_folder_id: Id of the enclosing Folder, ``None`` at top level.
    """

    folder_id: str
    name: str
    parent_folder_id: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Serialise to the ``{folder_id, name, parent_folder_id}`` mapping."""
        return {
            "folder_id": self.folder_id,
            "name": self.name,
            "parent_folder_id": self.parent_folder_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> KmlFolder:
        """Deserialise from a folder mapping.

        Raises:
            TypeError: If ``folder_id`` is missing or not a string.
        """
        folder_id = data.get("folder_id")
        if not isinstance(folder_id, str):
            msg = f"folder_id must be a str, got {type(folder_id).__name__}"
            raise TypeError(msg)
        parent = data.get("parent_folder_id")
        return cls(
            folder_id=folder_id,
            name=str(data.get("name", "")),
            parent_folder_id=None if parent is None else str(parent),
        )

    @property
    def is_top_level(self) -> bool:
        """Whether this folder has no enclosing folder."""
        return self.parent_folder_id is None
