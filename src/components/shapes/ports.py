"""
Shapes component port definitions.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from .models import ShapeRecord


class ShapeStorePort(Protocol):
    """Persistence interface for the shape collection."""

    def load(self) -> list[ShapeRecord]:
        """Return the whole collection in insertion order."""
        ...

    def save(self, shapes: list[ShapeRecord]) -> bool:
        """Replace the stored collection. Returns False if the write failed."""
        ...

    def locked(self) -> AbstractContextManager[None]:
        """Hold exclusive access for a load-modify-save sequence."""
        ...


class ImageStorePort(Protocol):
    """Storage interface for uploaded shape images."""

    def reserve_name(self, original_filename: str, extension: str) -> str:
        """Generate a unique file name from the upload's base name and a trusted extension."""
        ...

    def public_path(self, name: str) -> str:
        """Path stored in a record's image field for a stored file."""
        ...

    def save(self, name: str, data: bytes) -> str:
        """Write the file. Raises OSError on failure."""
        ...

    def delete(self, name: str) -> None:
        """Remove a stored file if present."""
        ...


class RulesPort(Protocol):
    """Port for shape upload rules."""

    def get_allowed_image_types(self) -> list[str]:
        """MIME types accepted for uploaded images."""
        ...
