"""
Shapes component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

Matrix = tuple[tuple[int, ...], ...]

# --- Validation Error ---


@dataclass(frozen=True)
class ShapeValidationError:
    """Shape validation error with the reason reported to the caller."""

    code: str
    message: str
    field: str | None = None


# --- Shape Model ---


@dataclass(frozen=True)
class ShapeRecord:
    """A stored tetromino shape."""

    name: str
    color: str
    description: str
    image: str
    matrix: Matrix

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping, in stored field order."""
        return {
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "image": self.image,
            "matrix": [list(row) for row in self.matrix],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ShapeRecord:
        """
        Build a record from a stored mapping.

        Raises:
            KeyError: A field is missing.
            TypeError: The mapping or the matrix has the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Shape entry must be an object, got {type(data).__name__}")
        matrix = data["matrix"]
        if not isinstance(matrix, list) or not all(isinstance(row, list) for row in matrix):
            raise TypeError("Shape matrix must be a list of lists")
        return cls(
            name=str(data["name"]),
            color=str(data["color"]),
            description=str(data["description"]),
            image=str(data["image"]),
            matrix=tuple(tuple(row) for row in matrix),
        )


@dataclass(frozen=True)
class CandidateShape:
    """
    Unvalidated shape data as submitted by a client.

    Text fields hold the raw submitted strings ("" when absent); matrix holds
    whatever was submitted (None when absent).
    """

    name: str = ""
    color: str = ""
    description: str = ""
    image: str = ""
    matrix: Any = None


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image file accompanying a create request."""

    data: bytes
    filename: str
    content_type: str


# --- Input Models ---


@dataclass(frozen=True)
class ListShapesInput:
    """Input for listing the whole catalog."""

    pass


@dataclass(frozen=True)
class GetShapeInput:
    """Input for fetching one shape by name (case-insensitive)."""

    name: str


@dataclass(frozen=True)
class CreateShapeInput:
    """Input for appending a new shape."""

    candidate: CandidateShape
    upload: ImageUpload | None = None


# --- Output Models ---


@dataclass(frozen=True)
class ShapeOutput:
    """Output containing a single shape."""

    shape: ShapeRecord | None
    errors: list[ShapeValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ShapeListOutput:
    """Output containing the catalog."""

    shapes: tuple[ShapeRecord, ...]
    errors: list[ShapeValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ShapeOperationOutput:
    """Output for the create operation."""

    shape: ShapeRecord | None = None
    errors: list[ShapeValidationError] = field(default_factory=list)
    success: bool = True
