"""
Shape validation rules (functional core, no I/O).

Invariants:
- I1: name, color, description, image are non-blank after trimming
- I2: matrix is exactly 4 rows of exactly 4 cells, each cell 0 or 1
- I3: names are unique, compared case-insensitively
- I4: uploads are typed by their content, never by the declared type or name
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from .models import CandidateShape, Matrix, ShapeRecord, ShapeValidationError

MATRIX_SIZE = 4

MISSING_FIELDS_MESSAGE = "Missing required fields (name, color, description, image, matrix)"
MALFORMED_MATRIX_MESSAGE = "Matrix must be a 4x4 array"
DUPLICATE_NAME_MESSAGE = "Block with this name already exists"
INVALID_IMAGE_MESSAGE = "Ongeldig afbeeldingsformaat"
NOT_FOUND_MESSAGE = "Block not found"
IMAGE_WRITE_FAILED_MESSAGE = "Kon bestand niet opslaan"
SAVE_FAILED_MESSAGE = "Could not save data"

TEXT_FIELDS = ("name", "color", "description", "image")

# Leading-byte signatures of the accepted raster formats
IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)
IMAGE_EXTENSIONS = {
    "image/png": "png",
    "image/svg+xml": "svg",
    "image/jpeg": "jpg",
    "image/gif": "gif",
}
SNIFF_WINDOW = 1024
# Optional XML declaration, comments and doctype, then an <svg> root element
SVG_ROOT = re.compile(
    r"\s*(<\?xml[^>]*\?>\s*)?((<!--.*?-->|<!DOCTYPE[^>]*>)\s*)*<svg[\s/>]",
    re.IGNORECASE | re.DOTALL,
)


# --- Blank Predicates ---


def is_blank_text(value: Any) -> bool:
    """A text field is blank when it is not a string or is empty after trimming."""
    return not isinstance(value, str) or not value.strip()


def is_blank_matrix(value: Any) -> bool:
    """A matrix is blank when it was not submitted at all."""
    return value is None or (isinstance(value, str) and not value.strip())


def normalize_name(name: str) -> str:
    """Names compare and store trimmed and upper-cased."""
    return name.strip().upper()


# --- Validation Functions ---


def validate_required(candidate: CandidateShape) -> list[ShapeValidationError]:
    """Check that every field was supplied."""
    blank = [f for f in TEXT_FIELDS if is_blank_text(getattr(candidate, f))]
    if is_blank_matrix(candidate.matrix):
        blank.append("matrix")

    if not blank:
        return []
    return [
        ShapeValidationError(
            code="missing_fields",
            message=MISSING_FIELDS_MESSAGE,
            field=",".join(blank),
        )
    ]


def _is_cell(value: Any) -> bool:
    # bool is a subclass of int; true/false are not cells
    return type(value) is int and value in (0, 1)


def validate_matrix(matrix: Any) -> list[ShapeValidationError]:
    """Check for a MATRIX_SIZE x MATRIX_SIZE grid of 0/1 cells."""
    error = ShapeValidationError(
        code="malformed_matrix",
        message=MALFORMED_MATRIX_MESSAGE,
        field="matrix",
    )

    if not isinstance(matrix, list | tuple) or len(matrix) != MATRIX_SIZE:
        return [error]

    for row in matrix:
        if not isinstance(row, list | tuple) or len(row) != MATRIX_SIZE:
            return [error]
        if not all(_is_cell(cell) for cell in row):
            return [error]

    return []


def find_by_name(shapes: Iterable[ShapeRecord], name: str) -> ShapeRecord | None:
    """Case-insensitive exact match on the shape name."""
    needle = normalize_name(name)
    for shape in shapes:
        if normalize_name(shape.name) == needle:
            return shape
    return None


def validate_unique(name: str, shapes: Iterable[ShapeRecord]) -> list[ShapeValidationError]:
    """Reject a name that is already in the collection."""
    if find_by_name(shapes, name) is None:
        return []
    return [
        ShapeValidationError(
            code="duplicate_name",
            message=DUPLICATE_NAME_MESSAGE,
            field="name",
        )
    ]


def sniff_image_type(data: bytes) -> str | None:
    """Detect an image MIME type from the file's leading bytes."""
    for signature, mime_type in IMAGE_SIGNATURES:
        if data.startswith(signature):
            return mime_type
    head = data[:SNIFF_WINDOW].decode("utf-8", errors="ignore").lstrip("\ufeff")
    if SVG_ROOT.match(head):
        return "image/svg+xml"
    return None


def validate_image_type(
    mime_type: str | None,
    allowed: Iterable[str],
) -> list[ShapeValidationError]:
    """Check a detected MIME type against the allowlist."""
    normalized = (mime_type or "").split(";", 1)[0].strip().lower()
    if normalized and normalized in {a.lower() for a in allowed}:
        return []
    return [
        ShapeValidationError(
            code="invalid_image_format",
            message=INVALID_IMAGE_MESSAGE,
            field="image_file",
        )
    ]


def normalize_candidate(candidate: CandidateShape) -> ShapeRecord:
    """Build the stored record from an already validated candidate."""
    matrix: Matrix = tuple(tuple(row) for row in candidate.matrix)
    return ShapeRecord(
        name=normalize_name(candidate.name),
        color=candidate.color.strip(),
        description=candidate.description.strip(),
        image=candidate.image.strip(),
        matrix=matrix,
    )


def validate_candidate(
    candidate: CandidateShape,
    shapes: Iterable[ShapeRecord],
) -> tuple[ShapeRecord | None, list[ShapeValidationError]]:
    """
    Validate a candidate against the collection.

    Checks run in order (required fields, matrix, uniqueness) and stop at the
    first failing rule.

    Returns:
        (record, []) when accepted, (None, errors) when rejected.
    """
    errors = validate_required(candidate)
    if errors:
        return None, errors

    errors = validate_matrix(candidate.matrix)
    if errors:
        return None, errors

    errors = validate_unique(candidate.name, shapes)
    if errors:
        return None, errors

    return normalize_candidate(candidate), []
