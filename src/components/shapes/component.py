"""
Shapes component - tetromino catalog operations.

Lists the catalog, looks up one shape by name and appends new shapes,
optionally storing an uploaded image alongside.

Invariants:
- I1: Names are unique, case-insensitively
- I2: Matrices are 4x4 grids of 0/1 cells
- I3: The collection is append-only and keeps insertion order
- I4: A create either stores the record (and its upload) or leaves nothing behind
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ._impl import (
    IMAGE_EXTENSIONS,
    IMAGE_WRITE_FAILED_MESSAGE,
    NOT_FOUND_MESSAGE,
    SAVE_FAILED_MESSAGE,
    find_by_name,
    sniff_image_type,
    validate_candidate,
    validate_image_type,
)
from .models import (
    CreateShapeInput,
    GetShapeInput,
    ListShapesInput,
    ShapeListOutput,
    ShapeOperationOutput,
    ShapeOutput,
    ShapeValidationError,
)
from .ports import ImageStorePort, RulesPort, ShapeStorePort

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TYPES = ["image/png", "image/svg+xml", "image/jpeg", "image/gif"]


def _failure(code: str, message: str, field: str | None = None) -> ShapeOperationOutput:
    return ShapeOperationOutput(
        shape=None,
        errors=[ShapeValidationError(code=code, message=message, field=field)],
        success=False,
    )


# --- Component Entry Points ---


def run_list(
    inp: ListShapesInput,
    *,
    store: ShapeStorePort,
) -> ShapeListOutput:
    """
    List the whole catalog in insertion order.

    Args:
        inp: Input (empty).
        store: Shape store port.

    Returns:
        ShapeListOutput with every stored shape.
    """
    return ShapeListOutput(shapes=tuple(store.load()), errors=[], success=True)


def run_get(
    inp: GetShapeInput,
    *,
    store: ShapeStorePort,
) -> ShapeOutput:
    """
    Get one shape by case-insensitive name.

    Args:
        inp: Input containing the name to look up.
        store: Shape store port.

    Returns:
        ShapeOutput with the shape, or a not_found error.
    """
    shape = find_by_name(store.load(), inp.name)

    if shape is None:
        return ShapeOutput(
            shape=None,
            errors=[
                ShapeValidationError(
                    code="not_found",
                    message=NOT_FOUND_MESSAGE,
                    field="name",
                )
            ],
            success=False,
        )

    return ShapeOutput(shape=shape, errors=[], success=True)


def run_create(
    inp: CreateShapeInput,
    *,
    store: ShapeStorePort,
    images: ImageStorePort | None = None,
    rules: RulesPort | None = None,
) -> ShapeOperationOutput:
    """
    Validate and append a new shape.

    An uploaded image is typed from its content first, never from the
    declared content type. Its generated path, carrying the extension of the
    detected type, then replaces the candidate's image field. The file is
    only written once the candidate has passed validation, and is removed
    again if the collection cannot be saved.

    Args:
        inp: Input containing the candidate and an optional upload.
        store: Shape store port.
        images: Image store port, required when an upload is present.
        rules: Optional rules port for the image type allowlist.

    Returns:
        ShapeOperationOutput with the created shape or errors.
    """
    candidate = inp.candidate
    upload = inp.upload
    stored_name: str | None = None

    if upload is not None:
        if images is None:
            raise ValueError("An image store is required to accept uploads")

        allowed = rules.get_allowed_image_types() if rules is not None else DEFAULT_IMAGE_TYPES
        mime_type = sniff_image_type(upload.data)
        errors = validate_image_type(mime_type, allowed)
        if errors or mime_type is None:
            logger.info(
                "Rejected upload %r declared as %r (detected %r)",
                upload.filename,
                upload.content_type,
                mime_type,
            )
            return ShapeOperationOutput(shape=None, errors=errors, success=False)

        stored_name = images.reserve_name(upload.filename, IMAGE_EXTENSIONS[mime_type])
        candidate = replace(candidate, image=images.public_path(stored_name))

    with store.locked():
        shapes = store.load()

        record, errors = validate_candidate(candidate, shapes)
        if record is None:
            return ShapeOperationOutput(shape=None, errors=errors, success=False)

        if upload is not None and images is not None and stored_name is not None:
            try:
                images.save(stored_name, upload.data)
            except (OSError, ValueError):
                logger.exception("Could not store uploaded image %s", stored_name)
                return _failure("image_write_failed", IMAGE_WRITE_FAILED_MESSAGE, "image_file")

        if not store.save([*shapes, record]):
            if images is not None and stored_name is not None:
                images.delete(stored_name)
            return _failure("save_failed", SAVE_FAILED_MESSAGE)

    logger.info("Created shape %s", record.name)
    return ShapeOperationOutput(shape=record, errors=[], success=True)


def run(
    inp: ListShapesInput | GetShapeInput | CreateShapeInput,
    *,
    store: ShapeStorePort,
    images: ImageStorePort | None = None,
    rules: RulesPort | None = None,
) -> ShapeListOutput | ShapeOutput | ShapeOperationOutput:
    """
    Main entry point for the shapes component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ListShapesInput):
        return run_list(inp, store=store)
    elif isinstance(inp, GetShapeInput):
        return run_get(inp, store=store)
    elif isinstance(inp, CreateShapeInput):
        return run_create(inp, store=store, images=images, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
