"""
Shapes component - tetromino catalog.
"""

from ._impl import (
    MATRIX_SIZE,
    find_by_name,
    is_blank_matrix,
    is_blank_text,
    normalize_name,
    sniff_image_type,
    validate_candidate,
    validate_image_type,
    validate_matrix,
    validate_required,
    validate_unique,
)
from .component import run, run_create, run_get, run_list
from .defaults import DEFAULT_SHAPES, default_shapes
from .models import (
    CandidateShape,
    CreateShapeInput,
    GetShapeInput,
    ImageUpload,
    ListShapesInput,
    ShapeListOutput,
    ShapeOperationOutput,
    ShapeOutput,
    ShapeRecord,
    ShapeValidationError,
)
from .ports import ImageStorePort, RulesPort, ShapeStorePort

__all__ = [
    # Entry points
    "run",
    "run_create",
    "run_get",
    "run_list",
    # Input models
    "CandidateShape",
    "CreateShapeInput",
    "GetShapeInput",
    "ImageUpload",
    "ListShapesInput",
    # Output models
    "ShapeListOutput",
    "ShapeOperationOutput",
    "ShapeOutput",
    "ShapeRecord",
    "ShapeValidationError",
    # Ports
    "ImageStorePort",
    "RulesPort",
    "ShapeStorePort",
    # Defaults
    "DEFAULT_SHAPES",
    "default_shapes",
    # _impl re-exports
    "MATRIX_SIZE",
    "find_by_name",
    "is_blank_matrix",
    "is_blank_text",
    "normalize_name",
    "sniff_image_type",
    "validate_candidate",
    "validate_image_type",
    "validate_matrix",
    "validate_required",
    "validate_unique",
]
