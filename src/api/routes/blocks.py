"""
Blocks API routes.

The tetromino catalog: list all shapes, fetch one by name, append a new one.
"""

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from starlette.concurrency import run_in_threadpool

from src.api.deps import get_image_store, get_shape_rules, get_shape_store
from src.api.payloads import read_create_input
from src.api.schemas import ErrorResponse, ShapeResponse
from src.components.shapes import (
    GetShapeInput,
    ListShapesInput,
    ShapeValidationError,
    run_create,
    run_get,
    run_list,
)

router = APIRouter()

STATUS_BY_CODE = {
    "missing_fields": 400,
    "malformed_matrix": 400,
    "invalid_image_format": 400,
    "not_found": 404,
    "duplicate_name": 409,
    "image_write_failed": 500,
    "save_failed": 500,
}


def _raise_for(errors: list[ShapeValidationError]) -> NoReturn:
    err = errors[0]
    raise HTTPException(status_code=STATUS_BY_CODE.get(err.code, 400), detail=err.message)


@router.options("/blocks", status_code=204)
def preflight() -> Response:
    """Acknowledge a preflight request."""
    return Response(status_code=204)


@router.get(
    "/blocks",
    responses={
        200: {"model": list[ShapeResponse]},
        404: {"model": ErrorResponse},
    },
)
def get_blocks(
    block: str | None = None,
    store: Any = Depends(get_shape_store),
) -> Any:
    """List every shape, or only the one named by `block`."""
    if block is not None and block != "":
        result = run_get(GetShapeInput(name=block), store=store)
        if not result.success or result.shape is None:
            _raise_for(result.errors)
        return result.shape.to_dict()

    listing = run_list(ListShapesInput(), store=store)
    return [shape.to_dict() for shape in listing.shapes]


@router.post(
    "/blocks",
    status_code=201,
    responses={
        201: {"model": ShapeResponse},
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def create_block(
    request: Request,
    store: Any = Depends(get_shape_store),
    images: Any = Depends(get_image_store),
    rules: Any = Depends(get_shape_rules),
) -> Any:
    """Append a new shape from a JSON body or form fields with an optional image_file."""
    inp = await read_create_input(request)

    result = await run_in_threadpool(run_create, inp, store=store, images=images, rules=rules)

    if not result.success or result.shape is None:
        _raise_for(result.errors)

    return result.shape.to_dict()
