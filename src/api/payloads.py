"""
Create-request payload normalisation.

A create request arrives either as a JSON body or as form fields (urlencoded
or multipart, with the matrix JSON-encoded and an optional `image_file`).
Both shapes are reduced here to one CandidateShape plus an optional
ImageUpload before the shapes component sees them.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request
from starlette.datastructures import FormData, UploadFile

from src.api.schemas import ShapeCreateRequest
from src.components.shapes import CandidateShape, CreateShapeInput, ImageUpload

IMAGE_FILE_FIELD = "image_file"


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return ""


def _matrix(value: Any) -> Any:
    # Form posts carry the matrix as a JSON string
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return value
        if isinstance(decoded, list):
            return decoded
    return value


def candidate_from_request(body: ShapeCreateRequest) -> CandidateShape:
    return CandidateShape(
        name=_text(body.name),
        color=_text(body.color),
        description=_text(body.description),
        image=_text(body.image),
        matrix=_matrix(body.matrix),
    )


def candidate_from_json(raw: bytes) -> CandidateShape:
    """An unparsable or non-object body counts as an empty submission."""
    try:
        data = json.loads(raw) if raw else {}
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    return candidate_from_request(ShapeCreateRequest.model_validate(data))


def candidate_from_form(form: FormData) -> CandidateShape:
    fields = {
        key: value
        for key, value in form.multi_items()
        if key != IMAGE_FILE_FIELD and not isinstance(value, UploadFile)
    }
    return candidate_from_request(ShapeCreateRequest.model_validate(fields))


async def upload_from_form(form: FormData) -> ImageUpload | None:
    """The `image_file` upload, or None when no file was chosen."""
    upload = form.get(IMAGE_FILE_FIELD)
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None

    data = await upload.read()
    return ImageUpload(
        data=data,
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
    )


async def read_create_input(request: Request) -> CreateShapeInput:
    """Normalise any supported create payload into the component input."""
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type.lower():
        return CreateShapeInput(candidate=candidate_from_json(await request.body()))

    form = await request.form()
    try:
        return CreateShapeInput(
            candidate=candidate_from_form(form),
            upload=await upload_from_form(form),
        )
    finally:
        await form.close()
