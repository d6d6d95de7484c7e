from typing import Any

from pydantic import BaseModel, ConfigDict


# --- Shapes ---
class ShapeResponse(BaseModel):
    name: str
    color: str
    description: str
    image: str
    matrix: list[list[int]]

    model_config = ConfigDict(from_attributes=True)


class ShapeCreateRequest(BaseModel):
    """JSON body of a create request. Fields are loose; the component validates them."""

    name: Any = None
    color: Any = None
    description: Any = None
    image: Any = None
    matrix: Any = None

    model_config = ConfigDict(extra="ignore")


# --- Errors ---
class ErrorResponse(BaseModel):
    error: str
