"""
Shared response models.

``CamelModel`` is the base for every output record: fields are
declared in snake_case and exposed under camelCase aliases
(``driver_id`` -> ``driverId``).  ``SuccessResponse`` is the envelope
wrapping every successful payload.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for successful responses: ``{"success": true, "data": ...}``."""

    success: bool = True
    data: T


class ErrorResponse(BaseModel):
    """Body returned with every non-2xx status."""

    success: bool = False
    detail: str
