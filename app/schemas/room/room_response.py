"""
Room response schemas.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field

from app.models.base.enums import RoomStatus, RoomType
from app.schemas.common.base import BaseResponseSchema

__all__ = ["RoomResponse"]


class RoomResponse(BaseResponseSchema):
    """Room as returned to clients."""

    number: str
    type: RoomType
    price: Decimal = Field(..., description="Price per night, serialized as a string")
    capacity: int
    status: RoomStatus
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    description: Union[str, None] = None
