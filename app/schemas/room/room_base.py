"""
Room base schemas used by the admin room endpoints.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field, field_validator

from app.models.base.enums import RoomStatus, RoomType
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "RoomBase",
    "RoomCreate",
    "RoomUpdate",
]


class RoomBase(BaseSchema):
    """
    Common room fields.
    """

    number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Room number, unique across the hotel",
    )
    type: RoomType = Field(..., description="Room category")
    price: Decimal = Field(
        ...,
        ge=0,
        max_digits=10,
        decimal_places=2,
        description="Price per night",
    )
    capacity: int = Field(..., ge=1, description="Maximum number of guests")
    status: RoomStatus = Field(
        RoomStatus.AVAILABLE,
        description="Admin status; only available rooms are offered",
    )
    amenities: List[str] = Field(default_factory=list, description="Amenity labels")
    images: List[str] = Field(default_factory=list, description="Image URLs")
    description: Union[str, None] = Field(None, max_length=2000)

    @field_validator("amenities", "images")
    @classmethod
    def drop_blank_entries(cls, v: List[str]) -> List[str]:
        """Strip entries and drop empty ones, keeping order."""
        return [item.strip() for item in v if item and item.strip()]


class RoomCreate(RoomBase, BaseCreateSchema):
    """Schema for creating a room."""
    pass


class RoomUpdate(BaseUpdateSchema):
    """Partial room update; unset fields are left untouched."""

    number: Union[str, None] = Field(None, min_length=1, max_length=20)
    type: Union[RoomType, None] = None
    price: Union[Decimal, None] = Field(None, ge=0, max_digits=10, decimal_places=2)
    capacity: Union[int, None] = Field(None, ge=1)
    status: Union[RoomStatus, None] = None
    amenities: Union[List[str], None] = None
    images: Union[List[str], None] = None
    description: Union[str, None] = Field(None, max_length=2000)
