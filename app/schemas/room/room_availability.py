"""
Availability query schemas.
"""

from datetime import date as Date
from typing import List, Union

from pydantic import Field, model_validator

from app.schemas.common.base import BaseSchema
from app.schemas.room.room_response import RoomResponse

__all__ = [
    "DateRangeQuery",
    "AvailabilityCheckRequest",
    "AvailabilityCheckResponse",
]


class DateRangeQuery(BaseSchema):
    """
    A stay expressed as a half-open date range [check_in, check_out).
    """

    check_in: Date = Field(..., description="First night")
    check_out: Date = Field(..., description="Departure date (exclusive)")

    @model_validator(mode="after")
    def validate_range(self) -> "DateRangeQuery":
        if self.check_out <= self.check_in:
            raise ValueError("Check-out date must be after check-in date")
        return self


class AvailabilityCheckRequest(DateRangeQuery):
    """Availability check for one room, or for any room when room_id is omitted."""

    room_id: Union[int, None] = Field(None, description="Room to check")


class AvailabilityCheckResponse(BaseSchema):
    """Result of an availability check."""

    is_available: bool
    available_rooms: List[RoomResponse] = Field(
        default_factory=list,
        description="Free rooms; empty when a single room was checked",
    )
    message: str
