"""
Booking response schemas for API responses.
"""

from datetime import date as Date
from decimal import Decimal
from typing import Union

from pydantic import Field, computed_field

from app.models.base.enums import BookingStatus
from app.schemas.common.base import BaseResponseSchema
from app.schemas.room.room_response import RoomResponse

__all__ = [
    "BookingResponse",
    "BookingDetail",
]


class BookingResponse(BaseResponseSchema):
    """
    Standard booking response schema.
    """

    user_id: int
    room_id: int
    check_in: Date
    check_out: Date
    check_in_time: str
    check_out_time: str
    guests: int
    total_price: Decimal
    status: BookingStatus
    special_requests: Union[str, None] = None
    payment_intent_id: Union[str, None] = None
    payment_method: Union[str, None] = None
    deposit_amount: Union[Decimal, None] = None
    remaining_amount: Union[Decimal, None] = None

    @computed_field  # type: ignore[misc]
    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class BookingDetail(BookingResponse):
    """Booking with its room embedded."""

    room: Union[RoomResponse, None] = Field(None, description="Booked room")
