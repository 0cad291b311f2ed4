"""
Booking base schemas with validation.

Requests are validated here, before any persistence: dates must parse and
form a non-empty range, at least one guest is required and the quoted
total must be a non-negative decimal.
"""

from datetime import date as Date
from decimal import Decimal
from typing import Union

from pydantic import Field, model_validator

from app.models.base.enums import BookingStatus
from app.schemas.common.base import BaseCreateSchema, BaseSchema

__all__ = [
    "BookingBase",
    "BookingCreate",
    "WalkInBookingCreate",
]


class BookingBase(BaseSchema):
    """
    Base booking schema with common fields and validation.
    """

    room_id: int = Field(..., description="Room being booked")
    check_in: Date = Field(..., description="First night of the stay")
    check_out: Date = Field(..., description="Departure date, exclusive")
    guests: int = Field(1, ge=1, description="Number of guests")
    total_price: Decimal = Field(
        ...,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Quoted total for the stay",
    )
    special_requests: Union[str, None] = Field(
        None,
        max_length=1000,
        description="Any special requests from the guest",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "BookingBase":
        """Check-out must fall after check-in."""
        if self.check_out <= self.check_in:
            raise ValueError(
                f"Check-out date ({self.check_out}) must be after "
                f"check-in date ({self.check_in})"
            )
        return self

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days


class BookingCreate(BookingBase, BaseCreateSchema):
    """
    Schema for creating a booking.

    The booking owner comes from the authenticated user. A status sent by
    the client is accepted for compatibility but never honoured: new
    bookings always start as pending.
    """

    status: Union[BookingStatus, None] = Field(
        None,
        description="Ignored; new bookings start as pending",
    )


class WalkInBookingCreate(BookingCreate):
    """Booking created by an admin at the front desk on behalf of a customer."""

    user_id: int = Field(..., description="Customer the booking belongs to")
