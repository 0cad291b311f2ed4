"""
Booking cancellation schemas.
"""

from decimal import Decimal

from pydantic import Field

from app.schemas.booking.booking_response import BookingResponse
from app.schemas.common.base import BaseSchema

__all__ = ["CancellationResponse"]


class CancellationResponse(BaseSchema):
    """
    Outcome of a cancellation.

    The refund figures are advisory; no money is moved.
    """

    booking: BookingResponse
    refund_amount: Decimal = Field(..., description="Refund owed to the guest")
    refund_percentage: int = Field(..., ge=0, le=100)
    original_amount: Decimal
    hours_until_check_in: float = Field(
        ...,
        description="Hours from cancellation to the start of the check-in day",
    )
    message: str
