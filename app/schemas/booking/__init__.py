"""
Booking schemas package.

This module exports all booking-related schemas for easy importing
across the application.
"""

from app.schemas.booking.booking_base import (
    BookingBase,
    BookingCreate,
    WalkInBookingCreate,
)
from app.schemas.booking.booking_cancellation import CancellationResponse
from app.schemas.booking.booking_payment import (
    CheckInPaymentRequest,
    PaymentConfirmRequest,
    PaymentIntentRequest,
    WalkInPaymentRequest,
)
from app.schemas.booking.booking_response import BookingDetail, BookingResponse

__all__ = [
    "BookingBase",
    "BookingCreate",
    "WalkInBookingCreate",
    "CancellationResponse",
    "CheckInPaymentRequest",
    "PaymentConfirmRequest",
    "PaymentIntentRequest",
    "WalkInPaymentRequest",
    "BookingDetail",
    "BookingResponse",
]
