"""
Payment request schemas.

Payments are recorded against bookings only; charging cards is done by an
external provider whose reference is stored as the payment intent id.
"""

from decimal import Decimal
from typing import Union

from pydantic import Field

from app.models.base.enums import PaymentType
from app.schemas.common.base import BaseCreateSchema

__all__ = [
    "PaymentIntentRequest",
    "PaymentConfirmRequest",
    "WalkInPaymentRequest",
    "CheckInPaymentRequest",
]


class PaymentIntentRequest(BaseCreateSchema):
    """Attach an external payment reference to a booking."""

    booking_id: int
    payment_intent_id: str = Field(..., min_length=1, max_length=255)


class PaymentConfirmRequest(BaseCreateSchema):
    """
    Confirm a payment for a booking.

    A deposit payment may name the deposited amount; when it does not, the
    configured deposit share of the total is recorded.
    """

    booking_id: int
    is_deposit: bool = Field(False, description="Whether only a deposit was paid")
    amount: Union[Decimal, None] = Field(None, ge=0, max_digits=12, decimal_places=2)
    payment_method: Union[str, None] = Field(None, max_length=50)
    payment_intent_id: Union[str, None] = Field(None, max_length=255)


class WalkInPaymentRequest(BaseCreateSchema):
    """Front desk payment for a walk-in booking."""

    booking_id: int
    payment_type: PaymentType = Field(PaymentType.FULL)
    payment_method: str = Field("cash", max_length=50)


class CheckInPaymentRequest(BaseCreateSchema):
    """Remaining balance paid at check-in."""

    booking_id: int
    payment_method: str = Field("cash", max_length=50)
