"""
Payment endpoints. Money is handled by an external provider; these record
its outcome on the booking.
"""

from fastapi import APIRouter, Depends

from app.api import deps
from app.schemas.booking import (
    BookingResponse,
    CheckInPaymentRequest,
    PaymentConfirmRequest,
    PaymentIntentRequest,
    WalkInPaymentRequest,
)
from app.services.booking.booking_service import BookingService

router = APIRouter()


@router.post("/intent", response_model=BookingResponse)
def attach_payment_intent(
    request: PaymentIntentRequest,
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.attach_payment_intent(
        request.booking_id, request.payment_intent_id, acting_user=current_user
    )


@router.post("/confirm", response_model=BookingResponse)
def confirm_payment(
    request: PaymentConfirmRequest,
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.confirm_payment(
        request.booking_id,
        is_deposit=request.is_deposit,
        amount=request.amount,
        payment_method=request.payment_method,
        payment_intent_id=request.payment_intent_id,
        acting_user=current_user,
    )


@router.post("/walk-in", response_model=BookingResponse)
def walk_in_payment(
    request: WalkInPaymentRequest,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.settle_walk_in_payment(
        request.booking_id, request.payment_type, request.payment_method
    )


@router.post("/check-in", response_model=BookingResponse)
def check_in_payment(
    request: CheckInPaymentRequest,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.check_in_payment(request.booking_id, request.payment_method)
