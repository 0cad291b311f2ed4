"""
Booking endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.booking import (
    BookingCreate,
    BookingDetail,
    BookingResponse,
    CancellationResponse,
    WalkInBookingCreate,
)
from app.services.booking.booking_service import BookingService

router = APIRouter()


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    """Own bookings for customers, every booking for admins; newest first."""
    return bookings.list_bookings(current_user)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    request: BookingCreate,
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    """Create a pending booking for the authenticated user."""
    return bookings.create_booking(current_user.id, request)


@router.post("/walk-in", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_walk_in_booking(
    request: WalkInBookingCreate,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    """Front desk booking on behalf of an existing customer."""
    return bookings.create_booking(request.user_id, request)


@router.get("/{booking_id}", response_model=BookingDetail)
def get_booking(
    booking_id: int,
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.get_booking(booking_id, current_user)


@router.put("/{booking_id}/cancel", response_model=CancellationResponse)
def cancel_booking(
    booking_id: int,
    current_user: deps.CurrentUser = Depends(deps.get_current_user),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    result = bookings.cancel_booking(booking_id, current_user)
    return CancellationResponse(
        booking=BookingResponse.model_validate(result.booking),
        refund_amount=result.refund_amount,
        refund_percentage=result.refund_percentage,
        original_amount=result.original_amount,
        hours_until_check_in=round(result.hours_until_check_in, 2),
        message=f"Booking cancelled with a {result.refund_percentage}% refund",
    )


@router.put("/{booking_id}/confirm", response_model=BookingResponse)
def confirm_booking(
    booking_id: int,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.confirm_booking(booking_id)


@router.put("/{booking_id}/complete", response_model=BookingResponse)
def complete_booking(
    booking_id: int,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    return bookings.complete_booking(booking_id)


@router.delete("/{booking_id}", response_model=BookingResponse)
def delete_booking(
    booking_id: int,
    _: deps.CurrentUser = Depends(deps.require_admin),
    bookings: BookingService = Depends(deps.get_booking_service),
):
    """Cancels the booking; no refund is computed."""
    return bookings.delete_booking(booking_id)
