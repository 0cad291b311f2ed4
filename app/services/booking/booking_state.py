"""
Booking lifecycle transitions.

    pending -> deposit_paid -> confirmed -> completed
    pending -> confirmed
    pending | deposit_paid | confirmed -> cancelled

Completed and cancelled are terminal. Payment confirmations may repeat:
confirmed -> confirmed and deposit_paid -> deposit_paid are accepted where
the caller asks for it.
"""

from typing import Dict, FrozenSet, Optional

from app.core.exceptions import InvalidBookingStateError
from app.models.base.enums import BookingStatus

_ALLOWED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.DEPOSIT_PAID,
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.DEPOSIT_PAID: frozenset({
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.CONFIRMED: frozenset({
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Payment confirmations may be delivered more than once
_REPEATABLE: FrozenSet[BookingStatus] = frozenset({
    BookingStatus.DEPOSIT_PAID,
    BookingStatus.CONFIRMED,
})


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return BookingStatus(target) in _ALLOWED_TRANSITIONS.get(BookingStatus(current), frozenset())


def is_repeat(current: BookingStatus, target: BookingStatus) -> bool:
    """A confirmation that leaves a paid booking in the status it already has."""
    return BookingStatus(current) == BookingStatus(target) and BookingStatus(target) in _REPEATABLE


def validate_transition(
    current: BookingStatus,
    target: BookingStatus,
    booking_id: Optional[int] = None,
    allow_repeat: bool = False,
) -> None:
    """Validate that a transition from current -> target is allowed.

    With `allow_repeat`, confirming a booking that is already confirmed (or
    deposit_paid again) is accepted.

    Raises InvalidBookingStateError if not allowed.
    """
    if allow_repeat and is_repeat(current, target):
        return
    if not can_transition(current, target):
        raise InvalidBookingStateError(
            current=BookingStatus(current).value,
            target=BookingStatus(target).value,
            booking_id=booking_id,
        )
