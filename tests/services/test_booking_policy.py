from decimal import Decimal

import pytest

from app.core.exceptions import InvalidBookingStateError
from app.models import BookingStatus
from app.services.booking import BookingPolicy, RefundPolicy, can_transition, validate_transition
from app.services.booking.booking_state import is_repeat


@pytest.mark.parametrize(
    "hours, expected",
    [
        (500, 100),
        (48.01, 100),
        (48, 50),
        (30, 50),
        (24.5, 50),
        (24, 0),
        (1, 0),
        (-5, 0),
    ],
)
def test_refund_percentage_tiers(hours, expected):
    assert RefundPolicy().percentage_for(hours) == expected


def test_refund_amount_rounded_to_cents():
    quote = RefundPolicy().calculate(Decimal("99.99"), 30)

    assert quote.refund_percentage == 50
    assert quote.refund_amount == Decimal("50.00")
    assert quote.original_amount == Decimal("99.99")
    assert quote.hours_until_check_in == 30


def test_zero_refund_is_zero_cents():
    assert RefundPolicy().calculate(Decimal("450.00"), 2).refund_amount == Decimal("0.00")


def test_custom_tiers():
    policy = RefundPolicy(full_refund_hours=72, partial_refund_hours=12, partial_refund_percentage=25)

    assert policy.percentage_for(73) == 100
    assert policy.percentage_for(72) == 25
    assert policy.percentage_for(12) == 0


def test_inverted_thresholds_rejected():
    with pytest.raises(ValueError):
        RefundPolicy(full_refund_hours=10, partial_refund_hours=20)


def test_percentage_out_of_range_rejected():
    with pytest.raises(ValueError):
        RefundPolicy(full_refund_percentage=120)


def test_default_policy_blocks_only_confirmed():
    policy = BookingPolicy()

    assert policy.blocking_statuses == frozenset({BookingStatus.CONFIRMED})
    assert policy.check_in_time == "14:00"
    assert policy.check_out_time == "12:00"


def test_deposit_for():
    assert BookingPolicy().deposit_for(Decimal("450.00")) == Decimal("135.00")


@pytest.mark.parametrize(
    "current, target",
    [
        (BookingStatus.PENDING, BookingStatus.DEPOSIT_PAID),
        (BookingStatus.PENDING, BookingStatus.CONFIRMED),
        (BookingStatus.PENDING, BookingStatus.CANCELLED),
        (BookingStatus.DEPOSIT_PAID, BookingStatus.CONFIRMED),
        (BookingStatus.DEPOSIT_PAID, BookingStatus.CANCELLED),
        (BookingStatus.CONFIRMED, BookingStatus.COMPLETED),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current, target)
    validate_transition(current, target)


@pytest.mark.parametrize(
    "current, target",
    [
        (BookingStatus.CANCELLED, BookingStatus.CANCELLED),
        (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
        (BookingStatus.CANCELLED, BookingStatus.CONFIRMED),
        (BookingStatus.CONFIRMED, BookingStatus.PENDING),
        (BookingStatus.PENDING, BookingStatus.COMPLETED),
    ],
)
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)
    with pytest.raises(InvalidBookingStateError) as exc_info:
        validate_transition(current, target, booking_id=7)

    assert exc_info.value.status_code == 409
    assert exc_info.value.details["booking_id"] == 7


def test_transitions_accept_plain_strings():
    assert can_transition("pending", "confirmed")


@pytest.mark.parametrize("status", [BookingStatus.CONFIRMED, BookingStatus.DEPOSIT_PAID])
def test_repeated_confirmation_allowed_on_request(status):
    assert is_repeat(status, status)
    validate_transition(status, status, allow_repeat=True)

    with pytest.raises(InvalidBookingStateError):
        validate_transition(status, status)


@pytest.mark.parametrize(
    "status",
    [BookingStatus.PENDING, BookingStatus.CANCELLED, BookingStatus.COMPLETED],
)
def test_only_paid_statuses_repeat(status):
    assert not is_repeat(status, status)
    with pytest.raises(InvalidBookingStateError):
        validate_transition(status, status, allow_repeat=True)


def test_repeat_does_not_reopen_closed_bookings():
    with pytest.raises(InvalidBookingStateError):
        validate_transition(BookingStatus.CANCELLED, BookingStatus.CONFIRMED, allow_repeat=True)
