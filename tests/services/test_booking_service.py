from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.exceptions import (
    AuthorizationError,
    BookingNotFoundError,
    InvalidBookingStateError,
    RoomNotFoundError,
    RoomUnavailableError,
    UserNotFoundError,
    ValidationError,
)
from app.models import BookingStatus, RoomStatus
from app.schemas.booking import BookingCreate
from app.services.booking import BookingPolicy, BookingService

from tests.conftest import NOW


def booking_request(room, check_in=date(2024, 1, 15), check_out=date(2024, 1, 18), **overrides):
    data = {
        "room_id": room.id,
        "check_in": check_in,
        "check_out": check_out,
        "guests": 2,
        "total_price": "450.00",
    }
    data.update(overrides)
    return BookingCreate(**data)


class TestCreateBooking:
    def test_creates_pending_booking(self, booking_service, room, customer):
        """Room 101 for three nights from 2024-01-15 is accepted as pending."""
        booking = booking_service.create_booking(customer.id, booking_request(room))

        assert booking.id is not None
        assert booking.status == BookingStatus.PENDING
        assert booking.total_price == Decimal("450.00")
        assert booking.remaining_amount == Decimal("450.00")
        assert booking.check_in_time == "14:00"
        assert booking.check_out_time == "12:00"
        assert booking.nights == 3

    def test_status_from_caller_is_ignored(self, booking_service, room, customer):
        booking = booking_service.create_booking(
            customer.id, booking_request(room, status="confirmed")
        )
        assert booking.status == BookingStatus.PENDING

    def test_overlapping_pending_booking_currently_succeeds(
        self, booking_service, room, customer, other_customer
    ):
        """Pending bookings do not block the room under the default policy."""
        booking_service.create_booking(customer.id, booking_request(room))
        second = booking_service.create_booking(
            other_customer.id,
            booking_request(room, check_in=date(2024, 1, 16), check_out=date(2024, 1, 17)),
        )
        assert second.status == BookingStatus.PENDING

    def test_overlapping_pending_booking_rejected_with_widened_policy(
        self, db, notifier, room, customer, other_customer
    ):
        policy = BookingPolicy(
            blocking_statuses=frozenset({
                BookingStatus.PENDING,
                BookingStatus.DEPOSIT_PAID,
                BookingStatus.CONFIRMED,
            })
        )
        service = BookingService.for_session(db, policy=policy, notifier=notifier)
        service.create_booking(customer.id, booking_request(room))

        with pytest.raises(RoomUnavailableError):
            service.create_booking(
                other_customer.id,
                booking_request(room, check_in=date(2024, 1, 16), check_out=date(2024, 1, 17)),
            )

    def test_confirmed_overlap_rejected_and_nothing_persisted(
        self, db, booking_service, room, customer, other_customer, make_booking
    ):
        make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        with pytest.raises(RoomUnavailableError) as exc_info:
            booking_service.create_booking(
                other_customer.id,
                booking_request(room, check_in=date(2024, 1, 17), check_out=date(2024, 1, 20)),
            )

        assert exc_info.value.details["room_id"] == room.id
        assert booking_service.list_bookings(other_customer) == []

    def test_room_under_maintenance_rejected(self, booking_service, make_room, customer):
        room = make_room("909", status=RoomStatus.MAINTENANCE)

        with pytest.raises(RoomUnavailableError) as exc_info:
            booking_service.create_booking(customer.id, booking_request(room))

        assert exc_info.value.details["reason"] == "maintenance"

    def test_unknown_room(self, booking_service, room, customer):
        request = booking_request(room).model_copy(update={"room_id": 9999})
        with pytest.raises(RoomNotFoundError):
            booking_service.create_booking(customer.id, request)

    def test_unknown_user(self, booking_service, room):
        with pytest.raises(UserNotFoundError):
            booking_service.create_booking(9999, booking_request(room))

    def test_notifies_admins_and_emails_guest(self, booking_service, room, customer, hub, sent_emails):
        booking = booking_service.create_booking(customer.id, booking_request(room))

        [notification] = hub.recent()
        assert notification.type == "new_booking"
        assert notification.data["booking_id"] == booking.id
        assert len(sent_emails) == 1
        assert sent_emails[0].to == [customer.email]

    def test_notification_failure_does_not_fail_booking(self, db, room, customer):
        class BrokenNotifier:
            def notify_new_booking(self, booking):
                raise RuntimeError("smtp down")

        service = BookingService.for_session(db, policy=BookingPolicy(), notifier=BrokenNotifier())
        booking = service.create_booking(customer.id, booking_request(room))

        assert booking.status == BookingStatus.PENDING


class TestPayments:
    def test_full_payment_confirms(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        confirmed = booking_service.confirm_payment(
            booking.id, payment_method="card", payment_intent_id="pi_123"
        )

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.payment_method == "card"
        assert confirmed.payment_intent_id == "pi_123"
        assert confirmed.remaining_amount == Decimal("0")

    def test_deposit_payment(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        updated = booking_service.confirm_payment(booking.id, is_deposit=True, amount=Decimal("135.00"))

        assert updated.status == BookingStatus.DEPOSIT_PAID
        assert updated.deposit_amount == Decimal("135.00")
        assert updated.remaining_amount == Decimal("315.00")

    def test_deposit_larger_than_total_rejected(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        with pytest.raises(ValidationError):
            booking_service.confirm_payment(booking.id, is_deposit=True, amount=Decimal("500.00"))

    def test_unknown_booking(self, booking_service):
        with pytest.raises(BookingNotFoundError):
            booking_service.confirm_payment(4242)

    def test_deposit_defaults_to_policy_share(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        updated = booking_service.confirm_payment(booking.id, is_deposit=True)

        assert updated.status == BookingStatus.DEPOSIT_PAID
        assert updated.deposit_amount == Decimal("135.00")
        assert updated.remaining_amount == Decimal("315.00")

    def test_repeated_full_payment_keeps_booking_confirmed(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        booking_service.confirm_payment(booking.id, payment_intent_id="pi_1")
        again = booking_service.confirm_payment(booking.id, payment_method="card", payment_intent_id="pi_1")

        assert again.id == booking.id
        assert again.status == BookingStatus.CONFIRMED
        assert again.payment_method == "card"
        assert again.remaining_amount == Decimal("0")

    def test_repeated_deposit_updates_amounts(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        booking_service.confirm_payment(booking.id, is_deposit=True, amount=Decimal("100.00"))
        again = booking_service.confirm_payment(booking.id, is_deposit=True, amount=Decimal("150.00"))

        assert again.status == BookingStatus.DEPOSIT_PAID
        assert again.deposit_amount == Decimal("150.00")
        assert again.remaining_amount == Decimal("300.00")

    def test_deposit_after_full_payment_rejected(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        with pytest.raises(InvalidBookingStateError):
            booking_service.confirm_payment(booking.id, is_deposit=True)

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.COMPLETED])
    def test_closed_booking_cannot_be_paid(self, booking_service, room, customer, make_booking, status):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=status)

        with pytest.raises(InvalidBookingStateError):
            booking_service.confirm_payment(booking.id)
        with pytest.raises(InvalidBookingStateError):
            booking_service.check_in_payment(booking.id)
        with pytest.raises(InvalidBookingStateError):
            booking_service.confirm_booking(booking.id)

    def test_other_user_cannot_pay_for_booking(self, booking_service, room, customer, other_customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        with pytest.raises(AuthorizationError):
            booking_service.confirm_payment(booking.id, acting_user=other_customer)

    def test_walk_in_requires_full_payment(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        with pytest.raises(ValidationError):
            booking_service.settle_walk_in_payment(booking.id, payment_type="deposit")

        settled = booking_service.settle_walk_in_payment(booking.id, payment_type="full")
        assert settled.status == BookingStatus.CONFIRMED
        assert settled.payment_method == "cash"
        assert booking_service.settle_walk_in_payment(booking.id).status == BookingStatus.CONFIRMED

    def test_check_in_payment_settles_balance(self, booking_service, room, customer, make_booking):
        booking = make_booking(
            customer, room, date(2024, 1, 15), date(2024, 1, 18),
            status=BookingStatus.DEPOSIT_PAID,
        )

        settled = booking_service.check_in_payment(booking.id, payment_method="card")

        assert settled.status == BookingStatus.CONFIRMED
        assert settled.remaining_amount == Decimal("0")

        again = booking_service.check_in_payment(booking.id, payment_method="cash")
        assert again.status == BookingStatus.CONFIRMED
        assert again.payment_method == "cash"

    def test_attach_payment_intent(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        updated = booking_service.attach_payment_intent(booking.id, "pi_abc", acting_user=customer)

        assert updated.payment_intent_id == "pi_abc"
        assert updated.status == BookingStatus.PENDING


class TestAdminTransitions:
    def test_admin_confirm_moves_pending_to_deposit_paid(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        assert booking_service.confirm_booking(booking.id).status == BookingStatus.DEPOSIT_PAID
        assert booking_service.confirm_booking(booking.id).status == BookingStatus.CONFIRMED

    def test_admin_confirm_of_confirmed_booking_is_a_no_op(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        confirmed = booking_service.confirm_booking(booking.id)

        assert confirmed.id == booking.id
        assert confirmed.status == BookingStatus.CONFIRMED

    def test_complete_requires_confirmed(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

        with pytest.raises(InvalidBookingStateError):
            booking_service.complete_booking(booking.id)

        booking_service.confirm_payment(booking.id)
        assert booking_service.complete_booking(booking.id).status == BookingStatus.COMPLETED

    def test_delete_cancels_booking(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        assert booking_service.delete_booking(booking.id).status == BookingStatus.CANCELLED


class TestCancelBooking:
    @pytest.mark.parametrize(
        "hours_before, percentage, refund",
        [
            (72, 100, Decimal("450.00")),
            (30, 50, Decimal("225.00")),
            (10, 0, Decimal("0.00")),
            (48, 50, Decimal("225.00")),
            (24, 0, Decimal("0.00")),
        ],
    )
    def test_refund_tiers(
        self, booking_service, room, customer, make_booking, hours_before, percentage, refund
    ):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))
        check_in_at = datetime(2024, 1, 15, tzinfo=timezone.utc)

        result = booking_service.cancel_booking(
            booking.id, customer, now=check_in_at - timedelta(hours=hours_before)
        )

        assert result.refund_percentage == percentage
        assert result.refund_amount == refund
        assert result.original_amount == Decimal("450.00")
        assert result.hours_until_check_in == pytest.approx(hours_before)
        assert result.booking.status == BookingStatus.CANCELLED

    def test_uses_clock_when_now_not_given(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        result = booking_service.cancel_booking(booking.id, customer)

        # NOW is 2024-01-10 12:00 UTC, four and a half days before check-in
        assert result.hours_until_check_in == pytest.approx(108)
        assert result.refund_percentage == 100

    def test_just_over_threshold_gets_full_refund(self, booking_service, room, customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))
        now = datetime(2024, 1, 15, tzinfo=timezone.utc) - timedelta(hours=48, seconds=1)

        assert booking_service.cancel_booking(booking.id, customer, now=now).refund_percentage == 100

    def test_non_owner_is_forbidden_and_status_unchanged(
        self, db, booking_service, room, customer, other_customer, make_booking
    ):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        with pytest.raises(AuthorizationError):
            booking_service.cancel_booking(booking.id, other_customer, now=NOW)

        db.refresh(booking)
        assert booking.status == BookingStatus.CONFIRMED

    def test_admin_can_cancel_any_booking(self, booking_service, room, customer, admin, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

        result = booking_service.cancel_booking(booking.id, admin, now=NOW)

        assert result.booking.status == BookingStatus.CANCELLED

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.COMPLETED])
    def test_terminal_booking_cannot_be_cancelled(self, booking_service, room, customer, make_booking, status):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=status)

        with pytest.raises(InvalidBookingStateError):
            booking_service.cancel_booking(booking.id, customer, now=NOW)

    def test_unknown_booking(self, booking_service, customer):
        with pytest.raises(BookingNotFoundError):
            booking_service.cancel_booking(4242, customer, now=NOW)

    def test_cancelled_booking_frees_the_room(self, booking_service, room, customer, other_customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))
        booking_service.cancel_booking(booking.id, customer, now=NOW)

        new_booking = booking_service.create_booking(other_customer.id, booking_request(room))

        assert new_booking.status == BookingStatus.PENDING


class TestListings:
    def test_customer_sees_own_bookings_newest_first(
        self, booking_service, room, customer, other_customer, make_booking
    ):
        first = make_booking(customer, room, date(2024, 1, 1), date(2024, 1, 3))
        make_booking(other_customer, room, date(2024, 2, 1), date(2024, 2, 3))
        second = make_booking(customer, room, date(2024, 3, 1), date(2024, 3, 3))

        bookings = booking_service.list_bookings(customer)

        assert [b.id for b in bookings] == [second.id, first.id]

    def test_admin_sees_all(self, booking_service, room, customer, other_customer, admin, make_booking):
        make_booking(customer, room, date(2024, 1, 1), date(2024, 1, 3))
        make_booking(other_customer, room, date(2024, 2, 1), date(2024, 2, 3))

        assert len(booking_service.list_bookings(admin)) == 2

    def test_get_booking_checks_ownership(self, booking_service, room, customer, other_customer, make_booking):
        booking = make_booking(customer, room, date(2024, 1, 1), date(2024, 1, 3))

        assert booking_service.get_booking(booking.id, customer).id == booking.id
        with pytest.raises(AuthorizationError):
            booking_service.get_booking(booking.id, other_customer)


def test_scenario_room_101(booking_service, room, customer, other_customer):
    """
    Room 101, no bookings: a three night booking is created pending; an
    overlapping booking from another guest also succeeds while the first is
    unconfirmed. Once the first is paid, a third overlapping request fails.
    """
    first = booking_service.create_booking(customer.id, booking_request(room))
    assert first.status == BookingStatus.PENDING

    second = booking_service.create_booking(
        other_customer.id,
        booking_request(room, check_in=date(2024, 1, 16), check_out=date(2024, 1, 17)),
    )
    assert second.status == BookingStatus.PENDING

    booking_service.confirm_payment(first.id)

    with pytest.raises(RoomUnavailableError):
        booking_service.create_booking(
            other_customer.id,
            booking_request(room, check_in=date(2024, 1, 17), check_out=date(2024, 1, 19)),
        )
