"""
Core booking service: creation, payments, cancellation and listings.

Every state change is validated against the lifecycle table in
`booking_state`; failures are raised as application exceptions.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session

from app.core.exceptions import (
    AuthorizationError,
    InvalidBookingStateError,
    RoomUnavailableError,
    ValidationError,
)
from app.models.base.enums import BookingStatus, PaymentType, UserRole
from app.models.booking.booking import Booking
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.room.room_repository import RoomRepository
from app.repositories.user.user_repository import UserRepository
from app.schemas.booking.booking_base import BookingCreate
from app.services.base import BaseService, track_performance
from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_notification_service import BookingNotificationService
from app.services.booking.booking_policy import BookingPolicy, RefundQuote
from app.services.booking.booking_state import validate_transition
from app.utils.date_utils import hours_between, now_utc


@dataclass
class CancellationResult:
    """Cancelled booking plus the refund it is entitled to."""

    booking: Booking
    refund: RefundQuote

    @property
    def refund_amount(self) -> Decimal:
        return self.refund.refund_amount

    @property
    def refund_percentage(self) -> int:
        return self.refund.refund_percentage

    @property
    def original_amount(self) -> Decimal:
        return self.refund.original_amount

    @property
    def hours_until_check_in(self) -> float:
        return self.refund.hours_until_check_in


def _is_admin(acting_user) -> bool:
    role = getattr(acting_user, "role", None)
    return role == UserRole.ADMIN or role == UserRole.ADMIN.value


class BookingService(BaseService[Booking, BookingRepository]):
    """
    Booking lifecycle operations.

    Collaborators (policy, availability, notifier, clock) default to the
    application-wide ones and can be replaced in tests.
    """

    def __init__(
        self,
        repository: BookingRepository,
        db_session: Session,
        policy: Optional[BookingPolicy] = None,
        availability: Optional[AvailabilityService] = None,
        notifier: Optional[BookingNotificationService] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        super().__init__(repository, db_session)
        self.policy = policy or BookingPolicy.from_settings()
        self.rooms = RoomRepository(db_session)
        self.users = UserRepository(db_session)
        self.availability = availability or AvailabilityService(
            db_session,
            policy=self.policy,
            room_repository=self.rooms,
            booking_repository=repository,
        )
        self.notifier = notifier or BookingNotificationService()
        self.clock = clock

    @classmethod
    def for_session(cls, db_session: Session, **kwargs) -> "BookingService":
        return cls(BookingRepository(db_session), db_session, **kwargs)

    # -------------------------------------------------------------------------
    # Access control
    # -------------------------------------------------------------------------

    def _ensure_can_access(self, booking: Booking, acting_user) -> None:
        if _is_admin(acting_user):
            return
        if acting_user is None or getattr(acting_user, "id", None) != booking.user_id:
            raise AuthorizationError(
                "You can only access your own bookings",
                required_permission="booking_owner_or_admin",
            )

    def _transition(
        self,
        booking: Booking,
        target: BookingStatus,
        repeatable: bool = False,
        **changes,
    ) -> Booking:
        """
        Move `booking` to `target`, applying `changes` in the same commit.

        With `repeatable`, a booking already in `target` keeps its status and
        only `changes` are applied.
        """
        validate_transition(booking.status, target, booking_id=booking.id, allow_repeat=repeatable)
        previous = booking.status

        with self.transaction():
            booking.status = target
            for key, value in changes.items():
                setattr(booking, key, value)

        self.db.refresh(booking)
        self._logger.info(
            f"Booking {booking.id} moved {BookingStatus(previous).value} -> {target.value}",
            extra={
                "booking_id": booking.id,
                "from_status": BookingStatus(previous).value,
                "to_status": target.value,
            },
        )
        return booking

    # -------------------------------------------------------------------------
    # Creation
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, user_id: int, request: BookingCreate) -> Booking:
        """
        Create a pending booking after checking availability.

        The availability check and the insert run in one transaction that
        holds a row lock on the room, so concurrent requests for the same
        room are serialized on databases that support FOR UPDATE.

        Args:
            user_id: Booking owner
            request: Validated booking payload; its status is ignored

        Returns:
            The new booking, always pending

        Raises:
            RoomNotFoundError / UserNotFoundError: Unknown room or user
            RoomUnavailableError: Room not available for the dates
        """
        with self.transaction():
            room = self.rooms.lock_by_id(request.room_id)
            self.users.get_by_id(user_id)

            if not self.availability.is_room_available(room, request.check_in, request.check_out):
                self._logger.info(
                    "Booking rejected, room unavailable",
                    extra={
                        "room_id": room.id,
                        "check_in": str(request.check_in),
                        "check_out": str(request.check_out),
                    },
                )
                raise RoomUnavailableError(
                    room_id=room.id,
                    reason="maintenance" if not room.is_offered else "overlapping_booking",
                )

            booking = Booking(
                user_id=user_id,
                room_id=room.id,
                check_in=request.check_in,
                check_out=request.check_out,
                guests=request.guests,
                total_price=request.total_price,
                special_requests=request.special_requests,
                status=BookingStatus.PENDING,
                remaining_amount=request.total_price,
                check_in_time=self.policy.check_in_time,
                check_out_time=self.policy.check_out_time,
            )
            self.repository.create(booking, commit=False)

        self.db.refresh(booking)
        self._logger.info(
            f"Booking {booking.id} created",
            extra={
                "booking_id": booking.id,
                "room_id": booking.room_id,
                "user_id": user_id,
                "nights": booking.nights,
            },
        )
        self._notify_new_booking(booking)
        return booking

    def _notify_new_booking(self, booking: Booking) -> None:
        try:
            self.notifier.notify_new_booking(booking)
        except Exception:
            self._logger.warning(
                "Booking notification failed",
                extra={"booking_id": booking.id},
                exc_info=True,
            )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: int, acting_user=None) -> Booking:
        """
        Fetch a booking; when `acting_user` is given it must own it or be admin.
        """
        booking = self.repository.get_by_id(booking_id)
        if acting_user is not None:
            self._ensure_can_access(booking, acting_user)
        return booking

    def list_bookings(self, acting_user) -> List[Booking]:
        """Admins see every booking, customers their own; newest first."""
        if _is_admin(acting_user):
            return self.repository.find_newest()
        return self.repository.find_for_user(acting_user.id)

    # -------------------------------------------------------------------------
    # Payments
    # -------------------------------------------------------------------------

    @track_performance("confirm_payment")
    def confirm_payment(
        self,
        booking_id: int,
        is_deposit: bool = False,
        amount: Optional[Decimal] = None,
        payment_method: Optional[str] = None,
        payment_intent_id: Optional[str] = None,
        acting_user=None,
    ) -> Booking:
        """
        Record a successful payment.

        A full payment confirms the booking. A deposit moves it to
        deposit_paid and records what is still owed; without an explicit
        amount the policy's deposit share of the total is used. Repeated
        confirmations of an already paid booking succeed and update the
        payment details. Availability is not re-checked here; on PostgreSQL
        the exclusion constraint rejects a confirmation that would overlap
        another confirmed stay.

        Raises:
            BookingNotFoundError: Unknown booking
            ValidationError: Deposit amount outside 0..total
            InvalidBookingStateError: Booking cancelled or completed
            BookingConflictError: Database rejected an overlapping confirmation
        """
        booking = self.get_booking(booking_id, acting_user)
        changes = {}
        if payment_method is not None:
            changes["payment_method"] = payment_method
        if payment_intent_id is not None:
            changes["payment_intent_id"] = payment_intent_id

        if is_deposit:
            deposit = self.policy.deposit_for(booking.total_price) if amount is None else Decimal(amount)
            if deposit < 0 or deposit > booking.total_price:
                raise ValidationError(
                    "Deposit must be between 0 and the booking total",
                    field_errors={"amount": [f"must not exceed {booking.total_price}"]},
                )
            changes["deposit_amount"] = deposit
            changes["remaining_amount"] = booking.total_price - deposit
            return self._transition(booking, BookingStatus.DEPOSIT_PAID, repeatable=True, **changes)

        changes["remaining_amount"] = Decimal("0")
        return self._transition(booking, BookingStatus.CONFIRMED, repeatable=True, **changes)

    def attach_payment_intent(self, booking_id: int, payment_intent_id: str, acting_user=None) -> Booking:
        """Store the external payment provider reference on a booking."""
        booking = self.get_booking(booking_id, acting_user)
        if booking.status in BookingStatus.terminal():
            raise InvalidBookingStateError(
                current=booking.status.value,
                target=booking.status.value,
                booking_id=booking.id,
                message="Cannot attach a payment to a closed booking",
            )
        with self.transaction():
            booking.payment_intent_id = payment_intent_id
        self.db.refresh(booking)
        self._logger.info("Payment intent attached", extra={"booking_id": booking.id})
        return booking

    def settle_walk_in_payment(
        self,
        booking_id: int,
        payment_type: Union[PaymentType, str] = PaymentType.FULL,
        payment_method: str = "cash",
    ) -> Booking:
        """
        Front desk payment for a walk-in guest, who must pay in full.

        Raises:
            ValidationError: Any payment type other than full
        """
        if PaymentType(payment_type) != PaymentType.FULL:
            raise ValidationError(
                "Walk-in customers must pay the full amount",
                field_errors={"payment_type": ["must be 'full' for walk-in bookings"]},
            )
        booking = self.repository.get_by_id(booking_id)
        return self._transition(
            booking,
            BookingStatus.CONFIRMED,
            repeatable=True,
            payment_method=payment_method,
            deposit_amount=None,
            remaining_amount=Decimal("0"),
        )

    def check_in_payment(self, booking_id: int, payment_method: str = "cash") -> Booking:
        """Settle the remaining balance at check-in."""
        booking = self.repository.get_by_id(booking_id)
        return self._transition(
            booking,
            BookingStatus.CONFIRMED,
            repeatable=True,
            payment_method=payment_method,
            remaining_amount=Decimal("0"),
        )

    # -------------------------------------------------------------------------
    # Admin transitions
    # -------------------------------------------------------------------------

    def confirm_booking(self, booking_id: int) -> Booking:
        """
        Admin confirmation: a pending booking becomes deposit_paid, a booking
        with a deposit becomes confirmed. Confirming a confirmed booking again
        returns it unchanged.
        """
        booking = self.repository.get_by_id(booking_id)
        if booking.status == BookingStatus.PENDING:
            return self._transition(booking, BookingStatus.DEPOSIT_PAID)
        return self._transition(booking, BookingStatus.CONFIRMED, repeatable=True)

    def complete_booking(self, booking_id: int) -> Booking:
        booking = self.repository.get_by_id(booking_id)
        return self._transition(booking, BookingStatus.COMPLETED)

    def delete_booking(self, booking_id: int) -> Booking:
        """Admin delete: cancels the booking without computing a refund."""
        booking = self.repository.get_by_id(booking_id)
        return self._transition(booking, BookingStatus.CANCELLED)

    # -------------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------------

    @track_performance("cancel_booking")
    def cancel_booking(
        self,
        booking_id: int,
        acting_user,
        now: Optional[datetime] = None,
    ) -> CancellationResult:
        """
        Cancel a booking and quote the refund it is entitled to.

        Hours until check-in are measured from `now` to the start (00:00
        UTC) of the check-in day. The refund is advisory; no money moves.

        Raises:
            BookingNotFoundError: Unknown booking
            AuthorizationError: Acting user neither owns the booking nor is admin
            InvalidBookingStateError: Booking already cancelled or completed
        """
        booking = self.repository.get_by_id(booking_id)
        self._ensure_can_access(booking, acting_user)
        validate_transition(booking.status, BookingStatus.CANCELLED, booking_id=booking.id)

        now = now or self.clock()
        hours = hours_between(now, booking.check_in_at)
        quote = self.policy.refund_policy.calculate(booking.total_price, hours)

        self._transition(booking, BookingStatus.CANCELLED)
        self._logger.info(
            f"Booking {booking.id} cancelled with {quote.refund_percentage}% refund",
            extra={
                "booking_id": booking.id,
                "hours_until_check_in": round(hours, 2),
                "refund_percentage": quote.refund_percentage,
                "refund_amount": str(quote.refund_amount),
            },
        )
        return CancellationResult(booking=booking, refund=quote)
