"""
Booking model.

A booking reserves one room for the half-open night range
[check_in, check_out). Only bookings in a blocking status hide the room
from availability; on PostgreSQL an exclusion constraint additionally
guarantees that no two confirmed bookings of a room overlap.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    DDL,
    CheckConstraint,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    event,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import BaseModel
from app.models.base.enums import BookingStatus
from app.models.base.mixins import TimestampMixin
from app.utils.date_utils import start_of_day

if TYPE_CHECKING:
    from app.models.room.room import Room
    from app.models.user.user import User

__all__ = ["Booking"]


class Booking(BaseModel, TimestampMixin):
    """
    Room reservation.

    Attributes:
        check_in: First night of the stay
        check_out: Departure date, exclusive
        total_price: Price quoted at creation time
        status: Lifecycle status, always pending on creation
        deposit_amount: Amount paid as deposit, if any
        remaining_amount: Amount still owed
    """

    __tablename__ = "bookings"

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Stay
    check_in: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    check_out: Mapped[date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[str] = mapped_column(String(5), nullable=False, default="14:00")
    check_out_time: Mapped[str] = mapped_column(String(5), nullable=False, default="12:00")
    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Status
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )

    # Payment
    total_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    deposit_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    remaining_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    room: Mapped["Room"] = relationship("Room", back_populates="bookings", lazy="joined")
    user: Mapped["User"] = relationship("User", back_populates="bookings", lazy="joined")

    __table_args__ = (
        Index("ix_booking_room_dates", "room_id", "check_in", "check_out"),
        Index("ix_booking_status_created", "status", "created_at"),
        CheckConstraint("check_out > check_in", name="ck_booking_dates_ordered"),
        CheckConstraint("guests >= 1", name="ck_booking_guests_positive"),
        CheckConstraint("total_price >= 0", name="ck_booking_total_positive"),
    )

    @validates("guests")
    def validate_guests(self, key: str, value: int) -> int:
        if value is not None and value < 1:
            raise ValueError("A booking needs at least one guest")
        return value

    @validates("total_price", "deposit_amount", "remaining_amount")
    def validate_amounts(self, key: str, value: Optional[Decimal]) -> Optional[Decimal]:
        """Validate monetary amounts are non-negative."""
        if value is not None and Decimal(value) < 0:
            raise ValueError(f"{key} cannot be negative")
        return value

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    @property
    def check_in_at(self) -> datetime:
        """Start of the check-in day in UTC, the reference point for refunds."""
        return start_of_day(self.check_in)

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, room_id={self.room_id}, "
            f"{self.check_in}..{self.check_out}, status={self.status})>"
        )


# Confirmed stays of one room must never overlap. SQLite has no exclusion
# constraints, so there the row lock in BookingService is the only guard.
event.listen(
    Booking.__table__,
    "after_create",
    DDL("CREATE EXTENSION IF NOT EXISTS btree_gist").execute_if(dialect="postgresql"),
)
event.listen(
    Booking.__table__,
    "after_create",
    DDL(
        "ALTER TABLE bookings ADD CONSTRAINT no_overlapping_confirmed_bookings "
        "EXCLUDE USING gist (room_id WITH =, daterange(check_in, check_out) WITH &&) "
        "WHERE (status = 'confirmed')"
    ).execute_if(dialect="postgresql"),
)
