# app/models/room/room.py
"""
Room model.

A room is the bookable unit of the hotel. Its `status` is an admin-set
override: only rooms marked available are ever offered to guests,
regardless of the bookings they hold.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, CheckConstraint, Enum, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import BaseModel
from app.models.base.enums import RoomStatus, RoomType
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = ["Room"]


def _enum_values(enum_cls) -> List[str]:
    return [member.value for member in enum_cls]


class Room(BaseModel, TimestampMixin):
    """
    Hotel room.

    Attributes:
        number: Human facing room number, unique across the hotel
        type: Room category
        price: Nightly price
        capacity: Maximum number of guests
        status: Admin override (available, booked, maintenance)
        amenities: Free form amenity labels
        images: Image URLs
    """

    __tablename__ = "rooms"

    number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="Room number",
    )
    type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="room_type", native_enum=False, values_callable=_enum_values),
        nullable=False,
        index=True,
    )
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        comment="Price per night",
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    status: Mapped[RoomStatus] = mapped_column(
        Enum(RoomStatus, name="room_status", native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=RoomStatus.AVAILABLE,
        index=True,
    )
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    bookings: Mapped[List["Booking"]] = relationship(
        "Booking",
        back_populates="room",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
    )

    __table_args__ = (
        Index("ix_room_type_status", "type", "status"),
        CheckConstraint("capacity >= 1", name="ck_room_capacity_positive"),
        CheckConstraint("price >= 0", name="ck_room_price_positive"),
    )

    @validates("capacity")
    def validate_capacity(self, key: str, value: int) -> int:
        if value is not None and value < 1:
            raise ValueError("Room capacity must be at least 1")
        return value

    @validates("price")
    def validate_price(self, key: str, value: Decimal) -> Decimal:
        if value is not None and Decimal(value) < 0:
            raise ValueError("Room price cannot be negative")
        return value

    @property
    def is_offered(self) -> bool:
        """Whether the admin status allows the room to be booked at all."""
        return self.status == RoomStatus.AVAILABLE

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, number={self.number}, type={self.type})>"
