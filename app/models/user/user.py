# app/models/user/user.py
"""
User model.

Customers own bookings; admins may act on any booking and manage rooms.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.models.base.base_model import BaseModel
from app.models.base.enums import UserRole
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = ["User"]


class User(BaseModel, TimestampMixin):
    """
    Registered user, either a customer or an admin.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=UserRole.CUSTOMER,
        index=True,
    )
    preferences: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    is_vip: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    bookings: Mapped[List["Booking"]] = relationship(
        "Booking",
        back_populates="user",
        lazy="select",
    )

    @validates("email")
    def validate_email(self, key: str, value: str) -> str:
        if not value or "@" not in value:
            raise ValueError("Invalid email address")
        return value.lower().strip()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
