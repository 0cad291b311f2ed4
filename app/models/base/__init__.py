"""
Base models package.

Provides the base class, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, BaseModel
from app.models.base.enums import (
    BookingStatus,
    PaymentType,
    RoomStatus,
    RoomType,
    UserRole,
)
from app.models.base.mixins import TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "BookingStatus",
    "PaymentType",
    "RoomStatus",
    "RoomType",
    "UserRole",
]
