"""
Database enums shared by models and schemas.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    CUSTOMER = "customer"
    ADMIN = "admin"


class RoomType(str, enum.Enum):
    """Room category."""
    STANDARD = "standard"
    DELUXE = "deluxe"
    SUITE = "suite"
    PRESIDENTIAL = "presidential"


class RoomStatus(str, enum.Enum):
    """
    Room status as set by admins.

    Only AVAILABLE rooms are offered; BOOKED and MAINTENANCE act as
    overrides that hide a room whatever its bookings are.
    """
    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    DEPOSIT_PAID = "deposit_paid"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @classmethod
    def terminal(cls) -> frozenset:
        return frozenset({cls.COMPLETED, cls.CANCELLED})

    @classmethod
    def revenue(cls) -> frozenset:
        """Statuses counted as earned revenue."""
        return frozenset({cls.CONFIRMED, cls.COMPLETED})


class PaymentType(str, enum.Enum):
    """How much of the total a payment settles."""
    FULL = "full"
    DEPOSIT = "deposit"
