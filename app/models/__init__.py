# models/__init__.py
from app.models.base import Base, BaseModel, BookingStatus, RoomStatus, RoomType, UserRole
from app.models.booking import Booking
from app.models.room import Room
from app.models.user import User

__all__ = [
    "Base",
    "BaseModel",
    "Booking",
    "BookingStatus",
    "Room",
    "RoomStatus",
    "RoomType",
    "User",
    "UserRole",
]
