"""
Room schemas package.
"""

from app.schemas.room.room_availability import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    DateRangeQuery,
)
from app.schemas.room.room_base import RoomBase, RoomCreate, RoomUpdate
from app.schemas.room.room_response import RoomResponse

__all__ = [
    "AvailabilityCheckRequest",
    "AvailabilityCheckResponse",
    "DateRangeQuery",
    "RoomBase",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
]
