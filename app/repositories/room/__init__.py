"""Room repositories."""

from app.repositories.room.room_repository import RoomRepository

__all__ = ["RoomRepository"]
