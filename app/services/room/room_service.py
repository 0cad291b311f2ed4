"""
Room administration: listing, creation, updates and removal.
"""

from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEntryError
from app.models.booking.booking import Booking
from app.models.room.room import Room
from app.repositories.room.room_repository import RoomRepository
from app.schemas.room.room_base import RoomCreate, RoomUpdate
from app.services.base import BaseService


class RoomService(BaseService[Room, RoomRepository]):
    """Room CRUD for the admin back office."""

    @classmethod
    def for_session(cls, db_session: Session) -> "RoomService":
        return cls(RoomRepository(db_session), db_session)

    def list_rooms(self) -> List[Room]:
        return self.repository.find_all()

    def get_room(self, room_id: int) -> Room:
        return self.repository.get_by_id(room_id)

    def _ensure_number_free(self, number: str, room_id: int = None) -> None:
        existing = self.repository.find_by_number(number)
        if existing is not None and existing.id != room_id:
            raise DuplicateEntryError(
                f"Room number {number} already exists",
                field="number",
                value=number,
                table="rooms",
            )

    def create_room(self, request: RoomCreate) -> Room:
        """
        Create a room.

        Raises:
            DuplicateEntryError: Room number already used
        """
        self._ensure_number_free(request.number)
        room = self.repository.create(Room(**request.model_dump()))
        self._logger.info(f"Room {room.number} created", extra={"room_id": room.id})
        return room

    def update_room(self, room_id: int, request: RoomUpdate) -> Room:
        """Apply the fields that were set on `request`."""
        data = request.model_dump(exclude_unset=True)
        if data.get("number") is not None:
            self._ensure_number_free(data["number"], room_id)
        return self.repository.update(room_id, data)

    def delete_room(self, room_id: int) -> None:
        """Delete a room together with its bookings."""
        room = self.repository.get_by_id(room_id)
        with self.transaction():
            removed = (
                self.db.query(Booking)
                .filter(Booking.room_id == room.id)
                .delete(synchronize_session="fetch")
            )
            self.db.delete(room)
        self._logger.info(
            f"Room {room_id} deleted",
            extra={"room_id": room_id, "bookings_removed": removed},
        )
