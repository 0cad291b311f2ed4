# app/repositories/room/room_repository.py
"""
Room repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import RoomNotFoundError
from app.models.base.enums import RoomStatus
from app.models.room.room import Room
from app.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Data access for rooms."""

    def __init__(self, db: Session):
        super().__init__(Room, db)

    def not_found(self, id):
        return RoomNotFoundError(id)

    def find_by_number(self, number: str) -> Optional[Room]:
        return self.db.query(Room).filter(Room.number == number).first()

    def find_by_status(self, status: RoomStatus) -> List[Room]:
        """Rooms whose admin status equals `status`, ordered by number."""
        return (
            self.db.query(Room)
            .filter(Room.status == status)
            .order_by(Room.number)
            .all()
        )

    def lock_by_id(self, room_id: int) -> Room:
        """
        Load a room holding a row lock until the transaction ends.

        SQLite ignores FOR UPDATE; the lock only applies on server databases.
        """
        room = (
            self.db.query(Room)
            .filter(Room.id == room_id)
            .with_for_update()
            .first()
        )
        if room is None:
            raise self.not_found(room_id)
        return room
