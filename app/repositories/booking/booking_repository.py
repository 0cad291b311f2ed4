# app/repositories/booking/booking_repository.py
"""
Booking repository.

Read helpers for the availability check, per-user listings and the admin
dashboard. Overlap filtering itself is done by the availability service so
that dates are compared the same way on every database.
"""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BookingNotFoundError
from app.models.base.enums import BookingStatus
from app.models.booking.booking import Booking
from app.repositories.base.base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings."""

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    def not_found(self, id):
        return BookingNotFoundError(id)

    def find_by_statuses(
        self,
        statuses: Iterable[BookingStatus],
        room_id: Optional[int] = None,
    ) -> List[Booking]:
        """
        Bookings in any of `statuses`, optionally for one room.

        Args:
            statuses: Statuses to match
            room_id: Restrict to a single room
        """
        statuses = list(statuses)
        if not statuses:
            return []
        query = self.db.query(Booking).filter(Booking.status.in_(statuses))
        if room_id is not None:
            query = query.filter(Booking.room_id == room_id)
        return query.all()

    def find_for_user(self, user_id: int) -> List[Booking]:
        """A user's bookings, newest first."""
        return (
            self.db.query(Booking)
            .filter(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    def find_newest(self, limit: Optional[int] = None) -> List[Booking]:
        """All bookings, newest first."""
        query = self.db.query(Booking).order_by(Booking.created_at.desc(), Booking.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()
