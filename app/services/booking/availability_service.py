"""
Room availability.

A room is available for [check_in, check_out) when its admin status is
`available` and none of its bookings in a blocking status overlaps the
range. Ranges are half-open and compared as calendar dates, so a stay that
checks out on the day another checks in does not conflict.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import BookingStatus, RoomStatus
from app.models.booking.booking import Booking
from app.models.room.room import Room
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.room.room_repository import RoomRepository
from app.services.booking.booking_policy import BookingPolicy
from app.utils.date_utils import as_date

logger = get_logger(__name__)

DateLike = Union[date, datetime]

AVAILABLE_MESSAGE = "Room is available for the selected dates"
UNAVAILABLE_MESSAGE = "Room is not available for the selected dates"


def ranges_overlap(
    check_in: DateLike,
    check_out: DateLike,
    other_check_in: DateLike,
    other_check_out: DateLike,
) -> bool:
    """Half-open overlap test on calendar dates."""
    return as_date(check_in) < as_date(other_check_out) and as_date(check_out) > as_date(other_check_in)


def filter_available_rooms(
    rooms: Iterable[Room],
    bookings: Iterable[Booking],
    check_in: DateLike,
    check_out: DateLike,
    blocking_statuses: Iterable[BookingStatus] = (BookingStatus.CONFIRMED,),
) -> List[Room]:
    """
    Rooms from `rooms` that are offered and free for the range.

    Pure function over already loaded rows; the service feeds it from the
    database.
    """
    blocking = {BookingStatus(s) for s in blocking_statuses}
    taken = {
        booking.room_id
        for booking in bookings
        if BookingStatus(booking.status) in blocking
        and ranges_overlap(check_in, check_out, booking.check_in, booking.check_out)
    }
    return [
        room for room in rooms
        if room.status == RoomStatus.AVAILABLE and room.id not in taken
    ]


@dataclass
class AvailabilityReport:
    """Answer to an availability check."""

    is_available: bool
    available_rooms: List[Room] = field(default_factory=list)
    message: str = ""


class AvailabilityService:
    """
    Read-only availability queries.

    Inverted or empty ranges are not rejected here; request schemas
    validate them before a query reaches this service.
    """

    def __init__(
        self,
        db_session: Session,
        policy: Optional[BookingPolicy] = None,
        room_repository: Optional[RoomRepository] = None,
        booking_repository: Optional[BookingRepository] = None,
    ):
        self.db = db_session
        self.policy = policy or BookingPolicy.from_settings()
        self.rooms = room_repository or RoomRepository(db_session)
        self.bookings = booking_repository or BookingRepository(db_session)

    @property
    def blocking_statuses(self):
        return self.policy.blocking_statuses

    def get_available_rooms(self, check_in: DateLike, check_out: DateLike) -> List[Room]:
        """All rooms that can be booked for [check_in, check_out)."""
        rooms = self.rooms.find_by_status(RoomStatus.AVAILABLE)
        blocking = self.bookings.find_by_statuses(self.blocking_statuses)
        available = filter_available_rooms(
            rooms, blocking, check_in, check_out, self.blocking_statuses
        )
        logger.debug(
            "Availability computed",
            extra={
                "check_in": str(as_date(check_in)),
                "check_out": str(as_date(check_out)),
                "candidate_rooms": len(rooms),
                "available_rooms": len(available),
            },
        )
        return available

    def is_room_available(
        self,
        room: Union[Room, int],
        check_in: DateLike,
        check_out: DateLike,
    ) -> bool:
        """
        Whether one room would appear in get_available_rooms for the range.

        Raises:
            RoomNotFoundError: If a room id is given and does not exist
        """
        if not isinstance(room, Room):
            room = self.rooms.get_by_id(room)
        blocking = self.bookings.find_by_statuses(self.blocking_statuses, room_id=room.id)
        return bool(
            filter_available_rooms([room], blocking, check_in, check_out, self.blocking_statuses)
        )

    def check_availability(
        self,
        check_in: DateLike,
        check_out: DateLike,
        room_id: Optional[int] = None,
    ) -> AvailabilityReport:
        """
        Availability report for one room, or for the hotel as a whole.

        With a room id only that room is reported on and the room list is
        left empty; an unknown room id simply reports unavailable.
        """
        available = self.get_available_rooms(check_in, check_out)
        if room_id is not None:
            is_available = any(room.id == room_id for room in available)
            rooms: List[Room] = []
        else:
            is_available = bool(available)
            rooms = available

        return AvailabilityReport(
            is_available=is_available,
            available_rooms=rooms,
            message=AVAILABLE_MESSAGE if is_available else UNAVAILABLE_MESSAGE,
        )
