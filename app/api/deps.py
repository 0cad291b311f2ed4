"""
FastAPI dependencies shared by the v1 routers.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    router = APIRouter()

    @router.get("/bookings")
    def list_bookings(current_user = Depends(deps.get_current_user)):
        ...
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.security import CurrentUser, get_current_user, require_admin
from app.db.session import get_db
from app.services.admin.admin_stats_service import AdminStatsService
from app.services.booking.availability_service import AvailabilityService
from app.services.booking.booking_service import BookingService
from app.services.room.room_service import RoomService

__all__ = [
    "CurrentUser",
    "get_db",
    "get_current_user",
    "require_admin",
    "get_availability_service",
    "get_booking_service",
    "get_room_service",
    "get_admin_stats_service",
]


def get_availability_service(db: Session = Depends(get_db)) -> AvailabilityService:
    return AvailabilityService(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService.for_session(db)


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService.for_session(db)


def get_admin_stats_service(db: Session = Depends(get_db)) -> AdminStatsService:
    return AdminStatsService(db)
