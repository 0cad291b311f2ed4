"""
Room endpoints: public listing and availability, admin CRUD.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.core.exceptions import InvalidDateRangeError
from app.schemas.common.response import MessageResponse
from app.schemas.room import (
    AvailabilityCheckRequest,
    AvailabilityCheckResponse,
    RoomCreate,
    RoomResponse,
    RoomUpdate,
)
from app.services.booking.availability_service import AvailabilityService
from app.services.room.room_service import RoomService

router = APIRouter()


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    check_in: Optional[date] = Query(None, description="First night"),
    check_out: Optional[date] = Query(None, description="Departure date"),
    rooms: RoomService = Depends(deps.get_room_service),
    availability: AvailabilityService = Depends(deps.get_availability_service),
):
    """
    List rooms. With both dates, only rooms available for the stay.
    """
    if check_in is None and check_out is None:
        return rooms.list_rooms()
    if check_in is None or check_out is None:
        raise InvalidDateRangeError(
            "Both check_in and check_out are required to filter by availability",
            start_date=str(check_in) if check_in else None,
            end_date=str(check_out) if check_out else None,
        )
    if check_out <= check_in:
        raise InvalidDateRangeError(start_date=str(check_in), end_date=str(check_out))
    return availability.get_available_rooms(check_in, check_out)


@router.post("/check-availability", response_model=AvailabilityCheckResponse)
def check_availability(
    request: AvailabilityCheckRequest,
    availability: AvailabilityService = Depends(deps.get_availability_service),
):
    report = availability.check_availability(request.check_in, request.check_out, request.room_id)
    return AvailabilityCheckResponse.model_validate(report)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: int, rooms: RoomService = Depends(deps.get_room_service)):
    return rooms.get_room(room_id)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    request: RoomCreate,
    _: deps.CurrentUser = Depends(deps.require_admin),
    rooms: RoomService = Depends(deps.get_room_service),
):
    return rooms.create_room(request)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: int,
    request: RoomUpdate,
    _: deps.CurrentUser = Depends(deps.require_admin),
    rooms: RoomService = Depends(deps.get_room_service),
):
    return rooms.update_room(room_id, request)


@router.delete("/{room_id}", response_model=MessageResponse)
def delete_room(
    room_id: int,
    _: deps.CurrentUser = Depends(deps.require_admin),
    rooms: RoomService = Depends(deps.get_room_service),
):
    rooms.delete_room(room_id)
    return MessageResponse(message=f"Room {room_id} deleted")
