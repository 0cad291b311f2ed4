from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.models import BookingStatus, RoomStatus
from app.services.booking import (
    AvailabilityService,
    BookingPolicy,
    filter_available_rooms,
    ranges_overlap,
)

WIDENED = BookingPolicy(
    blocking_statuses=frozenset({
        BookingStatus.PENDING,
        BookingStatus.DEPOSIT_PAID,
        BookingStatus.CONFIRMED,
    })
)


@pytest.fixture
def availability(db, policy) -> AvailabilityService:
    return AvailabilityService(db, policy=policy)


@pytest.mark.parametrize(
    "check_in, check_out, expected",
    [
        (date(2024, 1, 12), date(2024, 1, 14), True),   # straddles the start
        (date(2024, 1, 16), date(2024, 1, 20), True),   # straddles the end
        (date(2024, 1, 14), date(2024, 1, 15), True),   # inside
        (date(2024, 1, 10), date(2024, 1, 20), True),   # encloses
        (date(2024, 1, 18), date(2024, 1, 20), False),  # starts on checkout day
        (date(2024, 1, 10), date(2024, 1, 15), True),
        (date(2024, 1, 10), date(2024, 1, 13), False),  # ends on check-in day
    ],
)
def test_ranges_overlap_is_half_open(check_in, check_out, expected):
    assert ranges_overlap(check_in, check_out, date(2024, 1, 13), date(2024, 1, 18)) is expected


def test_ranges_overlap_truncates_datetimes_to_dates():
    """Time of day never matters, only the calendar date."""
    assert not ranges_overlap(
        datetime(2024, 1, 18, 23, 0),
        datetime(2024, 1, 20, 8, 0),
        date(2024, 1, 13),
        datetime(2024, 1, 18, 1, 0),
    )


def test_filter_available_rooms_pure():
    rooms = [
        SimpleNamespace(id=1, status=RoomStatus.AVAILABLE),
        SimpleNamespace(id=2, status=RoomStatus.AVAILABLE),
        SimpleNamespace(id=3, status=RoomStatus.MAINTENANCE),
    ]
    bookings = [
        SimpleNamespace(room_id=1, status="confirmed", check_in=date(2024, 1, 15), check_out=date(2024, 1, 18)),
        SimpleNamespace(room_id=2, status="pending", check_in=date(2024, 1, 15), check_out=date(2024, 1, 18)),
    ]

    available = filter_available_rooms(rooms, bookings, date(2024, 1, 16), date(2024, 1, 17))

    assert [r.id for r in available] == [2]


def test_room_without_bookings_is_available(availability, room):
    rooms = availability.get_available_rooms(date(2024, 1, 15), date(2024, 1, 18))
    assert [r.id for r in rooms] == [room.id]


def test_confirmed_booking_hides_room_for_overlapping_range(availability, room, customer, make_booking):
    make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

    assert availability.get_available_rooms(date(2024, 1, 17), date(2024, 1, 19)) == []
    assert availability.get_available_rooms(date(2024, 1, 12), date(2024, 1, 16)) == []


def test_back_to_back_stays_do_not_conflict(availability, room, customer, make_booking):
    make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

    after = availability.get_available_rooms(date(2024, 1, 18), date(2024, 1, 20))
    before = availability.get_available_rooms(date(2024, 1, 13), date(2024, 1, 15))

    assert [r.id for r in after] == [room.id]
    assert [r.id for r in before] == [room.id]


@pytest.mark.parametrize(
    "status",
    [BookingStatus.PENDING, BookingStatus.DEPOSIT_PAID, BookingStatus.CANCELLED, BookingStatus.COMPLETED],
)
def test_non_confirmed_bookings_do_not_block_by_default(availability, room, customer, make_booking, status):
    make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=status)

    rooms = availability.get_available_rooms(date(2024, 1, 16), date(2024, 1, 17))

    assert [r.id for r in rooms] == [room.id]


def test_widened_policy_blocks_pending_bookings(db, room, customer, make_booking):
    make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18), status=BookingStatus.PENDING)

    availability = AvailabilityService(db, policy=WIDENED)

    assert availability.get_available_rooms(date(2024, 1, 16), date(2024, 1, 17)) == []


@pytest.mark.parametrize("status", [RoomStatus.MAINTENANCE, RoomStatus.BOOKED])
def test_room_status_override_excludes_room(availability, make_room, status):
    make_room("501", status=status)

    assert availability.get_available_rooms(date(2024, 1, 15), date(2024, 1, 18)) == []


def test_only_conflicting_rooms_are_dropped(availability, make_room, customer, make_booking):
    busy = make_room("101")
    free = make_room("102")
    make_booking(customer, busy, date(2024, 1, 15), date(2024, 1, 18))

    rooms = availability.get_available_rooms(date(2024, 1, 15), date(2024, 1, 18))

    assert [r.id for r in rooms] == [free.id]


def test_is_room_available_matches_listing(availability, room, customer, make_booking):
    make_booking(customer, room, date(2024, 1, 15), date(2024, 1, 18))

    assert availability.is_room_available(room.id, date(2024, 1, 16), date(2024, 1, 17)) is False
    assert availability.is_room_available(room, date(2024, 1, 18), date(2024, 1, 19)) is True


def test_check_availability_for_single_room_returns_empty_list(availability, room):
    report = availability.check_availability(date(2024, 1, 15), date(2024, 1, 18), room_id=room.id)

    assert report.is_available is True
    assert report.available_rooms == []


def test_check_availability_unknown_room_reports_unavailable(availability, room):
    report = availability.check_availability(date(2024, 1, 15), date(2024, 1, 18), room_id=9999)

    assert report.is_available is False
    assert "not available" in report.message


def test_check_availability_without_room_lists_free_rooms(availability, make_room):
    make_room("101")
    make_room("102")

    report = availability.check_availability(date(2024, 1, 15), date(2024, 1, 18))

    assert report.is_available is True
    assert len(report.available_rooms) == 2
