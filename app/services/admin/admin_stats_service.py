"""
Admin dashboard statistics.

`compute_admin_stats` and `compute_chart_data` are pure aggregations over
rooms and bookings; `AdminStatsService` loads the rows and delegates.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.logging import get_logger
from app.models.base.enums import BookingStatus, RoomType
from app.models.booking.booking import Booking
from app.models.room.room import Room
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.room.room_repository import RoomRepository
from app.utils.date_utils import last_n_months, month_key, today_utc

logger = get_logger(__name__)

CHART_MONTHS = 6


@dataclass
class AdminStats:
    total_rooms: int
    total_bookings: int
    total_customers: int
    occupancy_rate: int
    total_revenue: Decimal
    recent_bookings: List[Booking] = field(default_factory=list)


@dataclass
class ChartData:
    monthly_revenue: List[Dict[str, object]] = field(default_factory=list)
    room_distribution: Dict[str, int] = field(default_factory=dict)
    booking_status: Dict[str, int] = field(default_factory=dict)


def _newest_first(bookings: Sequence[Booking]) -> List[Booking]:
    return sorted(
        bookings,
        key=lambda b: (b.created_at is not None, b.created_at.timestamp() if b.created_at else 0, b.id or 0),
        reverse=True,
    )


def occupancy_rate(confirmed: int, total_rooms: int) -> int:
    """Confirmed bookings per room as a percentage, rounded half up."""
    if total_rooms == 0:
        return 0
    rate = Decimal(confirmed) * 100 / Decimal(total_rooms)
    return int(rate.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_admin_stats(
    rooms: Sequence[Room],
    bookings: Sequence[Booking],
    recent_limit: int = 5,
) -> AdminStats:
    """
    Headline dashboard figures.

    Revenue counts confirmed and completed bookings; occupancy counts
    confirmed bookings only. Both are zero on empty data.
    """
    confirmed = sum(1 for b in bookings if BookingStatus(b.status) == BookingStatus.CONFIRMED)
    revenue = sum(
        (Decimal(b.total_price) for b in bookings if BookingStatus(b.status) in BookingStatus.revenue()),
        Decimal("0"),
    )
    return AdminStats(
        total_rooms=len(rooms),
        total_bookings=len(bookings),
        total_customers=len({b.user_id for b in bookings}),
        occupancy_rate=occupancy_rate(confirmed, len(rooms)),
        total_revenue=revenue,
        recent_bookings=_newest_first(bookings)[:recent_limit],
    )


def compute_chart_data(
    rooms: Sequence[Room],
    bookings: Sequence[Booking],
    today: Optional[date] = None,
    months: int = CHART_MONTHS,
) -> ChartData:
    """
    Series for the dashboard charts.

    Monthly revenue covers the last `months` months ending with the current
    one, grouping earning bookings by the month they were created in.
    """
    window = [f"{year:04d}-{month:02d}" for year, month in last_n_months(months, today)]
    revenue = {key: Decimal("0") for key in window}
    for booking in bookings:
        if BookingStatus(booking.status) not in BookingStatus.revenue() or booking.created_at is None:
            continue
        key = month_key(booking.created_at)
        if key in revenue:
            revenue[key] += Decimal(booking.total_price)

    room_counts = Counter(RoomType(room.type).value for room in rooms)
    status_counts = Counter(BookingStatus(b.status).value for b in bookings)

    return ChartData(
        monthly_revenue=[{"month": key, "revenue": revenue[key]} for key in window],
        room_distribution={t.value: room_counts.get(t.value, 0) for t in RoomType},
        booking_status={s.value: status_counts.get(s.value, 0) for s in BookingStatus},
    )


class AdminStatsService:
    """Loads rooms and bookings and aggregates them for the dashboard."""

    def __init__(self, db_session: Session):
        self.db = db_session
        self.rooms = RoomRepository(db_session)
        self.bookings = BookingRepository(db_session)

    def get_stats(self) -> AdminStats:
        stats = compute_admin_stats(
            self.rooms.find_all(),
            self.bookings.find_newest(),
            recent_limit=settings.RECENT_BOOKINGS_LIMIT,
        )
        logger.debug(
            "Admin stats computed",
            extra={"total_rooms": stats.total_rooms, "total_bookings": stats.total_bookings},
        )
        return stats

    def get_chart_data(self, today: Optional[date] = None) -> ChartData:
        return compute_chart_data(
            self.rooms.find_all(),
            self.bookings.find_newest(),
            today=today or today_utc(),
        )
