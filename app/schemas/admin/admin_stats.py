"""
Admin dashboard statistics schemas.
"""

from decimal import Decimal
from typing import Dict, List

from pydantic import Field

from app.schemas.booking.booking_response import BookingResponse
from app.schemas.common.base import BaseSchema

__all__ = [
    "MonthlyRevenue",
    "ChartDataResponse",
    "AdminStatsResponse",
]


class MonthlyRevenue(BaseSchema):
    """Revenue earned by bookings created in one calendar month."""

    month: str = Field(..., description="Month as YYYY-MM")
    revenue: Decimal


class ChartDataResponse(BaseSchema):
    """Dashboard chart series."""

    monthly_revenue: List[MonthlyRevenue] = Field(default_factory=list)
    room_distribution: Dict[str, int] = Field(
        default_factory=dict,
        description="Number of rooms per room type",
    )
    booking_status: Dict[str, int] = Field(
        default_factory=dict,
        description="Number of bookings per status",
    )


class AdminStatsResponse(BaseSchema):
    """Headline dashboard figures."""

    total_rooms: int
    total_bookings: int
    total_customers: int
    occupancy_rate: int = Field(..., description="Confirmed bookings per room, in percent")
    total_revenue: Decimal
    recent_bookings: List[BookingResponse] = Field(default_factory=list)
