"""Admin schemas."""

from app.schemas.admin.admin_stats import (
    AdminStatsResponse,
    ChartDataResponse,
    MonthlyRevenue,
)

__all__ = ["AdminStatsResponse", "ChartDataResponse", "MonthlyRevenue"]
