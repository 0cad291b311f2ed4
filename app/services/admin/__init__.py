"""Admin services."""

from app.services.admin.admin_stats_service import (
    AdminStats,
    AdminStatsService,
    ChartData,
    compute_admin_stats,
    compute_chart_data,
)

__all__ = [
    "AdminStats",
    "AdminStatsService",
    "ChartData",
    "compute_admin_stats",
    "compute_chart_data",
]
