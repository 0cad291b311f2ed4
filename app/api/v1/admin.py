"""
Admin dashboard endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.schemas.admin import AdminStatsResponse, ChartDataResponse
from app.services.admin.admin_stats_service import AdminStatsService
from app.services.booking.booking_notification_service import admin_notification_hub

router = APIRouter()


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    _: deps.CurrentUser = Depends(deps.require_admin),
    stats: AdminStatsService = Depends(deps.get_admin_stats_service),
):
    return AdminStatsResponse.model_validate(stats.get_stats())


@router.get("/chart-data", response_model=ChartDataResponse)
def get_chart_data(
    _: deps.CurrentUser = Depends(deps.require_admin),
    stats: AdminStatsService = Depends(deps.get_admin_stats_service),
):
    return ChartDataResponse.model_validate(stats.get_chart_data())


@router.get("/notifications", response_model=List[dict])
def list_notifications(
    limit: Optional[int] = Query(20, ge=1, le=100),
    _: deps.CurrentUser = Depends(deps.require_admin),
):
    """Most recent admin notifications, newest first."""
    return [n.to_dict() for n in admin_notification_hub.recent(limit)]
