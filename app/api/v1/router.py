"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel booking service
"""

from fastapi import APIRouter

from app.api.v1 import admin, bookings, payments, rooms
from app.config.settings import settings

# Create main API v1 router with proper configuration
router = APIRouter(
    responses={
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"}
    }
)

router.include_router(rooms.router, prefix="/rooms", tags=["Rooms"])
router.include_router(bookings.router, prefix="/bookings", tags=["Bookings"])
router.include_router(payments.router, prefix="/payments", tags=["Payments"])
router.include_router(admin.router, prefix="/admin", tags=["Admin"])


@router.get("/health", tags=["System Health"])
async def api_health_check():
    """
    API health check
    """
    return {
        "status": "healthy",
        "version": settings.API_VERSION,
        "api_version": "v1",
        "environment": settings.ENVIRONMENT,
    }
