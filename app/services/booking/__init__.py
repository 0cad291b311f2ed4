"""
Booking services package.
"""

from app.services.booking.availability_service import (
    AvailabilityReport,
    AvailabilityService,
    filter_available_rooms,
    ranges_overlap,
)
from app.services.booking.booking_notification_service import (
    AdminNotification,
    AdminNotificationHub,
    BookingNotificationService,
    admin_notification_hub,
)
from app.services.booking.booking_policy import BookingPolicy, RefundPolicy, RefundQuote
from app.services.booking.booking_service import BookingService, CancellationResult
from app.services.booking.booking_state import can_transition, validate_transition

__all__ = [
    "AvailabilityReport",
    "AvailabilityService",
    "filter_available_rooms",
    "ranges_overlap",
    "AdminNotification",
    "AdminNotificationHub",
    "BookingNotificationService",
    "admin_notification_hub",
    "BookingPolicy",
    "RefundPolicy",
    "RefundQuote",
    "BookingService",
    "CancellationResult",
    "can_transition",
    "validate_transition",
]
