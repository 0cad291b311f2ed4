"""
Booking notifications: in-process admin feed and guest confirmation emails.

Delivery is best effort. A failing subscriber or SMTP server is logged and
never propagates to the booking that triggered it.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Any, Callable, Deque, Dict, List, Optional
from uuid import uuid4

from app.config.settings import settings
from app.core.logging import get_logger
from app.models.booking.booking import Booking
from app.utils.date_utils import now_utc
from app.utils.email import EmailConfig, EmailMessage, build_email, is_valid_email, send_email

logger = get_logger(__name__)


@dataclass
class AdminNotification:
    """Message pushed to connected admins."""

    type: str
    title: str
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=now_utc)
    id: str = field(default_factory=lambda: str(uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "data": self.data,
            "created_at": self.created_at.isoformat(),
        }


Subscriber = Callable[[AdminNotification], None]


class AdminNotificationHub:
    """
    Fan-out of admin notifications to subscriber callables.

    The most recent notifications are kept so that admins who poll instead
    of subscribing can still catch up.
    """

    def __init__(self, buffer_size: int = 100):
        self._subscribers: List[Subscriber] = []
        self._recent: Deque[AdminNotification] = deque(maxlen=buffer_size)
        self._lock = Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, notification: AdminNotification) -> int:
        """
        Deliver to every subscriber.

        Returns:
            Number of subscribers that received the notification
        """
        with self._lock:
            self._recent.append(notification)
            subscribers = list(self._subscribers)

        delivered = 0
        for callback in subscribers:
            try:
                callback(notification)
                delivered += 1
            except Exception:
                logger.warning(
                    "Admin notification subscriber failed",
                    extra={"notification_type": notification.type},
                    exc_info=True,
                )
        return delivered

    def recent(self, limit: Optional[int] = None) -> List[AdminNotification]:
        """Newest first."""
        with self._lock:
            items = list(reversed(self._recent))
        return items[:limit] if limit is not None else items

    def clear(self) -> None:
        with self._lock:
            self._recent.clear()


admin_notification_hub = AdminNotificationHub(buffer_size=settings.ADMIN_NOTIFICATION_BUFFER)


class BookingNotificationService:
    """
    Produces booking-specific notifications.
    """

    def __init__(
        self,
        hub: Optional[AdminNotificationHub] = None,
        email_enabled: Optional[bool] = None,
        email_config: Optional[EmailConfig] = None,
        sender: Callable[[EmailMessage, Optional[EmailConfig]], None] = send_email,
    ):
        self.hub = hub or admin_notification_hub
        self.email_enabled = settings.EMAIL_ENABLED if email_enabled is None else email_enabled
        self.email_config = email_config
        self._send = sender

    def notify_new_booking(self, booking: Booking) -> None:
        """Tell admins about a new booking and send the guest a confirmation."""
        self._notify_admins(booking)
        if self.email_enabled:
            self._send_confirmation(booking)

    def _notify_admins(self, booking: Booking) -> None:
        guest = booking.user.full_name if booking.user else f"user {booking.user_id}"
        room_number = booking.room.number if booking.room else str(booking.room_id)
        notification = AdminNotification(
            type="new_booking",
            title="New booking",
            message=f"{guest} booked room {room_number} from {booking.check_in} to {booking.check_out}",
            data={
                "booking_id": booking.id,
                "room_id": booking.room_id,
                "user_id": booking.user_id,
                "total_price": str(booking.total_price),
            },
        )
        try:
            self.hub.publish(notification)
        except Exception:
            logger.warning(
                "Failed to publish admin notification",
                extra={"booking_id": booking.id},
                exc_info=True,
            )

    def _send_confirmation(self, booking: Booking) -> None:
        user = booking.user
        if user is None or not is_valid_email(user.email):
            logger.info("No deliverable email for booking", extra={"booking_id": booking.id})
            return

        room_number = booking.room.number if booking.room else booking.room_id
        body = (
            f"Dear {user.full_name},\n\n"
            f"Thank you for your booking #{booking.id}.\n"
            f"Room: {room_number}\n"
            f"Check-in: {booking.check_in} from {booking.check_in_time}\n"
            f"Check-out: {booking.check_out} by {booking.check_out_time}\n"
            f"Guests: {booking.guests}\n"
            f"Total: {booking.total_price} {settings.CURRENCY}\n\n"
            f"Your booking is pending until payment is received.\n"
        )
        try:
            message = build_email(
                subject=f"Booking confirmation #{booking.id}",
                to=[user.email],
                body_text=body,
            )
            self._send(message, self.email_config)
            logger.info("Booking confirmation sent", extra={"booking_id": booking.id})
        except Exception:
            logger.warning(
                "Failed to send booking confirmation",
                extra={"booking_id": booking.id},
                exc_info=True,
            )
