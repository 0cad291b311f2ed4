"""Booking repositories."""

from app.repositories.booking.booking_repository import BookingRepository

__all__ = ["BookingRepository"]
