"""
Custom Exceptions for the Hotel Booking Service

This module defines custom exception classes used throughout the application
for better error handling and debugging. Every exception carries a stable
error code; the HTTP layer renders them with `to_dict()`.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Business logic errors
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Resource specific errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class InvalidBookingStateError(BaseAppException):
    """Exception raised when a booking cannot move to the requested status"""

    def __init__(
        self,
        current: str,
        target: str,
        booking_id: Optional[int] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"Invalid booking state transition: {current} -> {target}"
        details = {
            "booking_id": booking_id,
            "current_status": current,
            "target_status": target
        }
        super().__init__(message, ErrorCode.INVALID_STATE, details, 409)
        self.current = current
        self.target = target


# ========================================
# Resource Not Found Exceptions
# ========================================

class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user is not found"""

    def __init__(self, user_id: Optional[Any] = None):
        super().__init__("User", user_id)
        self.error_code = ErrorCode.USER_NOT_FOUND


class RoomNotFoundError(ResourceNotFoundError):
    """Exception raised when a room is not found"""

    def __init__(self, room_id: Optional[Any] = None):
        super().__init__("Room", room_id)
        self.error_code = ErrorCode.ROOM_NOT_FOUND


class BookingNotFoundError(ResourceNotFoundError):
    """Exception raised when a booking is not found"""

    def __init__(self, booking_id: Optional[Any] = None):
        super().__init__("Booking", booking_id)
        self.error_code = ErrorCode.BOOKING_NOT_FOUND


# ========================================
# Authentication & Authorization Exceptions
# ========================================

class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details, 401)


class TokenExpiredError(AuthenticationError):
    """Exception raised when a token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Exception raised when token is invalid"""

    def __init__(self, message: str = "Invalid token", reason: Optional[str] = None):
        details = {"reason": reason} if reason else {}
        super().__init__(message, ErrorCode.TOKEN_INVALID, details)


class AuthorizationError(BaseAppException):
    """Exception raised when the acting user may not perform an action"""

    def __init__(
        self,
        message: str = "Access denied",
        required_permission: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.AUTHORIZATION_FAILED
    ):
        details = {"required_permission": required_permission} if required_permission else {}
        super().__init__(message, error_code, details, 403)


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class DuplicateEntryError(DatabaseError):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        value: Optional[str] = None,
        table: Optional[str] = None
    ):
        super().__init__(message, table=table, error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)
        self.details.update({"field": field, "value": value})


# ========================================
# Business Logic Exceptions
# ========================================

class BookingError(BaseAppException):
    """Base class for booking-related exceptions"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        booking_id: Optional[int] = None,
        room_id: Optional[int] = None,
        status_code: int = 400
    ):
        details = {
            "booking_id": booking_id,
            "room_id": room_id
        }
        super().__init__(message, error_code, details, status_code)


class BookingConflictError(BookingError):
    """Exception raised when booking conflicts with existing bookings"""

    def __init__(
        self,
        message: str = "Booking conflict detected",
        room_id: Optional[int] = None,
        booking_id: Optional[int] = None
    ):
        super().__init__(
            message,
            ErrorCode.BOOKING_CONFLICT,
            booking_id=booking_id,
            room_id=room_id,
            status_code=409
        )


class RoomUnavailableError(BookingError):
    """Exception raised when room is not available for booking"""

    def __init__(
        self,
        message: str = "Room is not available for the selected dates",
        room_id: Optional[int] = None,
        reason: Optional[str] = None
    ):
        super().__init__(
            message,
            ErrorCode.ROOM_UNAVAILABLE,
            room_id=room_id,
            status_code=409
        )
        if reason:
            self.details["reason"] = reason


class InvalidDateRangeError(BaseAppException):
    """Exception raised when date range is invalid"""

    def __init__(
        self,
        message: str = "Check-out date must be after check-in date",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "start_date": start_date,
            "end_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 422)


# ========================================
# Utility Functions
# ========================================

def handle_database_exception(exc: Exception) -> BaseAppException:
    """Convert database exceptions to application exceptions"""
    error_message = str(exc)

    if "duplicate" in error_message.lower() or "unique constraint" in error_message.lower():
        return DuplicateEntryError(f"Duplicate entry: {error_message}")
    elif "exclusion constraint" in error_message.lower() or "no_overlapping" in error_message.lower():
        return BookingConflictError("Room already has a confirmed booking for these dates")
    else:
        return DatabaseError(f"Database error: {error_message}")


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'InvalidBookingStateError',
    'UserNotFoundError',
    'RoomNotFoundError',
    'BookingNotFoundError',
    'AuthenticationError',
    'TokenExpiredError',
    'InvalidTokenError',
    'AuthorizationError',
    'DatabaseError',
    'DuplicateEntryError',
    'BookingError',
    'BookingConflictError',
    'RoomUnavailableError',
    'InvalidDateRangeError',
    'handle_database_exception',
]
