"""
Utility package initialization and exports
"""

from .date_utils import (
    UTC,
    DateUtilsError,
    as_date,
    hours_between,
    last_n_months,
    month_key,
    now_utc,
    start_of_day,
    to_utc,
    today_utc,
)
from .email import EmailConfig, EmailError, EmailMessage, build_email, send_email

__all__ = [
    "UTC",
    "DateUtilsError",
    "as_date",
    "hours_between",
    "last_n_months",
    "month_key",
    "now_utc",
    "start_of_day",
    "to_utc",
    "today_utc",
    "EmailConfig",
    "EmailError",
    "EmailMessage",
    "build_email",
    "send_email",
]
