"""
Booking policies: refund tiers for cancellations and the rules that decide
which bookings block a room.

Policies are plain value objects built from settings; tests inject their
own instances.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import FrozenSet, Iterable, Optional

from app.config.settings import Settings, settings as app_settings
from app.models.base.enums import BookingStatus

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class RefundQuote:
    """Refund owed for a cancellation. Advisory only."""

    refund_amount: Decimal
    refund_percentage: int
    original_amount: Decimal
    hours_until_check_in: float


@dataclass(frozen=True)
class RefundPolicy:
    """
    Tiered refund policy.

    Cancelling more than `full_refund_hours` before check-in refunds
    `full_refund_percentage`; more than `partial_refund_hours` refunds
    `partial_refund_percentage`; anything later refunds nothing. Both
    thresholds are strict, so exactly 48h falls in the partial tier and
    exactly 24h in the no-refund tier.
    """

    full_refund_hours: float = 48
    partial_refund_hours: float = 24
    full_refund_percentage: int = 100
    partial_refund_percentage: int = 50

    def __post_init__(self):
        if self.partial_refund_hours > self.full_refund_hours:
            raise ValueError("partial_refund_hours cannot exceed full_refund_hours")
        for pct in (self.full_refund_percentage, self.partial_refund_percentage):
            if not 0 <= pct <= 100:
                raise ValueError("Refund percentages must be between 0 and 100")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "RefundPolicy":
        settings = settings or app_settings
        return cls(
            full_refund_hours=settings.REFUND_FULL_THRESHOLD_HOURS,
            partial_refund_hours=settings.REFUND_PARTIAL_THRESHOLD_HOURS,
            full_refund_percentage=settings.REFUND_FULL_PERCENTAGE,
            partial_refund_percentage=settings.REFUND_PARTIAL_PERCENTAGE,
        )

    def percentage_for(self, hours_until_check_in: float) -> int:
        if hours_until_check_in > self.full_refund_hours:
            return self.full_refund_percentage
        if hours_until_check_in > self.partial_refund_hours:
            return self.partial_refund_percentage
        return 0

    def calculate(self, total: Decimal, hours_until_check_in: float) -> RefundQuote:
        """Refund for cancelling a booking worth `total`, rounded to cents."""
        total = Decimal(total)
        percentage = self.percentage_for(hours_until_check_in)
        amount = (total * percentage / Decimal(100)).quantize(CENTS, rounding=ROUND_HALF_UP)
        return RefundQuote(
            refund_amount=amount,
            refund_percentage=percentage,
            original_amount=total,
            hours_until_check_in=hours_until_check_in,
        )


def _to_statuses(values: Iterable) -> FrozenSet[BookingStatus]:
    return frozenset(BookingStatus(v) for v in values)


@dataclass(frozen=True)
class BookingPolicy:
    """
    Rules applied by the booking lifecycle.

    Attributes:
        refund_policy: Cancellation refund tiers
        blocking_statuses: Booking statuses that make a room unavailable
            for overlapping dates. The default, confirmed only, lets
            pending bookings overlap each other.
        deposit_percentage: Share of the total requested as deposit
        check_in_time / check_out_time: Defaults stamped on new bookings
    """

    refund_policy: RefundPolicy = field(default_factory=RefundPolicy)
    blocking_statuses: FrozenSet[BookingStatus] = frozenset({BookingStatus.CONFIRMED})
    deposit_percentage: int = 30
    check_in_time: str = "14:00"
    check_out_time: str = "12:00"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BookingPolicy":
        settings = settings or app_settings
        return cls(
            refund_policy=RefundPolicy.from_settings(settings),
            blocking_statuses=_to_statuses(settings.BOOKING_BLOCKING_STATUSES),
            deposit_percentage=settings.DEPOSIT_PERCENTAGE,
            check_in_time=settings.DEFAULT_CHECK_IN_TIME,
            check_out_time=settings.DEFAULT_CHECK_OUT_TIME,
        )

    def deposit_for(self, total: Decimal) -> Decimal:
        """Suggested deposit for a booking worth `total`."""
        return (Decimal(total) * self.deposit_percentage / Decimal(100)).quantize(
            CENTS, rounding=ROUND_HALF_UP
        )
