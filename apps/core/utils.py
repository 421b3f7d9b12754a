"""
Core utility functions for the Payment Collection API.

Contains money and calendar helpers used by the ledger and payment services.
All monetary calculations use Python's Decimal for precision.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Tuple

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from django.utils import timezone

TWO_PLACES = Decimal('0.01')

EMI_STATUS_PAID = 'paid'
EMI_STATUS_PENDING = 'pending'


def to_decimal(value) -> Decimal:
    """Coerce int, float, str or Decimal to Decimal (None → 0)."""
    if value is None:
        return Decimal('0')
    return Decimal(str(value))


def calculate_remaining_emi(emi_due, total_paid) -> Decimal:
    """
    Remaining installment for the month, never below zero.

    Args:
        emi_due: Contractual monthly installment.
        total_paid: Completed payments recorded in the month.

    Returns:
        max(0, emi_due - total_paid) quantized to 2 decimal places (ROUND_HALF_UP).
    """
    remaining = to_decimal(emi_due) - to_decimal(total_paid)
    if remaining < 0:
        remaining = Decimal('0')
    return remaining.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def emi_status(remaining_emi: Decimal) -> str:
    """'paid' once nothing remains for the month, 'pending' otherwise."""
    return EMI_STATUS_PAID if remaining_emi <= 0 else EMI_STATUS_PENDING


def month_bounds(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Return [start, end) of the calendar month containing ``now``.

    Boundaries are computed in the current Django time zone so that the
    month matches what a borrower sees on their statement.

    Examples:
        2024-03-15 10:00 → (2024-03-01 00:00, 2024-04-01 00:00)
        2024-12-31 23:59 → (2024-12-01 00:00, 2025-01-01 00:00)
    """
    now = now or timezone.now()
    if timezone.is_naive(now):
        now = timezone.make_aware(now)
    local_now = timezone.localtime(now)
    start = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, start + relativedelta(months=1)


def parse_payment_timestamp(value) -> datetime:
    """
    Normalize a client-supplied payment timestamp.

    Accepts a datetime or any string understood by dateutil. Naive values
    are interpreted in the current time zone. The result is truncated to
    whole seconds.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = date_parser.parse(str(value))
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"Invalid payment date: {value!r}") from exc

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed.replace(microsecond=0)


def current_payment_timestamp() -> datetime:
    """Submission time truncated to whole seconds."""
    return timezone.now().replace(microsecond=0)
