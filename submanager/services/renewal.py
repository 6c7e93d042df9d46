"""
Renewal date arithmetic.
"""
import calendar
from datetime import date
from typing import Optional


def add_months(start: date, months: int) -> date:
    """
    Advance a date by whole calendar months.

    Month-end dates are clamped to the last day of the target month,
    so 2025-01-31 plus one month is 2025-02-28 and never rolls into March.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def renew(current_expiry: Optional[date], months: int, now: date) -> date:
    """
    Compute the expiry after a renewal of ``months`` months.

    A lease that has not lapsed is extended from its current expiry.
    A lapsed (or missing) one restarts from today, so a renewal is never
    backdated onto time the client did not have.

    Args:
        current_expiry: Existing expiry date, or None
        months: Renewal length, must be positive
        now: Current day

    Returns:
        The new expiry date
    """
    if not isinstance(months, int) or isinstance(months, bool) or months < 1:
        raise ValueError(f"Renewal length must be a positive number of months, got {months!r}")

    if current_expiry is not None and current_expiry >= now:
        base = current_expiry
    else:
        base = now
    return add_months(base, months)
