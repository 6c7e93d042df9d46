"""
Date utilities. ``today()`` is the only place that reads the wall clock.
"""
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..config.settings import TIMEZONE


def today(tz: Optional[str] = None) -> date:
    """Get the current calendar day in the configured timezone"""
    return datetime.now(ZoneInfo(tz or TIMEZONE)).date()


def now_str(tz: Optional[str] = None) -> str:
    """
    Get current time formatted for report footers.

    Returns:
        Formatted string like "[ 2025/01/31 ] - [ 14:30:00 ]"
    """
    now = datetime.now(ZoneInfo(tz or TIMEZONE))
    return now.strftime("[ %Y/%m/%d ] - [ %H:%M:%S ]")


def parse_user_date(text: str) -> Optional[date]:
    """
    Parse a date typed by the user.

    Accepts ``YYYY-MM-DD`` and ``YYYY/MM/DD``; returns None when the text
    is not a valid calendar date.
    """
    value = text.strip().replace("/", "-")
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def days_until(target: date, now: date) -> int:
    """Signed number of days from ``now`` to ``target``"""
    return (target - now).days
