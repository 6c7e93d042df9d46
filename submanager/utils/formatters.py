"""
Data formatting utilities.
"""
from datetime import date

from ..models.entities import (
    STATUS_ACTIVE,
    STATUS_EXPIRING_SOON,
    STATUS_EXPIRED,
    STATUS_EMPTY
)
from .date_helpers import days_until

STATUS_EMOJI = {
    STATUS_ACTIVE: "🟢",
    STATUS_EXPIRING_SOON: "⏰",
    STATUS_EXPIRED: "🔴",
    STATUS_EMPTY: "⚪️",
}

STATUS_LABEL = {
    STATUS_ACTIVE: "Active",
    STATUS_EXPIRING_SOON: "Expiring soon",
    STATUS_EXPIRED: "Expired",
    STATUS_EMPTY: "Empty",
}


def format_status(status: str) -> str:
    """Format status with its emoji, e.g. '⏰ Expiring soon'"""
    return f"{STATUS_EMOJI.get(status, '❔')} {STATUS_LABEL.get(status, status)}"


def format_slot_usage(used: int, total: int) -> str:
    """Format slot usage like '3/5'"""
    return f"{used}/{total}"


def format_relative_days(target: date, now: date) -> str:
    """
    Describe a date relative to today.

    Returns:
        'today', 'tomorrow', 'in 5 days', 'yesterday' or '3 days ago'
    """
    days = days_until(target, now)
    if days == 0:
        return "today"
    if days == 1:
        return "tomorrow"
    if days == -1:
        return "yesterday"
    if days > 0:
        return f"in {days} days"
    return f"{-days} days ago"
