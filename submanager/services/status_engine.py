"""
Derived lifecycle status for master accounts and slots.

Statuses stored with a record are advisory only. Callers run
``derive_statuses`` on every read so the values always follow the
expiry dates and the current day.
"""
import logging
from dataclasses import replace
from datetime import date, timedelta
from typing import Iterable, List

from ..models.entities import (
    Account,
    Slot,
    STATUS_ACTIVE,
    STATUS_EXPIRING_SOON,
    STATUS_EXPIRED
)

logger = logging.getLogger(__name__)

EXPIRING_WINDOW_DAYS = 3


def expiring_threshold(now: date) -> date:
    """Last day (inclusive) that still counts as expiring soon."""
    return now + timedelta(days=EXPIRING_WINDOW_DAYS)


def compute_status(expiry_date: date, now: date) -> str:
    """
    Classify an expiry date against today.

    Args:
        expiry_date: Day the lease or subscription ends
        now: Current day

    Returns:
        'expired' if the date is in the past, 'expiring_soon' if it falls
        within the next three days (inclusive), otherwise 'active'
    """
    if expiry_date < now:
        return STATUS_EXPIRED
    if expiry_date <= expiring_threshold(now):
        return STATUS_EXPIRING_SOON
    return STATUS_ACTIVE


def derive_slot_status(slot: Slot, now: date) -> Slot:
    """Recompute one slot; empty or undated slots come back untouched."""
    if slot.client_id is None or slot.expiry_date is None:
        return slot

    status = compute_status(slot.expiry_date, now)
    if status == slot.status:
        return slot
    return replace(slot, status=status)


def derive_account_status(account: Account, now: date) -> Account:
    """Recompute the master status and every occupied slot of an account."""
    slots = tuple(derive_slot_status(s, now) for s in account.slots)
    return replace(
        account,
        status=compute_status(account.expiry_date, now),
        slots=slots
    )


def derive_statuses(now: date, accounts: Iterable[Account]) -> List[Account]:
    """Return new account records with statuses derived for ``now``."""
    derived = [derive_account_status(acc, now) for acc in accounts]
    logger.debug(f"Derived statuses for {len(derived)} accounts on {now.isoformat()}")
    return derived
