"""
Overview counters for the dashboard.
"""
from typing import Iterable

from ..models.entities import (
    Account,
    DashboardStats,
    STATUS_EMPTY,
    STATUS_EXPIRING_SOON,
    STATUS_EXPIRED
)


def compute_stats(accounts: Iterable[Account]) -> DashboardStats:
    """
    Count accounts, slot usage and pending renewals.

    A client holding several slots is counted once in ``active_clients``.
    """
    accounts = list(accounts)
    slots = [s for acc in accounts for s in acc.slots]

    return DashboardStats(
        total_accounts=len(accounts),
        total_slots=sum(acc.total_slots for acc in accounts),
        used_slots=sum(1 for s in slots if s.status != STATUS_EMPTY),
        active_clients=len({s.client_id for s in slots if s.client_id is not None}),
        expiring_slots=sum(1 for s in slots if s.status == STATUS_EXPIRING_SOON),
        expiring_masters=sum(
            1 for acc in accounts
            if acc.status in (STATUS_EXPIRING_SOON, STATUS_EXPIRED)
        )
    )
