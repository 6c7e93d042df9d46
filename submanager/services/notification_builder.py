"""
Collects everything that needs attention into a ranked report.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List

from ..models.entities import Account, Client
from ..models.report import KIND_MASTER, KIND_SLOT, Report, ReportItem
from .report_formatter import format_alert_message
from .status_engine import expiring_threshold

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "Unknown Client"


def collect_items(
    now: date,
    accounts: Iterable[Account],
    clients: Iterable[Client]
) -> List[ReportItem]:
    """
    Gather master accounts and client slots expiring within the window.

    Args:
        now: Current day
        accounts: Status-derived accounts
        clients: Known clients, used to resolve slot client names

    Returns:
        Items sorted by date; items sharing a date keep scan order
    """
    threshold = expiring_threshold(now)
    names: Dict[str, str] = {c.id: c.name for c in clients}
    items: List[ReportItem] = []

    for account in accounts:
        if account.expiry_date <= threshold:
            items.append(ReportItem(
                kind=KIND_MASTER,
                ref_id=account.id,
                title=account.service_name,
                subtitle="Master Account",
                date=account.expiry_date,
                urgent=account.expiry_date < now,
                account_id=account.id,
                login=account.email
            ))

        for slot in account.slots:
            if slot.client_id is None or slot.expiry_date is None:
                continue
            if slot.expiry_date > threshold:
                continue

            items.append(ReportItem(
                kind=KIND_SLOT,
                ref_id=slot.id,
                title=names.get(slot.client_id, UNKNOWN_CLIENT),
                subtitle=account.service_name,
                date=slot.expiry_date,
                urgent=slot.expiry_date < now,
                account_id=account.id,
                client_id=slot.client_id
            ))

    # sorted() is stable, which keeps insertion order for equal dates
    return sorted(items, key=lambda item: item.date)


def build_report(
    now: date,
    accounts: Iterable[Account],
    clients: Iterable[Client]
) -> Report:
    """Build the action list and the outbound alert text."""
    items = collect_items(now, accounts, clients)
    message = format_alert_message(items)

    urgent = sum(1 for i in items if i.urgent)
    logger.info(f"📋 Report built: {len(items)} items ({urgent} urgent)")
    return Report(items=tuple(items), message=message)
