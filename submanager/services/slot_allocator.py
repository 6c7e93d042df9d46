"""
Slot assignment, release and expiry updates.

Every operation returns a new Account. Requests that do not fit the slot's
current state (assigning an occupied slot, releasing an empty one, unknown
slot id) return the account unchanged instead of raising.
"""
import logging
from dataclasses import replace
from datetime import date

from ..models.entities import Account, Slot, STATUS_ACTIVE, STATUS_EMPTY
from .renewal import renew
from .status_engine import compute_status

logger = logging.getLogger(__name__)


def assign_client(account: Account, slot_id: str, client_id: str, now: date) -> Account:
    """Put a client into an empty slot; the lease starts today."""
    slot = account.find_slot(slot_id)
    if slot is None or slot.status != STATUS_EMPTY:
        logger.debug(f"Ignoring assign on slot {slot_id} of account {account.id}")
        return account

    updated = replace(
        slot,
        client_id=client_id,
        expiry_date=now,
        status=STATUS_ACTIVE
    )
    logger.info(f"👤 Assigned client {client_id} to slot {slot_id} ({account.service_name})")
    return account.with_slot(updated)


def release_client(account: Account, slot_id: str) -> Account:
    """Free an occupied slot."""
    slot = account.find_slot(slot_id)
    if slot is None or not slot.is_occupied:
        logger.debug(f"Ignoring release on slot {slot_id} of account {account.id}")
        return account

    logger.info(f"🗑️ Released slot {slot_id} ({account.service_name}) from client {slot.client_id}")
    return account.with_slot(Slot(id=slot.id))


def set_slot_expiry(account: Account, slot_id: str, new_date: date, now: date) -> Account:
    """Change the lease end of an occupied slot and recompute its status."""
    slot = account.find_slot(slot_id)
    if slot is None or not slot.is_occupied:
        logger.debug(f"Ignoring expiry update on slot {slot_id} of account {account.id}")
        return account

    updated = replace(
        slot,
        expiry_date=new_date,
        status=compute_status(new_date, now)
    )
    return account.with_slot(updated)


def renew_slot(account: Account, slot_id: str, months: int, now: date) -> Account:
    """Extend an occupied slot by ``months`` months."""
    slot = account.find_slot(slot_id)
    if slot is None or not slot.is_occupied:
        logger.debug(f"Ignoring renewal on slot {slot_id} of account {account.id}")
        return account

    new_expiry = renew(slot.expiry_date, months, now)
    logger.info(f"🔄 Renewed slot {slot_id} ({account.service_name}) until {new_expiry.isoformat()}")
    return set_slot_expiry(account, slot_id, new_expiry, now)


def renew_account(account: Account, months: int, now: date) -> Account:
    """Extend the master subscription itself."""
    new_expiry = renew(account.expiry_date, months, now)
    logger.info(f"🔄 Renewed master account {account.service_name} until {new_expiry.isoformat()}")
    return replace(
        account,
        expiry_date=new_expiry,
        status=compute_status(new_expiry, now)
    )
