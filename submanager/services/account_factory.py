"""
Construction of new master accounts and clients.
"""
import logging
import uuid
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..models.entities import Account, Client, Slot, parse_date
from .errors import ValidationError

logger = logging.getLogger(__name__)

MAX_SLOTS = 20


def new_id() -> str:
    return str(uuid.uuid4())


def create_empty_slots(count: int) -> Tuple[Slot, ...]:
    """Build ``count`` free slots with fresh ids"""
    return tuple(Slot(id=new_id()) for _ in range(count))


def create_account(
    service_name: str,
    email: str,
    expiry_date: Optional[date],
    total_slots: int,
    password: str = "",
    notes: Optional[str] = None
) -> Account:
    """
    Validate input and build a master account with empty slots.

    Raises:
        ValidationError: service name, login or expiry missing, or the slot
            count out of range
    """
    service_name = (service_name or "").strip()
    email = (email or "").strip()

    if not service_name or not email:
        raise ValidationError("Service Name and Email are required.")
    if expiry_date is None:
        raise ValidationError("Expiry date is required.")
    if not isinstance(total_slots, int) or not (1 <= total_slots <= MAX_SLOTS):
        raise ValidationError(f"Slot count must be between 1 and {MAX_SLOTS}.")

    return Account(
        id=new_id(),
        service_name=service_name,
        email=email,
        password=password or "",
        expiry_date=expiry_date,
        total_slots=total_slots,
        slots=create_empty_slots(total_slots),
        notes=(notes or "").strip() or None
    )


def create_client(
    name: str,
    phone: Optional[str] = None,
    notes: Optional[str] = None,
    client_id: Optional[str] = None
) -> Client:
    """
    Validate input and build a client; pass ``client_id`` to edit in place.

    Raises:
        ValidationError: name missing
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Client name is required.")

    return Client(
        id=client_id or new_id(),
        name=name,
        phone=(phone or "").strip() or None,
        notes=(notes or "").strip() or None
    )


def _descriptor_slots(value: Any) -> int:
    try:
        count = int(value or 1)
    except (TypeError, ValueError):
        return 1
    return min(max(count, 1), MAX_SLOTS)


def accounts_from_descriptors(descriptors: Iterable[Dict[str, Any]]) -> List[Account]:
    """
    Turn extracted account descriptors into accounts.

    Descriptors come from an untrusted parser. One is accepted only when it
    carries a service name and a valid expiry date; anything else is
    dropped. Login and slot count fall back to '' and 1.
    """
    accounts: List[Account] = []

    for desc in descriptors:
        if not isinstance(desc, dict):
            continue

        service_name = str(desc.get("serviceName") or "").strip()
        try:
            expiry = parse_date(desc.get("expiryDate"))
        except (TypeError, ValueError):
            expiry = None

        if not service_name or expiry is None:
            logger.debug(f"Dropping incomplete descriptor: {desc}")
            continue

        total_slots = _descriptor_slots(desc.get("totalSlots"))
        accounts.append(Account(
            id=new_id(),
            service_name=service_name,
            email=str(desc.get("email") or ""),
            password=str(desc.get("password") or ""),
            expiry_date=expiry,
            total_slots=total_slots,
            slots=create_empty_slots(total_slots)
        ))

    logger.info(f"📥 Accepted {len(accounts)} accounts from extracted text")
    return accounts
