"""
Domain records for master accounts, slots and clients.

All records are frozen; a change means building a new value with
``dataclasses.replace`` and swapping the reference.
"""
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Dict, Optional, Tuple

STATUS_ACTIVE = "active"
STATUS_EXPIRING_SOON = "expiring_soon"
STATUS_EXPIRED = "expired"
STATUS_EMPTY = "empty"

ACCOUNT_STATUSES = (STATUS_ACTIVE, STATUS_EXPIRING_SOON, STATUS_EXPIRED)
SLOT_STATUSES = ACCOUNT_STATUSES + (STATUS_EMPTY,)


def parse_date(value: Any) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` string (or pass a date through)."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def format_date(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    phone: Optional[str] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.phone:
            data["phone"] = self.phone
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            phone=data.get("phone") or None,
            notes=data.get("notes") or None,
        )


@dataclass(frozen=True)
class Slot:
    id: str
    client_id: Optional[str] = None
    expiry_date: Optional[date] = None
    status: str = STATUS_EMPTY

    @property
    def is_occupied(self) -> bool:
        return self.client_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "clientId": self.client_id,
            "expiryDate": format_date(self.expiry_date),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Slot":
        client_id = data.get("clientId")
        expiry = parse_date(data.get("expiryDate"))
        status = data.get("status") or STATUS_EMPTY
        if client_id is None or expiry is None:
            # A half-filled slot cannot exist; treat it as free.
            return cls(id=str(data["id"]))
        if status not in SLOT_STATUSES or status == STATUS_EMPTY:
            status = STATUS_ACTIVE
        return cls(
            id=str(data["id"]),
            client_id=str(client_id),
            expiry_date=expiry,
            status=status,
        )


@dataclass(frozen=True)
class Account:
    id: str
    service_name: str
    email: str
    expiry_date: date
    total_slots: int
    slots: Tuple[Slot, ...] = ()
    password: str = ""
    notes: Optional[str] = None
    status: str = STATUS_ACTIVE

    def __post_init__(self):
        if len(self.slots) != self.total_slots:
            raise ValueError(
                f"Account {self.id} has {len(self.slots)} slots, "
                f"expected {self.total_slots}"
            )

    def find_slot(self, slot_id: str) -> Optional[Slot]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def with_slot(self, updated: Slot) -> "Account":
        """Return a copy with the slot of the same id swapped in place."""
        slots = tuple(updated if s.id == updated.id else s for s in self.slots)
        return replace(self, slots=slots)

    @property
    def used_slots(self) -> int:
        return sum(1 for s in self.slots if s.status != STATUS_EMPTY)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "serviceName": self.service_name,
            "email": self.email,
            "password": self.password,
            "expiryDate": format_date(self.expiry_date),
            "totalSlots": self.total_slots,
            "slots": [s.to_dict() for s in self.slots],
            "status": self.status,
        }
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        slots = tuple(Slot.from_dict(s) for s in data.get("slots") or [])
        stored_total = data.get("totalSlots")
        if stored_total is not None and int(stored_total) != len(slots):
            raise ValueError(
                f"Account {data.get('id')} stores totalSlots={stored_total} "
                f"but has {len(slots)} slots"
            )
        status = data.get("status")
        if status not in ACCOUNT_STATUSES:
            status = STATUS_ACTIVE
        return cls(
            id=str(data["id"]),
            service_name=data.get("serviceName", ""),
            email=data.get("email", "") or "",
            password=data.get("password", "") or "",
            expiry_date=parse_date(data["expiryDate"]),
            total_slots=len(slots),
            slots=slots,
            notes=data.get("notes") or None,
            status=status,
        )


@dataclass(frozen=True)
class ServiceDef:
    """Known service preset, e.g. Netflix with five family slots."""

    id: str
    name: str
    default_slots: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "defaultSlots": self.default_slots}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceDef":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            default_slots=int(data.get("defaultSlots") or 1),
        )


@dataclass(frozen=True)
class NotificationConfig:
    bot_token: str = ""
    chat_id: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"botToken": self.bot_token, "chatId": self.chat_id}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "NotificationConfig":
        if not data:
            return cls()
        return cls(
            bot_token=str(data.get("botToken") or ""),
            chat_id=str(data.get("chatId") or ""),
        )


@dataclass(frozen=True)
class DashboardStats:
    total_accounts: int = 0
    total_slots: int = 0
    used_slots: int = 0
    active_clients: int = 0
    expiring_slots: int = 0
    expiring_masters: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "total_accounts": self.total_accounts,
            "total_slots": self.total_slots,
            "used_slots": self.used_slots,
            "active_clients": self.active_clients,
            "expiring_slots": self.expiring_slots,
            "expiring_masters": self.expiring_masters,
        }
