from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Optional, Sequence

import pytest
import pytest_asyncio

os.environ.setdefault("TIMEZONE", "UTC")

from submanager.database.connection import DatabaseManager  # noqa: E402
from submanager.models.entities import Account, Client, Slot  # noqa: E402

TODAY = date(2025, 1, 15)


def days(n: int) -> date:
    return TODAY + timedelta(days=n)


def make_slot(
    slot_id: str,
    client_id: Optional[str] = None,
    expiry: Optional[date] = None,
    status: Optional[str] = None,
) -> Slot:
    if client_id is None:
        return Slot(id=slot_id)
    return Slot(id=slot_id, client_id=client_id, expiry_date=expiry, status=status or "active")


def make_account(
    account_id: str = "acc-1",
    service_name: str = "Netflix",
    expiry: date = days(30),
    slots: Sequence[Slot] = (),
    email: str = "family@example.com",
) -> Account:
    slots = tuple(slots) or (make_slot(f"{account_id}-s1"),)
    return Account(
        id=account_id,
        service_name=service_name,
        email=email,
        expiry_date=expiry,
        total_slots=len(slots),
        slots=slots,
    )


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def alice() -> Client:
    return Client(id="c-alice", name="Alice", phone="+100")


@pytest.fixture
def bob() -> Client:
    return Client(id="c-bob", name="Bob")


@pytest_asyncio.fixture
async def db_path(tmp_path) -> str:
    path = str(tmp_path / "test.db")
    await DatabaseManager(path).init_db()
    return path
