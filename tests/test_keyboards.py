from __future__ import annotations

from submanager.handlers.settings import mask_token
from submanager.handlers.slots import parse_slot_ref
from submanager.keyboards.inline_keyboards import get_account_kb, get_slot_kb
from submanager.models.entities import Slot
from submanager.services.account_factory import create_account
from submanager.services.status_engine import derive_statuses

from .conftest import days


def _callbacks(markup):
    return [b.callback_data for row in markup.inline_keyboard for b in row]


def test_callback_data_fits_telegram_limit(today) -> None:
    account = derive_statuses(today, [
        create_account("Netflix", "fam@example.com", days(30), 20),
    ])[0]

    callbacks = _callbacks(get_account_kb(account, []))
    callbacks += _callbacks(get_slot_kb(account.id, 19, occupied=True))

    assert all(len(data.encode()) <= 64 for data in callbacks)
    assert f"slot:{account.id}:19" in callbacks


def test_slot_buttons_name_clients(today, alice) -> None:
    account = create_account("Netflix", "fam@example.com", days(30), 2)
    account = account.with_slot(Slot(
        id=account.slots[0].id, client_id=alice.id, expiry_date=days(2), status="active",
    ))

    labels = [row[0].text for row in get_account_kb(account, [alice]).inline_keyboard[:2]]

    assert labels[0].endswith("Slot 1: Alice")
    assert labels[1].endswith("Slot 2: assign client")


def test_empty_slot_only_offers_assign() -> None:
    callbacks = _callbacks(get_slot_kb("a1", 0, occupied=False))

    assert callbacks == ["slot_assign:a1:0", "acc:a1"]


def test_parse_slot_ref() -> None:
    assert parse_slot_ref("slot_renew:abc:3") == ("abc", 3)
    assert parse_slot_ref("slot_renew:abc") is None
    assert parse_slot_ref("slot_renew:abc:x") is None


def test_mask_token() -> None:
    assert mask_token("") == "not set"
    assert mask_token("123:abc") == "****"
    assert mask_token("123456:ABCDEFGHIJKLMNOP") == "123456...MNOP"
