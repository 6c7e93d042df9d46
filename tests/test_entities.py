from __future__ import annotations

from datetime import date

import pytest

from submanager.models.entities import (
    Account,
    Client,
    NotificationConfig,
    Slot,
    STATUS_ACTIVE,
    STATUS_EMPTY,
)

from .conftest import make_account, make_slot


def test_account_dict_uses_stored_field_names() -> None:
    account = make_account(slots=[make_slot("s1", "c-alice", date(2025, 2, 1)), make_slot("s2")])

    data = account.to_dict()

    assert data["serviceName"] == "Netflix"
    assert data["expiryDate"] == "2025-02-14"
    assert data["totalSlots"] == 2
    assert data["slots"][0] == {
        "id": "s1", "clientId": "c-alice", "expiryDate": "2025-02-01", "status": "active",
    }
    assert data["slots"][1] == {"id": "s2", "clientId": None, "expiryDate": None, "status": "empty"}
    assert Account.from_dict(data) == account


def test_half_filled_slot_is_read_as_empty() -> None:
    slot = Slot.from_dict({"id": "s1", "clientId": "c-1", "expiryDate": None, "status": "active"})

    assert slot == Slot(id="s1")
    assert slot.status == STATUS_EMPTY


def test_unknown_account_status_falls_back_to_active() -> None:
    account = Account.from_dict({
        "id": "a1", "serviceName": "Netflix", "expiryDate": "2025-01-01",
        "slots": [], "status": "weird",
    })

    assert account.status == STATUS_ACTIVE
    assert account.total_slots == 0
    assert account.email == ""


def test_slot_count_must_match_total() -> None:
    with pytest.raises(ValueError):
        Account(
            id="a1", service_name="Netflix", email="", expiry_date=date(2025, 1, 1),
            total_slots=2, slots=(Slot(id="s1"),),
        )


def test_client_optional_fields_are_omitted() -> None:
    assert Client(id="c1", name="Alice").to_dict() == {"id": "c1", "name": "Alice"}
    assert Client.from_dict({"id": "c1", "name": "Alice", "phone": ""}).phone is None


def test_notification_config_completeness() -> None:
    assert not NotificationConfig.from_dict(None).is_complete
    assert not NotificationConfig(bot_token="123:abc").is_complete
    assert NotificationConfig.from_dict({"botToken": "123:abc", "chatId": 42}).chat_id == "42"


def test_stored_slot_total_must_match_slot_list() -> None:
    data = make_account(slots=[make_slot("s1"), make_slot("s2")]).to_dict()
    data["totalSlots"] = 3

    with pytest.raises(ValueError, match="totalSlots=3"):
        Account.from_dict(data)
