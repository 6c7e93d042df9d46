from __future__ import annotations

from datetime import date

from submanager.models.entities import (
    STATUS_ACTIVE,
    STATUS_EMPTY,
    STATUS_EXPIRED,
    STATUS_EXPIRING_SOON,
)
from submanager.services.slot_allocator import (
    assign_client,
    release_client,
    renew_account,
    renew_slot,
    set_slot_expiry,
)

from .conftest import days, make_account, make_slot


def _two_slot_account():
    return make_account(slots=[make_slot("s1"), make_slot("s2", "c-bob", days(20))])


def test_assign_fills_empty_slot_starting_today(today) -> None:
    account = _two_slot_account()

    updated = assign_client(account, "s1", "c-alice", today)

    slot = updated.find_slot("s1")
    assert slot.client_id == "c-alice"
    assert slot.expiry_date == today
    assert slot.status == STATUS_ACTIVE
    assert updated.slots[1] == account.slots[1]
    assert len(updated.slots) == account.total_slots


def test_assign_on_occupied_slot_is_ignored(today) -> None:
    account = _two_slot_account()

    assert assign_client(account, "s2", "c-alice", today) is account


def test_assign_on_unknown_slot_is_ignored(today) -> None:
    account = _two_slot_account()

    assert assign_client(account, "missing", "c-alice", today) is account


def test_assign_then_release_restores_empty_slot(today) -> None:
    account = _two_slot_account()

    released = release_client(assign_client(account, "s1", "c-alice", today), "s1")

    slot = released.find_slot("s1")
    assert slot.id == "s1"
    assert slot.client_id is None
    assert slot.expiry_date is None
    assert slot.status == STATUS_EMPTY


def test_release_on_empty_slot_is_ignored() -> None:
    account = _two_slot_account()

    assert release_client(account, "s1") is account


def test_set_expiry_recomputes_status(today) -> None:
    account = _two_slot_account()

    soon = set_slot_expiry(account, "s2", days(2), today)
    past = set_slot_expiry(account, "s2", days(-1), today)

    assert soon.find_slot("s2").expiry_date == days(2)
    assert soon.find_slot("s2").status == STATUS_EXPIRING_SOON
    assert past.find_slot("s2").status == STATUS_EXPIRED
    assert soon.slots[0] == account.slots[0]


def test_set_expiry_on_empty_slot_is_ignored(today) -> None:
    account = _two_slot_account()

    assert set_slot_expiry(account, "s1", days(5), today) is account


def test_operations_leave_original_account_untouched(today) -> None:
    account = _two_slot_account()

    assign_client(account, "s1", "c-alice", today)
    release_client(account, "s2")

    assert account.slots[0].client_id is None
    assert account.slots[1].client_id == "c-bob"


def test_renew_slot_extends_running_lease(today) -> None:
    account = _two_slot_account()

    renewed = renew_slot(account, "s2", 1, today)

    assert renewed.find_slot("s2").expiry_date == date(2025, 3, 4)
    assert renewed.find_slot("s2").status == STATUS_ACTIVE


def test_renew_slot_on_empty_slot_is_ignored(today) -> None:
    account = _two_slot_account()

    assert renew_slot(account, "s1", 1, today) is account


def test_renew_account_restarts_lapsed_master(today) -> None:
    account = make_account(expiry=days(-10))

    renewed = renew_account(account, 1, today)

    assert renewed.expiry_date == date(2025, 2, 15)
    assert renewed.status == STATUS_ACTIVE
    assert renewed.slots == account.slots
