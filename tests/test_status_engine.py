from __future__ import annotations

from datetime import timedelta

import pytest

from submanager.models.entities import (
    STATUS_ACTIVE,
    STATUS_EMPTY,
    STATUS_EXPIRED,
    STATUS_EXPIRING_SOON,
)
from submanager.services.status_engine import compute_status, derive_statuses

from .conftest import days, make_account, make_slot


@pytest.mark.parametrize(
    "offset, expected",
    [
        (-1, STATUS_EXPIRED),
        (0, STATUS_EXPIRING_SOON),
        (3, STATUS_EXPIRING_SOON),
        (4, STATUS_ACTIVE),
    ],
)
def test_compute_status_window_boundaries(today, offset, expected) -> None:
    assert compute_status(today + timedelta(days=offset), today) == expected


def test_derive_sets_master_status_from_expiry(today) -> None:
    accounts = [
        make_account("a", expiry=days(-1)),
        make_account("b", expiry=days(2)),
        make_account("c", expiry=days(10)),
    ]

    derived = derive_statuses(today, accounts)

    assert [a.status for a in derived] == [STATUS_EXPIRED, STATUS_EXPIRING_SOON, STATUS_ACTIVE]


def test_slot_status_is_independent_of_master(today) -> None:
    account = make_account(
        expiry=days(30),
        slots=[make_slot("s1", "c1", days(1)), make_slot("s2", "c2", days(-3))],
    )

    derived = derive_statuses(today, [account])[0]

    assert derived.status == STATUS_ACTIVE
    assert derived.slots[0].status == STATUS_EXPIRING_SOON
    assert derived.slots[1].status == STATUS_EXPIRED


def test_expired_master_does_not_touch_active_slot(today) -> None:
    account = make_account(expiry=days(-5), slots=[make_slot("s1", "c1", days(20))])

    derived = derive_statuses(today, [account])[0]

    assert derived.status == STATUS_EXPIRED
    assert derived.slots[0].status == STATUS_ACTIVE


def test_empty_slots_are_left_unchanged(today) -> None:
    empty = make_slot("s1")
    account = make_account(slots=[empty])

    derived = derive_statuses(today, [account])[0]

    assert derived.slots[0] is empty
    assert derived.slots[0].status == STATUS_EMPTY


def test_stale_persisted_status_is_recomputed(today) -> None:
    account = make_account(
        expiry=days(-2),
        slots=[make_slot("s1", "c1", days(-1), status=STATUS_ACTIVE)],
    )

    derived = derive_statuses(today, [account])[0]

    assert derived.status == STATUS_EXPIRED
    assert derived.slots[0].status == STATUS_EXPIRED


def test_derive_does_not_mutate_input(today) -> None:
    account = make_account(expiry=days(-1), slots=[make_slot("s1", "c1", days(1))])

    derive_statuses(today, [account])

    assert account.status == STATUS_ACTIVE
    assert account.slots[0].status == STATUS_ACTIVE


def test_derive_is_idempotent(today) -> None:
    accounts = [
        make_account("a", expiry=days(1), slots=[make_slot("s1", "c1", days(-1)), make_slot("s2")]),
        make_account("b", expiry=days(40), slots=[make_slot("s3", "c2", days(3))]),
    ]

    once = derive_statuses(today, accounts)
    twice = derive_statuses(today, once)

    assert once == twice
