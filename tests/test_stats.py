from __future__ import annotations

from submanager.services.stats import compute_stats
from submanager.services.status_engine import derive_statuses

from .conftest import days, make_account, make_slot


def test_empty_collection(today) -> None:
    stats = compute_stats([])

    assert stats.as_dict() == {
        "total_accounts": 0,
        "total_slots": 0,
        "used_slots": 0,
        "active_clients": 0,
        "expiring_slots": 0,
        "expiring_masters": 0,
    }


def test_client_in_several_slots_counts_once(today) -> None:
    accounts = derive_statuses(today, [
        make_account("a1", expiry=days(2), slots=[
            make_slot("s1", "c-alice", days(1)),
            make_slot("s2", "c-alice", days(40)),
            make_slot("s3"),
        ]),
        make_account("a2", "Spotify", expiry=days(-1), slots=[
            make_slot("s4", "c-alice", days(-2)),
            make_slot("s5", "c-bob", days(3)),
        ]),
    ])

    stats = compute_stats(accounts)

    assert stats.total_accounts == 2
    assert stats.total_slots == 5
    assert stats.used_slots == 4
    assert stats.active_clients == 2
    assert stats.expiring_slots == 2
    assert stats.expiring_masters == 2
