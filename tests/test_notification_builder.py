from __future__ import annotations

from submanager.models.entities import Client
from submanager.models.report import KIND_MASTER, KIND_SLOT
from submanager.services.notification_builder import UNKNOWN_CLIENT, build_report
from submanager.services.report_formatter import HEALTHY_MESSAGE
from submanager.services.stats import compute_stats
from submanager.services.status_engine import derive_statuses

from .conftest import days, make_account, make_slot


def _netflix(master_expiry):
    return make_account(
        service_name="Netflix",
        expiry=master_expiry,
        slots=[make_slot("s-a", "c-alice", days(1)), make_slot("s-b")],
    )


def test_healthy_report_has_no_items(today, alice) -> None:
    accounts = derive_statuses(today, [make_account(expiry=days(30))])

    report = build_report(today, accounts, [alice])

    assert report.items == ()
    assert report.is_healthy
    assert report.message == HEALTHY_MESSAGE


def test_scenario_expiring_slot_on_active_master(today, alice) -> None:
    accounts = derive_statuses(today, [_netflix(days(10))])

    report = build_report(today, accounts, [alice])
    stats = compute_stats(accounts)

    assert accounts[0].status == "active"
    assert accounts[0].slots[0].status == "expiring_soon"
    assert len(report.items) == 1
    item = report.items[0]
    assert (item.kind, item.title, item.subtitle, item.date) == (KIND_SLOT, "Alice", "Netflix", days(1))
    assert item.urgent is False
    assert stats.used_slots == 1
    assert stats.total_slots == 2
    assert stats.active_clients == 1
    assert stats.expiring_slots == 1
    assert stats.expiring_masters == 0


def test_scenario_expired_master(today, alice) -> None:
    accounts = derive_statuses(today, [_netflix(days(-1))])

    report = build_report(today, accounts, [alice])

    assert accounts[0].status == "expired"
    masters = report.master_items
    assert len(masters) == 1
    assert masters[0].urgent is True
    assert masters[0].title == "Netflix"
    assert compute_stats(accounts).expiring_masters == 1


def test_items_sorted_by_date_with_stable_ties(today, alice, bob) -> None:
    accounts = derive_statuses(today, [
        make_account("a1", "Spotify", expiry=days(3), slots=[make_slot("s1", "c-bob", days(-2))]),
        make_account("a2", "Netflix", expiry=days(3), slots=[make_slot("s2", "c-alice", days(0))]),
    ])

    report = build_report(today, accounts, [alice, bob])

    assert [(i.kind, i.title) for i in report.items] == [
        (KIND_SLOT, "Bob"),
        (KIND_SLOT, "Alice"),
        (KIND_MASTER, "Spotify"),
        (KIND_MASTER, "Netflix"),
    ]
    assert [i.urgent for i in report.items] == [True, False, False, False]


def test_expired_slots_are_included(today, alice) -> None:
    accounts = derive_statuses(today, [
        make_account(expiry=days(60), slots=[make_slot("s1", "c-alice", days(-30))]),
    ])

    report = build_report(today, accounts, [alice])

    assert len(report.slot_items) == 1
    assert report.slot_items[0].urgent is True


def test_unresolved_client_is_labelled_unknown(today) -> None:
    accounts = derive_statuses(today, [
        make_account(expiry=days(60), slots=[make_slot("s1", "c-gone", days(2))]),
    ])

    report = build_report(today, accounts, [])

    assert report.items[0].title == UNKNOWN_CLIENT


def test_window_is_inclusive_at_three_days(today, alice) -> None:
    accounts = derive_statuses(today, [
        make_account(expiry=days(60), slots=[
            make_slot("s1", "c-alice", days(3)),
            make_slot("s2", "c-alice", days(4)),
        ]),
    ])

    report = build_report(today, accounts, [alice])

    assert [i.ref_id for i in report.items] == ["s1"]


def test_message_has_both_sections(today, alice) -> None:
    accounts = derive_statuses(today, [_netflix(days(-1))])

    message = build_report(today, accounts, [alice]).message

    assert message.startswith("⚠️ *Subscription Alerts*")
    assert "*🔥 CRITICAL: Master Accounts*" in message
    assert "• Netflix (family@example.com) - 2025-01-14" in message
    assert "*⏳ Client Renewals Needed*" in message
    assert "• Alice (Netflix) - 2025-01-16" in message
    assert message.index("CRITICAL") < message.index("Client Renewals")


def test_message_omits_empty_master_section(today, alice) -> None:
    accounts = derive_statuses(today, [_netflix(days(10))])

    message = build_report(today, accounts, [alice]).message

    assert "Master Accounts" not in message
    assert "Client Renewals Needed" in message


def test_message_omits_empty_slot_section(today) -> None:
    accounts = derive_statuses(today, [make_account(expiry=days(1))])

    message = build_report(today, accounts, []).message

    assert "Master Accounts" in message
    assert "Client Renewals" not in message


def test_markdown_characters_in_names_are_escaped(today) -> None:
    client = Client(id="c1", name="john_doe*")
    accounts = derive_statuses(today, [
        make_account(expiry=days(60), slots=[make_slot("s1", "c1", days(1))]),
    ])

    message = build_report(today, accounts, [client]).message

    assert "john\\_doe\\*" in message
