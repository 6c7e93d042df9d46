from __future__ import annotations

import pytest

from submanager.database.repositories import AccountRepository, ClientRepository, SettingsRepository
from submanager.models.entities import NotificationConfig
from submanager.services import alert_service
from submanager.services.alert_service import check_and_notify
from submanager.services.report_formatter import HEALTHY_MESSAGE

from .conftest import days, make_account, make_slot


@pytest.fixture
def sent(monkeypatch):
    calls = []

    async def fake_send(config, text):
        calls.append((config, text))
        return True

    monkeypatch.setattr(alert_service, "send_notification", fake_send)
    return calls


async def test_unconfigured_destination_skips_delivery(db_path, today, sent) -> None:
    report, delivered = await check_and_notify(db_path, today)

    assert delivered is False
    assert report.message == HEALTHY_MESSAGE
    assert sent == []


async def test_report_is_sent_once(db_path, today, alice, sent) -> None:
    config = NotificationConfig(bot_token="123:abc", chat_id="-100")
    await SettingsRepository(db_path).save_notification_config(config)
    await ClientRepository(db_path).add_client(alice)
    await AccountRepository(db_path).save_accounts([
        make_account("a1", expiry=days(-1), slots=[make_slot("s1", alice.id, days(1))]),
    ])

    report, delivered = await check_and_notify(db_path, today)

    assert delivered is True
    assert len(report.items) == 2
    assert sent == [(config, report.message)]
    assert "• Alice (Netflix) - 2025-01-16" in sent[0][1]


async def test_healthy_state_is_still_sent(db_path, today, sent) -> None:
    await SettingsRepository(db_path).save_notification_config(
        NotificationConfig(bot_token="123:abc", chat_id="-100")
    )

    report, delivered = await check_and_notify(db_path, today)

    assert delivered is True
    assert sent[0][1] == HEALTHY_MESSAGE
