from __future__ import annotations

import pytest
from aiogram.exceptions import TelegramNetworkError

from submanager.api import telegram_sender
from submanager.api.telegram_sender import send_notification
from submanager.models.entities import NotificationConfig

VALID_TOKEN = "123456:AAEhBP0av28nSrWY_abcdefghijklmnopq"


class FakeSession:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


class FakeBot:
    instances = []
    error = None

    def __init__(self, token):
        self.token = token
        self.session = FakeSession()
        self.sent = []
        FakeBot.instances.append(self)

    async def send_message(self, chat_id, text, parse_mode=None):
        if FakeBot.error is not None:
            raise FakeBot.error
        self.sent.append((chat_id, text, parse_mode))


@pytest.fixture
def fake_bot(monkeypatch):
    FakeBot.instances = []
    FakeBot.error = None
    monkeypatch.setattr(telegram_sender, "Bot", FakeBot)
    return FakeBot


async def test_incomplete_config_is_not_sent(fake_bot) -> None:
    assert await send_notification(NotificationConfig(bot_token=VALID_TOKEN), "hi") is False
    assert fake_bot.instances == []


async def test_malformed_token_is_rejected() -> None:
    config = NotificationConfig(bot_token="not-a-token", chat_id="1")

    assert await send_notification(config, "hi") is False


async def test_message_is_sent_as_markdown(fake_bot) -> None:
    config = NotificationConfig(bot_token=VALID_TOKEN, chat_id="-100")

    assert await send_notification(config, "*hello*") is True

    bot = fake_bot.instances[0]
    assert bot.sent == [("-100", "*hello*", "Markdown")]
    assert bot.session.closed


@pytest.mark.parametrize("error", [
    TelegramNetworkError(method=None, message="timeout"),
    RuntimeError("boom"),
])
async def test_send_failure_reports_false(fake_bot, error) -> None:
    fake_bot.error = error
    config = NotificationConfig(bot_token=VALID_TOKEN, chat_id="-100")

    assert await send_notification(config, "hi") is False
    assert fake_bot.instances[0].session.closed
