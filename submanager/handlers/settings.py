"""
Alert destination settings handlers.
"""
import logging
from dataclasses import replace

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from ..api.telegram_sender import TEST_MESSAGE, send_notification
from ..config.settings import DATABASE_PATH
from ..database.repositories.settings_repository import SettingsRepository
from ..keyboards.inline_keyboards import get_cancel_kb, get_settings_kb
from ..keyboards.main_keyboards import BTN_SETTINGS
from ..models.entities import NotificationConfig
from ..utils.text_helpers import safe_text
from .state import TEXT_INPUT, at_step, clear_step, is_admin, set_step

logger = logging.getLogger(__name__)
router = Router()


def mask_token(token: str) -> str:
    if not token:
        return "not set"
    if len(token) <= 10:
        return "****"
    return f"{token[:6]}...{token[-4:]}"


def format_settings(config: NotificationConfig) -> str:
    return (
        "⚙️ <b>Alert settings</b>\n\n"
        f"🔑 <b>Bot token =</b> <code>{safe_text(mask_token(config.bot_token))}</code>\n"
        f"💬 <b>Chat id =</b> <code>{safe_text(config.chat_id or 'not set')}</code>\n\n"
        "Alerts are sent with this bot to this chat by /notify and the daily job."
    )


@router.message(Command("settings"))
@router.message(F.text == BTN_SETTINGS)
async def settings_cmd(message: Message):
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    config = await SettingsRepository(DATABASE_PATH).get_notification_config()
    await message.answer(format_settings(config), reply_markup=get_settings_kb(), parse_mode="HTML")


@router.callback_query(F.data.in_({"set_token", "set_chat"}))
async def set_field_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    if query.data == "set_token":
        set_step(query.from_user.id, "settings_token")
        prompt = "🔑 Send the <b>bot token</b> from @BotFather..."
    else:
        set_step(query.from_user.id, "settings_chat")
        prompt = "💬 Send the <b>chat id</b> that should receive alerts..."

    await query.message.answer(prompt, reply_markup=get_cancel_kb("settings"), parse_mode="HTML")
    await query.answer()


async def save_field(message: Message, **changes):
    repo = SettingsRepository(DATABASE_PATH)
    config = replace(await repo.get_notification_config(), **changes)
    await repo.save_notification_config(config)
    clear_step(message.from_user.id)

    await message.answer(
        "✅ Saved.\n\n" + format_settings(config),
        reply_markup=get_settings_kb(),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("settings_token"))
async def handle_token(message: Message):
    token = message.text.strip()
    if ":" not in token:
        await message.answer("❌ That does not look like a bot token (expected 123456:ABC...).")
        return
    await save_field(message, bot_token=token)


@router.message(TEXT_INPUT, at_step("settings_chat"))
async def handle_chat_id(message: Message):
    chat_id = message.text.strip()
    if not chat_id:
        await message.answer("❌ Chat id cannot be empty.")
        return
    await save_field(message, chat_id=chat_id)


@router.callback_query(F.data == "test_telegram")
async def test_connection_callback(query: CallbackQuery):
    """Send a test message with the stored settings."""
    if not is_admin(query.from_user.id):
        return

    config = await SettingsRepository(DATABASE_PATH).get_notification_config()
    if not config.is_complete:
        await query.answer("ℹ️ Set both the bot token and chat id first", show_alert=True)
        return

    await query.answer("📨 Sending...")
    success = await send_notification(config, TEST_MESSAGE)
    await query.message.answer("✅ Connection Successful!" if success else "❌ Test message failed.")
