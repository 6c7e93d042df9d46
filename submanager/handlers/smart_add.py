"""
AI import: create master accounts from pasted text.
"""
import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message

from ..api.gemini_client import GeminiClient
from ..config.settings import DATABASE_PATH, GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS
from ..database.repositories.account_repository import AccountRepository
from ..keyboards.inline_keyboards import get_accounts_kb, get_cancel_kb
from ..keyboards.main_keyboards import BTN_SMART_IMPORT
from ..services.account_factory import accounts_from_descriptors
from ..utils.date_helpers import today
from ..utils.logging_helpers import log_error
from .state import TEXT_INPUT, at_step, clear_step, is_admin, set_step

logger = logging.getLogger(__name__)
router = Router()


@router.message(Command("import"))
@router.message(F.text == BTN_SMART_IMPORT)
async def import_cmd(message: Message):
    """Ask for the text to parse."""
    if not is_admin(message.from_user.id):
        return

    set_step(message.from_user.id, "import_text")
    await message.answer(
        "✨ Paste anything describing your subscriptions (receipts, notes, chats)...\n\n"
        "Example = <i>Netflix family, login a@b.com / pass123, renews 2025-03-01</i>",
        reply_markup=get_cancel_kb("import"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("import_text"))
async def handle_import_text(message: Message):
    """Parse the text and store every complete account found."""
    user_id = message.from_user.id
    clear_step(user_id)

    try:
        progress = await message.answer("🔍 Parsing...")
        async with GeminiClient(GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS) as gemini:
            descriptors = await gemini.parse_accounts(message.text, today())

        accounts = accounts_from_descriptors(descriptors)
        if not accounts:
            await progress.edit_text("❌ Failed to parse text. No account with a service name and expiry date was found.")
            return

        await AccountRepository(DATABASE_PATH).add_accounts(accounts)
        await progress.edit_text(
            f"✅ Imported {len(accounts)} accounts!",
            reply_markup=get_accounts_kb(accounts)
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error importing accounts: {e}")
        await message.answer("❌ Failed to parse text.")
