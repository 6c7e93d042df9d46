"""
Basic command handlers for the bot.
"""
import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from ..keyboards.main_keyboards import get_main_kb
from ..utils.logging_helpers import log_error
from .state import clear_step, is_admin

logger = logging.getLogger(__name__)
router = Router()

HELP_TEXT = (
    "🤖 <b>SubManager</b>\n\n"
    "Track family-plan master accounts, lease their slots to clients and "
    "get reminded before anything expires.\n\n"
    "/dashboard - overview and items needing attention\n"
    "/alerts - only the items needing attention\n"
    "/accounts - master accounts and their slots\n"
    "/clients - client list\n"
    "/add - add a master account\n"
    "/import - add accounts from pasted text (AI)\n"
    "/notify - send the alert summary to the configured chat\n"
    "/insights - AI summary of the business\n"
    "/settings - alert destination\n"
    "/search &lt;text&gt; - find accounts by service or login\n"
    "/cancel - abort the current step"
)


@router.message(Command("start"))
async def start_cmd(message: Message):
    """Handle /start command."""
    try:
        if not is_admin(message.from_user.id):
            await message.answer("⛔️ This bot is private.")
            return

        clear_step(message.from_user.id)
        await message.answer(
            "👋 Welcome to SubManager!",
            reply_markup=get_main_kb()
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error in start command: {e}")


@router.message(Command("help"))
async def help_cmd(message: Message):
    """Handle /help command."""
    if not is_admin(message.from_user.id):
        return
    await message.answer(HELP_TEXT, parse_mode="HTML")


@router.message(Command("cancel"))
async def cancel_cmd(message: Message):
    """Abort any multi-step action."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)
    await message.answer("❌ Cancelled.", reply_markup=get_main_kb())


@router.callback_query(F.data.startswith("cancel_action:"))
async def cancel_action_callback(query: CallbackQuery):
    """Cancel button under any prompt."""
    clear_step(query.from_user.id)
    await query.message.edit_text("❌ Cancelled.")
    await query.answer()
