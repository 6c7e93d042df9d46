"""
Slot handlers: assign, release, renew, set expiry and draft reminders.
"""
import logging
from typing import Callable, Optional, Tuple

from aiogram import Router, F
from aiogram.types import Message, CallbackQuery

from ..api.gemini_client import GeminiClient
from ..config.settings import (
    DATABASE_PATH,
    DEFAULT_RENEWAL_MONTHS,
    GEMINI_API_KEY,
    GEMINI_MODEL,
    GEMINI_TIMEOUT_SECONDS
)
from ..database.repositories.account_repository import AccountRepository
from ..database.repositories.client_repository import ClientRepository
from ..keyboards.inline_keyboards import get_cancel_kb, get_client_picker_kb, get_slot_kb
from ..models.entities import Account, Slot
from ..services.slot_allocator import (
    assign_client,
    release_client,
    renew_slot,
    set_slot_expiry
)
from ..services.snapshot_builder import build_snapshot
from ..utils.date_helpers import parse_user_date, today
from ..utils.formatters import format_status
from ..utils.logging_helpers import log_error
from ..utils.text_helpers import safe_text
from .accounts import render_account
from .state import TEXT_INPUT, at_step, clear_step, get_data, is_admin, set_step

logger = logging.getLogger(__name__)
router = Router()


def parse_slot_ref(data: str) -> Optional[Tuple[str, int]]:
    """Split 'prefix:<account_id>:<index>' callback data"""
    try:
        _, account_id, idx = data.split(":")
        return account_id, int(idx)
    except ValueError:
        return None


async def load_slot(account_id: str, idx: int) -> Tuple[Optional[Account], Optional[Slot]]:
    """Stored account and the slot at ``idx``"""
    account = await AccountRepository(DATABASE_PATH).get_account(account_id)
    if account is None or not (0 <= idx < len(account.slots)):
        return account, None
    return account, account.slots[idx]


async def change_and_show(
    query: CallbackQuery,
    account_id: str,
    change: Callable[[Account], Account],
    done_text: str
):
    """Apply a slot change to the stored account and redraw it"""
    changed = await AccountRepository(DATABASE_PATH).modify_account(account_id, change)
    if changed is None:
        await query.answer("❌ Account not found", show_alert=True)
        return

    before, after = changed
    if after is before:
        await query.answer("ℹ️ Nothing to change", show_alert=False)
        return

    text, kb = await render_account(account_id)
    await query.message.edit_text(text, reply_markup=kb, parse_mode="HTML")
    await query.answer(done_text)


@router.callback_query(F.data.startswith("slot:"))
async def slot_callback(query: CallbackQuery):
    """Show a single slot with its actions."""
    if not is_admin(query.from_user.id):
        return

    ref = parse_slot_ref(query.data)
    if ref is None:
        await query.answer("❌ Invalid slot", show_alert=True)
        return
    account_id, idx = ref

    snap = await build_snapshot(DATABASE_PATH, today())
    account = snap.account(account_id)
    if account is None or not (0 <= idx < len(account.slots)):
        await query.answer("❌ Slot not found", show_alert=True)
        return

    slot = account.slots[idx]
    text = f"🎟 <b>{safe_text(account.service_name)} - Slot {idx + 1}</b>\n\n"
    if slot.client_id is None:
        text += "⚪️ This slot is empty."
    else:
        client = snap.client(slot.client_id)
        text += (
            f"👤 <b>Client =</b> {safe_text(client.name if client else 'Unknown Client')}\n"
            f"📅 <b>Expires =</b> [ {slot.expiry_date.isoformat()} ]\n"
            f"📌 <b>Status =</b> {format_status(slot.status)}"
        )

    await query.message.edit_text(
        text,
        reply_markup=get_slot_kb(account_id, idx, slot.client_id is not None),
        parse_mode="HTML"
    )
    await query.answer()


# ============ Assign ============

@router.callback_query(F.data.startswith("slot_assign:"))
async def assign_slot_callback(query: CallbackQuery):
    """Pick a client for an empty slot."""
    user_id = query.from_user.id
    if not is_admin(user_id):
        return

    ref = parse_slot_ref(query.data)
    if ref is None:
        await query.answer("❌ Invalid slot", show_alert=True)
        return

    clients = await ClientRepository(DATABASE_PATH).get_all_clients()
    if not clients:
        await query.answer("ℹ️ Add a client first (👥 Clients)", show_alert=True)
        return

    account_id, idx = ref
    set_step(user_id, "assign_slot", {"account_id": account_id, "idx": idx})
    await query.message.edit_text(
        "👤 Choose the client for this slot:",
        reply_markup=get_client_picker_kb(clients)
    )
    await query.answer()


@router.callback_query(F.data.startswith("pick_client:"))
async def pick_client_callback(query: CallbackQuery):
    user_id = query.from_user.id
    if not is_admin(user_id):
        return

    data = get_data(user_id)
    clear_step(user_id)
    if "account_id" not in data:
        await query.answer("❌ Selection expired, open the slot again", show_alert=True)
        return

    client_id = query.data.split(":", 1)[1]
    try:
        account, slot = await load_slot(data["account_id"], data["idx"])
        if slot is None:
            await query.answer("❌ Slot not found", show_alert=True)
            return

        await change_and_show(
            query,
            account.id,
            lambda acc: assign_client(acc, slot.id, client_id, today()),
            "✅ Client assigned"
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error assigning client: {e}")
        await query.answer("❌ Failed to assign client", show_alert=True)


# ============ Release & Renew ============

@router.callback_query(F.data.startswith("slot_release:"))
async def release_slot_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    ref = parse_slot_ref(query.data)
    account, slot = await load_slot(*ref) if ref else (None, None)
    if slot is None:
        await query.answer("❌ Slot not found", show_alert=True)
        return

    await change_and_show(
        query,
        account.id,
        lambda acc: release_client(acc, slot.id),
        "✅ Slot released"
    )


@router.callback_query(F.data.startswith("slot_renew:"))
async def renew_slot_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    ref = parse_slot_ref(query.data)
    account, slot = await load_slot(*ref) if ref else (None, None)
    if slot is None:
        await query.answer("❌ Slot not found", show_alert=True)
        return

    await change_and_show(
        query,
        account.id,
        lambda acc: renew_slot(acc, slot.id, DEFAULT_RENEWAL_MONTHS, today()),
        f"✅ Renewed +{DEFAULT_RENEWAL_MONTHS} month"
    )


# ============ Set Expiry ============

@router.callback_query(F.data.startswith("slot_date:"))
async def slot_date_callback(query: CallbackQuery):
    user_id = query.from_user.id
    if not is_admin(user_id):
        return

    ref = parse_slot_ref(query.data)
    if ref is None:
        await query.answer("❌ Invalid slot", show_alert=True)
        return

    set_step(user_id, "slot_date", {"account_id": ref[0], "idx": ref[1]})
    await query.message.answer(
        "📅 Enter the new <b>expiry date</b> for this slot...\n\n"
        "Format = <b>YYYY-MM-DD</b>",
        reply_markup=get_cancel_kb("slot"),
        parse_mode="HTML"
    )
    await query.answer()


@router.message(TEXT_INPUT, at_step("slot_date"))
async def handle_slot_date(message: Message):
    user_id = message.from_user.id
    new_date = parse_user_date(message.text)
    if new_date is None:
        await message.answer("❌ Invalid date. Use the format YYYY-MM-DD.")
        return

    data = get_data(user_id)
    clear_step(user_id)

    try:
        account, slot = await load_slot(data["account_id"], data["idx"])
        if slot is None:
            await message.answer("❌ Slot not found.")
            return

        changed = await AccountRepository(DATABASE_PATH).modify_account(
            account.id,
            lambda acc: set_slot_expiry(acc, slot.id, new_date, today())
        )
        if changed is None:
            await message.answer("❌ Account not found.")
            return
        if changed[1] is changed[0]:
            await message.answer("ℹ️ This slot is empty; assign a client first.")
            return

        text, kb = await render_account(account.id)
        await message.answer("✅ Expiry updated.")
        await message.answer(text, reply_markup=kb, parse_mode="HTML")
    except Exception as e:
        log_error(e)
        logger.error(f"Error updating slot expiry: {e}")
        await message.answer("❌ Failed to update the slot.")


# ============ Draft Reminder ============

@router.callback_query(F.data.startswith("slot_msg:"))
async def draft_message_callback(query: CallbackQuery):
    """Ask Gemini for a renewal reminder the user can forward."""
    if not is_admin(query.from_user.id):
        return

    ref = parse_slot_ref(query.data)
    account, slot = await load_slot(*ref) if ref else (None, None)
    if slot is None or slot.client_id is None:
        await query.answer("❌ Slot not found", show_alert=True)
        return

    client = await ClientRepository(DATABASE_PATH).get_client(slot.client_id)
    if client is None:
        await query.answer("❌ Client no longer exists", show_alert=True)
        return

    await query.answer("✍️ Drafting...")
    async with GeminiClient(GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS) as gemini:
        draft = await gemini.draft_renewal_message(client, account.service_name, slot.expiry_date)

    await query.message.answer(
        f"💬 <b>Reminder for {safe_text(client.name)}</b>\n\n<code>{safe_text(draft)}</code>",
        parse_mode="HTML"
    )
