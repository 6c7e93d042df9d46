"""
Client handlers: list, details, add, edit and delete.
"""
import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from ..config.settings import DATABASE_PATH
from ..database.repositories.client_repository import ClientRepository
from ..keyboards.inline_keyboards import (
    get_cancel_kb,
    get_client_kb,
    get_clients_kb,
    get_confirm_kb
)
from ..keyboards.main_keyboards import BTN_CLIENTS
from ..services.account_factory import create_client
from ..services.errors import ValidationError
from ..services.report_formatter import format_client_details
from ..services.snapshot_builder import build_snapshot
from ..utils.date_helpers import today
from ..utils.logging_helpers import log_error
from ..utils.text_helpers import safe_text
from .state import TEXT_INPUT, at_step, clear_step, get_data, is_admin, set_step

logger = logging.getLogger(__name__)
router = Router()


@router.message(Command("clients"))
@router.message(F.text == BTN_CLIENTS)
async def clients_cmd(message: Message):
    """List clients."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    try:
        clients = await ClientRepository(DATABASE_PATH).get_all_clients()
        await message.answer(
            f"👥 <b>Clients</b> [ {len(clients)} ]",
            reply_markup=get_clients_kb(clients),
            parse_mode="HTML"
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error listing clients: {e}")


@router.callback_query(F.data == "clients")
async def clients_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    clients = await ClientRepository(DATABASE_PATH).get_all_clients()
    await query.message.edit_text(
        f"👥 <b>Clients</b> [ {len(clients)} ]",
        reply_markup=get_clients_kb(clients),
        parse_mode="HTML"
    )
    await query.answer()


@router.callback_query(F.data.startswith("client:"))
async def client_details_callback(query: CallbackQuery):
    """Show a client and the slots they hold."""
    if not is_admin(query.from_user.id):
        return

    client_id = query.data.split(":", 1)[1]
    snap = await build_snapshot(DATABASE_PATH, today())
    client = snap.client(client_id)
    if client is None:
        await query.answer("❌ Client not found", show_alert=True)
        return

    await query.message.edit_text(
        format_client_details(client, snap.accounts),
        reply_markup=get_client_kb(client_id),
        parse_mode="HTML"
    )
    await query.answer()


# ============ Add / Edit ============

@router.callback_query(F.data == "add_client")
async def add_client_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    set_step(query.from_user.id, "client_name", {})
    await query.message.answer(
        "📝 Enter the <b>client name</b>...",
        reply_markup=get_cancel_kb("client"),
        parse_mode="HTML"
    )
    await query.answer()


@router.callback_query(F.data.startswith("client_edit:"))
async def edit_client_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    client_id = query.data.split(":", 1)[1]
    client = await ClientRepository(DATABASE_PATH).get_client(client_id)
    if client is None:
        await query.answer("❌ Client not found", show_alert=True)
        return

    set_step(query.from_user.id, "client_name", {"client_id": client_id})
    await query.message.answer(
        f"✏️ Editing <b>{safe_text(client.name)}</b>\n\nEnter the <b>client name</b>...",
        reply_markup=get_cancel_kb("client"),
        parse_mode="HTML"
    )
    await query.answer()


@router.message(TEXT_INPUT, at_step("client_name"))
async def handle_client_name(message: Message):
    user_id = message.from_user.id
    data = get_data(user_id)
    data["name"] = message.text.strip()
    set_step(user_id, "client_phone", data)

    await message.answer(
        "📞 Enter a <b>phone or contact handle</b>, or send <b>-</b> to skip...",
        reply_markup=get_cancel_kb("client"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("client_phone"))
async def handle_client_phone(message: Message):
    user_id = message.from_user.id
    data = get_data(user_id)
    phone = message.text.strip()
    data["phone"] = None if phone == "-" else phone
    set_step(user_id, "client_notes", data)

    await message.answer(
        "📝 Any <b>notes</b>? Send <b>-</b> to skip...",
        reply_markup=get_cancel_kb("client"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("client_notes"))
async def handle_client_notes(message: Message):
    """Last step: validate and save the client."""
    user_id = message.from_user.id
    data = get_data(user_id)
    notes = message.text.strip()

    try:
        client = create_client(
            name=data.get("name", ""),
            phone=data.get("phone"),
            notes=None if notes == "-" else notes,
            client_id=data.get("client_id")
        )
    except ValidationError as e:
        clear_step(user_id)
        await message.answer(f"❌ {safe_text(str(e))}")
        return

    try:
        repo = ClientRepository(DATABASE_PATH)
        if data.get("client_id"):
            saved = await repo.update_client(client)
            text = "✅ Client updated." if saved else "ℹ️ Client no longer exists."
        else:
            await repo.add_client(client)
            text = "✅ Client added."
        clear_step(user_id)
        await message.answer(text, reply_markup=get_client_kb(client.id))
    except Exception as e:
        log_error(e)
        logger.error(f"Error saving client: {e}")
        await message.answer("❌ Failed to save the client.")


# ============ Delete ============

@router.callback_query(F.data.startswith("client_del:"))
async def delete_client_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    client_id = query.data.split(":", 1)[1]
    await query.message.edit_text(
        "⚠️ Delete this client? Slots they hold will show as 'Unknown Client' until released.",
        reply_markup=get_confirm_kb(f"client_del_yes:{client_id}", f"client:{client_id}")
    )
    await query.answer()


@router.callback_query(F.data.startswith("client_del_yes:"))
async def delete_client_confirm(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return

    client_id = query.data.split(":", 1)[1]
    deleted = await ClientRepository(DATABASE_PATH).delete_client(client_id)
    await query.message.edit_text("🗑 Client deleted." if deleted else "ℹ️ Client was already gone.")
    await query.answer()
