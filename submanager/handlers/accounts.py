"""
Master account handlers: list, details, add wizard, renew and delete.
"""
import logging

from aiogram import Router, F
from aiogram.filters import Command, CommandObject
from aiogram.types import Message, CallbackQuery

from ..config.settings import DATABASE_PATH, DEFAULT_RENEWAL_MONTHS, DEFAULT_TOTAL_SLOTS
from ..database.repositories.account_repository import AccountRepository
from ..database.repositories.service_repository import ServiceRepository
from ..keyboards.inline_keyboards import (
    get_accounts_kb,
    get_account_kb,
    get_cancel_kb,
    get_confirm_kb,
    get_services_kb
)
from ..keyboards.main_keyboards import BTN_ACCOUNTS, BTN_ADD_ACCOUNT
from ..services.account_factory import create_account
from ..services.errors import ValidationError
from ..services.report_formatter import format_account_details
from ..services.slot_allocator import renew_account
from ..services.snapshot_builder import build_snapshot
from ..utils.date_helpers import parse_user_date, today
from ..utils.logging_helpers import log_error
from ..utils.text_helpers import safe_text
from .state import TEXT_INPUT, at_step, clear_step, get_data, is_admin, set_step

logger = logging.getLogger(__name__)
router = Router()


async def render_account(account_id: str):
    """
    Build the details text and keyboard for an account.

    Returns:
        (text, keyboard), or (None, None) if the account is gone
    """
    snap = await build_snapshot(DATABASE_PATH, today())
    account = snap.account(account_id)
    if account is None:
        return None, None
    text = format_account_details(account, snap.clients, snap.today)
    return text, get_account_kb(account, snap.clients)


# ============ List & Details ============

@router.message(Command("accounts"))
@router.message(F.text == BTN_ACCOUNTS)
async def accounts_cmd(message: Message):
    """List all master accounts."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    try:
        snap = await build_snapshot(DATABASE_PATH, today())
        if not snap.accounts:
            await message.answer(
                "ℹ️ No master accounts yet.",
                reply_markup=get_accounts_kb([])
            )
            return

        await message.answer(
            f"🏢 <b>Master accounts</b> [ {len(snap.accounts)} ]",
            reply_markup=get_accounts_kb(snap.accounts),
            parse_mode="HTML"
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error listing accounts: {e}")


@router.message(Command("search"))
async def search_cmd(message: Message, command: CommandObject):
    """Find accounts by service name or login."""
    if not is_admin(message.from_user.id):
        return

    term = (command.args or "").strip().lower()
    if not term:
        await message.answer("Usage: /search &lt;service or login&gt;", parse_mode="HTML")
        return

    try:
        snap = await build_snapshot(DATABASE_PATH, today())
        found = [
            acc for acc in snap.accounts
            if term in acc.service_name.lower() or term in acc.email.lower()
        ]
        if not found:
            await message.answer(f"ℹ️ No accounts match '<b>{safe_text(term)}</b>'.", parse_mode="HTML")
            return

        await message.answer(
            f"🔍 <b>Results</b> [ {len(found)} ]",
            reply_markup=get_accounts_kb(found),
            parse_mode="HTML"
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error searching accounts: {e}")


@router.callback_query(F.data == "accounts")
async def accounts_callback(query: CallbackQuery):
    """Back to the account list."""
    if not is_admin(query.from_user.id):
        return

    snap = await build_snapshot(DATABASE_PATH, today())
    await query.message.edit_text(
        f"🏢 <b>Master accounts</b> [ {len(snap.accounts)} ]",
        reply_markup=get_accounts_kb(snap.accounts),
        parse_mode="HTML"
    )
    await query.answer()


@router.callback_query(F.data.startswith("acc:"))
async def account_details_callback(query: CallbackQuery):
    """Show one account with its slots."""
    if not is_admin(query.from_user.id):
        return

    account_id = query.data.split(":", 1)[1]
    try:
        text, kb = await render_account(account_id)
        if text is None:
            await query.answer("❌ Account not found", show_alert=True)
            return

        await query.message.edit_text(text, reply_markup=kb, parse_mode="HTML")
        await query.answer()
    except Exception as e:
        log_error(e)
        logger.error(f"Error showing account {account_id}: {e}")
        await query.answer("❌ Error loading account", show_alert=True)


# ============ Renew & Delete ============

@router.callback_query(F.data.startswith("acc_renew:"))
async def renew_account_callback(query: CallbackQuery):
    """Extend the master subscription by the default renewal length."""
    if not is_admin(query.from_user.id):
        return

    account_id = query.data.split(":", 1)[1]
    changed = await AccountRepository(DATABASE_PATH).modify_account(
        account_id,
        lambda acc: renew_account(acc, DEFAULT_RENEWAL_MONTHS, today())
    )
    if changed is None:
        await query.answer("❌ Account not found", show_alert=True)
        return
    updated = changed[1]

    text, kb = await render_account(account_id)
    await query.message.edit_text(text, reply_markup=kb, parse_mode="HTML")
    await query.answer(f"✅ Renewed until {updated.expiry_date.isoformat()}")


@router.callback_query(F.data.startswith("acc_del:"))
async def delete_account_callback(query: CallbackQuery):
    """Ask before deleting an account."""
    if not is_admin(query.from_user.id):
        return

    account_id = query.data.split(":", 1)[1]
    await query.message.edit_text(
        "⚠️ Delete this master account and all of its slots?",
        reply_markup=get_confirm_kb(f"acc_del_yes:{account_id}", f"acc:{account_id}")
    )
    await query.answer()


@router.callback_query(F.data.startswith("acc_del_yes:"))
async def delete_account_confirm(query: CallbackQuery):
    """Delete the account."""
    if not is_admin(query.from_user.id):
        return

    account_id = query.data.split(":", 1)[1]
    deleted = await AccountRepository(DATABASE_PATH).delete_account(account_id)
    await query.message.edit_text("🗑 Account deleted." if deleted else "ℹ️ Account was already gone.")
    await query.answer()


# ============ Add Account ============

async def start_add_account(message: Message, user_id: int):
    services = await ServiceRepository(DATABASE_PATH).get_all_services()
    set_step(user_id, "add_service", {"services": [(s.name, s.default_slots) for s in services]})

    await message.answer(
        "📝 Enter the <b>service name</b> or pick one below...\n\n"
        "Example = <b>Netflix</b>",
        reply_markup=get_services_kb([s.name for s in services]),
        parse_mode="HTML"
    )


@router.message(Command("add"))
@router.message(F.text == BTN_ADD_ACCOUNT)
async def add_account_cmd(message: Message):
    """Start the add-account wizard."""
    if not is_admin(message.from_user.id):
        return
    await start_add_account(message, message.from_user.id)


@router.callback_query(F.data == "add_account")
async def add_account_callback(query: CallbackQuery):
    if not is_admin(query.from_user.id):
        return
    await start_add_account(query.message, query.from_user.id)
    await query.answer()


async def ask_email(message: Message, user_id: int, service_name: str, default_slots: int):
    data = get_data(user_id)
    data["service_name"] = service_name
    data["default_slots"] = default_slots
    set_step(user_id, "add_email", data)

    await message.answer(
        f"✅ Service '<b>{safe_text(service_name)}</b>' saved.\n\n"
        "📧 Now enter the <b>login email</b> of the master account...",
        reply_markup=get_cancel_kb("account"),
        parse_mode="HTML"
    )


@router.callback_query(F.data.startswith("pick_service:"))
async def pick_service_callback(query: CallbackQuery):
    """Service chosen from the presets."""
    user_id = query.from_user.id
    if not is_admin(user_id):
        return

    try:
        idx = int(query.data.split(":")[1])
        name, default_slots = get_data(user_id)["services"][idx]
    except (IndexError, KeyError, ValueError):
        await query.answer("❌ Start again with /add", show_alert=True)
        return

    await query.answer()
    await ask_email(query.message, user_id, name, default_slots)


@router.message(TEXT_INPUT, at_step("add_service"))
async def handle_service_name(message: Message):
    """Handle a typed service name."""
    name = message.text.strip()
    if len(name) < 2:
        await message.answer("❌ Service name must be at least 2 characters.")
        return

    default_slots = DEFAULT_TOTAL_SLOTS
    for preset_name, preset_slots in get_data(message.from_user.id).get("services", []):
        if preset_name.lower() == name.lower():
            default_slots = preset_slots
            break

    await ask_email(message, message.from_user.id, name, default_slots)


@router.message(TEXT_INPUT, at_step("add_email"))
async def handle_email(message: Message):
    user_id = message.from_user.id
    data = get_data(user_id)
    data["email"] = message.text.strip()
    set_step(user_id, "add_password", data)

    await message.answer(
        "🔑 Enter the <b>password</b>, or send <b>-</b> to skip...",
        reply_markup=get_cancel_kb("account"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("add_password"))
async def handle_password(message: Message):
    user_id = message.from_user.id
    data = get_data(user_id)
    password = message.text.strip()
    data["password"] = "" if password == "-" else password
    set_step(user_id, "add_expiry", data)

    await message.answer(
        "📅 Enter the <b>master expiry date</b>...\n\n"
        "Format = <b>YYYY-MM-DD</b>",
        reply_markup=get_cancel_kb("account"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("add_expiry"))
async def handle_expiry(message: Message):
    user_id = message.from_user.id
    expiry = parse_user_date(message.text)
    if expiry is None:
        await message.answer("❌ Invalid date. Use the format YYYY-MM-DD.")
        return

    data = get_data(user_id)
    data["expiry_date"] = expiry
    set_step(user_id, "add_slots", data)

    await message.answer(
        f"🎟 How many <b>slots</b> does this plan have?\n\n"
        f"Send <b>-</b> to use {data['default_slots']}.",
        reply_markup=get_cancel_kb("account"),
        parse_mode="HTML"
    )


@router.message(TEXT_INPUT, at_step("add_slots"))
async def handle_slots(message: Message):
    """Last step: validate and create the account."""
    user_id = message.from_user.id
    data = get_data(user_id)
    text = message.text.strip()

    try:
        total_slots = data["default_slots"] if text == "-" else int(text)
    except ValueError:
        await message.answer("❌ Slot count must be a number.")
        return

    try:
        account = create_account(
            service_name=data["service_name"],
            email=data["email"],
            expiry_date=data["expiry_date"],
            total_slots=total_slots,
            password=data.get("password", "")
        )
    except ValidationError as e:
        await message.answer(f"❌ {safe_text(str(e))}")
        return

    try:
        await AccountRepository(DATABASE_PATH).add_accounts([account])
        clear_step(user_id)

        text, kb = await render_account(account.id)
        await message.answer("✅ Master Account Created!")
        await message.answer(text, reply_markup=kb, parse_mode="HTML")
    except Exception as e:
        log_error(e)
        logger.error(f"Error saving account: {e}")
        await message.answer("❌ Failed to save the account.")
