"""
Inline keyboard layouts.

Callback data is limited to 64 bytes, so slots are addressed by their
position in the account rather than by id.
"""
from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton
from typing import Dict, List, Sequence

from ..models.entities import Account, Client
from ..services.report_formatter import format_account_line
from ..utils.formatters import STATUS_EMOJI
from ..utils.text_helpers import truncate_text


def get_accounts_kb(accounts: Sequence[Account]) -> InlineKeyboardMarkup:
    """One button per master account."""
    buttons = [
        [InlineKeyboardButton(text=format_account_line(acc), callback_data=f"acc:{acc.id}")]
        for acc in accounts
    ]
    buttons.append([InlineKeyboardButton(text="➕ New master account", callback_data="add_account")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_account_kb(account: Account, clients: Sequence[Client]) -> InlineKeyboardMarkup:
    """
    Slot buttons plus account actions.

    Args:
        account: Status-derived account
        clients: Known clients, to label occupied slots
    """
    names: Dict[str, str] = {c.id: c.name for c in clients}

    buttons = []
    for idx, slot in enumerate(account.slots):
        emoji = STATUS_EMOJI.get(slot.status, "")
        if slot.client_id is None:
            label = f"{emoji} Slot {idx + 1}: assign client"
        else:
            name = names.get(slot.client_id, 'Unknown Client')
            label = f"{emoji} Slot {idx + 1}: {truncate_text(name, 30)}"
        buttons.append([InlineKeyboardButton(
            text=label,
            callback_data=f"slot:{account.id}:{idx}"
        )])

    buttons.append([
        InlineKeyboardButton(text="🔄 Renew master +1 month", callback_data=f"acc_renew:{account.id}"),
        InlineKeyboardButton(text="🗑 Delete", callback_data=f"acc_del:{account.id}")
    ])
    buttons.append([InlineKeyboardButton(text="⬅️ Back", callback_data="accounts")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_slot_kb(account_id: str, idx: int, occupied: bool) -> InlineKeyboardMarkup:
    """Actions for a single slot."""
    ref = f"{account_id}:{idx}"
    if occupied:
        buttons = [
            [
                InlineKeyboardButton(text="🔄 +1 month", callback_data=f"slot_renew:{ref}"),
                InlineKeyboardButton(text="📅 Set date", callback_data=f"slot_date:{ref}")
            ],
            [
                InlineKeyboardButton(text="💬 Draft reminder", callback_data=f"slot_msg:{ref}"),
                InlineKeyboardButton(text="❌ Release", callback_data=f"slot_release:{ref}")
            ]
        ]
    else:
        buttons = [[InlineKeyboardButton(text="👤 Assign client", callback_data=f"slot_assign:{ref}")]]

    buttons.append([InlineKeyboardButton(text="⬅️ Back", callback_data=f"acc:{account_id}")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_client_picker_kb(clients: Sequence[Client]) -> InlineKeyboardMarkup:
    """Choose a client for an empty slot."""
    buttons = [
        [InlineKeyboardButton(text=f"👤 {truncate_text(c.name)}", callback_data=f"pick_client:{c.id}")]
        for c in clients
    ]
    buttons.append([InlineKeyboardButton(text="❌ Cancel", callback_data="cancel_action:slot")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_clients_kb(clients: Sequence[Client]) -> InlineKeyboardMarkup:
    """One button per client."""
    buttons = [
        [InlineKeyboardButton(text=f"👤 {truncate_text(c.name)}", callback_data=f"client:{c.id}")]
        for c in clients
    ]
    buttons.append([InlineKeyboardButton(text="➕ Add client", callback_data="add_client")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_client_kb(client_id: str) -> InlineKeyboardMarkup:
    """Actions for a single client."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="✏️ Edit", callback_data=f"client_edit:{client_id}"),
            InlineKeyboardButton(text="🗑 Delete", callback_data=f"client_del:{client_id}")
        ],
        [InlineKeyboardButton(text="⬅️ Back", callback_data="clients")]
    ])


def get_confirm_kb(confirm_callback: str, cancel_callback: str) -> InlineKeyboardMarkup:
    """Yes / no confirmation."""
    return InlineKeyboardMarkup(inline_keyboard=[[
        InlineKeyboardButton(text="✅ Yes", callback_data=confirm_callback),
        InlineKeyboardButton(text="❌ No", callback_data=cancel_callback)
    ]])


def get_services_kb(service_names: List[str]) -> InlineKeyboardMarkup:
    """Quick picks for the service name step."""
    buttons = [
        [InlineKeyboardButton(text=name, callback_data=f"pick_service:{i}")]
        for i, name in enumerate(service_names)
    ]
    buttons.append([InlineKeyboardButton(text="❌ Cancel", callback_data="cancel_action:account")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def get_settings_kb() -> InlineKeyboardMarkup:
    """Notification settings keyboard."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text="🔑 Set bot token", callback_data="set_token")],
        [InlineKeyboardButton(text="💬 Set chat id", callback_data="set_chat")],
        [InlineKeyboardButton(text="📨 Test connection", callback_data="test_telegram")]
    ])


def get_cancel_kb(context: str = "general") -> InlineKeyboardMarkup:
    """
    Simple cancel keyboard with context-specific callback.
    
    Args:
        context: Context identifier (e.g., 'account', 'client', 'general')
    """
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text="❌ Cancel", 
            callback_data=f"cancel_action:{context}"
        )]
    ])


def get_refresh_dashboard_kb() -> InlineKeyboardMarkup:
    """Keyboard with refresh button for the dashboard"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text="↻ Refresh",
            callback_data="refresh_dashboard"
        )]
    ])
