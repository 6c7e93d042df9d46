"""
Report formatting service.

``format_alert_message`` produces the Markdown text sent to the alert
destination; the other formatters produce HTML for the bot's own chat.
"""
from datetime import date
from typing import Dict, List, Sequence

from ..models.entities import Account, Client, DashboardStats
from ..models.report import KIND_MASTER, KIND_SLOT, ReportItem
from ..utils.formatters import (
    STATUS_EMOJI,
    format_relative_days,
    format_slot_usage,
    format_status
)
from ..utils.text_helpers import escape_markdown, safe_text

HEALTHY_MESSAGE = "✅ SubManager: Everything is healthy."


def format_alert_message(items: Sequence[ReportItem]) -> str:
    """
    Format the outbound alert (Telegram Markdown).

    Args:
        items: Sorted report items

    Returns:
        The healthy sentence when there is nothing to do, otherwise a
        master-account block followed by a client-renewal block; a block
        with no items is left out
    """
    if not items:
        return HEALTHY_MESSAGE

    masters = [i for i in items if i.kind == KIND_MASTER]
    slots = [i for i in items if i.kind == KIND_SLOT]

    msg = "⚠️ *Subscription Alerts*\n\n"

    if masters:
        msg += "*🔥 CRITICAL: Master Accounts*\n"
        for item in masters:
            msg += (
                f"• {escape_markdown(item.title)} ({escape_markdown(item.login)})"
                f" - {item.date.isoformat()}\n"
            )
        msg += "\n"

    if slots:
        msg += "*⏳ Client Renewals Needed*\n"
        for item in slots:
            msg += (
                f"• {escape_markdown(item.title)} ({escape_markdown(item.subtitle)})"
                f" - {item.date.isoformat()}\n"
            )

    return msg.rstrip("\n")


def format_stats_report(stats: DashboardStats) -> str:
    """
    Format the dashboard overview.

    Args:
        stats: Counters from compute_stats

    Returns:
        Formatted report string
    """
    return (
        "📊 <b>Subscription overview</b>\n\n"
        f"🏢 <b>Master accounts =</b> [ {stats.total_accounts} ]\n"
        f"🎟 <b>Slots used =</b> [ {format_slot_usage(stats.used_slots, stats.total_slots)} ]\n"
        f"👥 <b>Active clients =</b> [ {stats.active_clients} ]\n"
        f"⏰ <b>Slots expiring soon =</b> [ {stats.expiring_slots} ]\n"
        f"🔥 <b>Masters needing renewal =</b> [ {stats.expiring_masters} ]"
    )


def format_action_list(items: Sequence[ReportItem], now: date) -> str:
    """Format the on-screen list of items needing attention."""
    if not items:
        return "✅ <b>All systems go</b>\nNothing expires in the next few days."

    lines = [f"🚨 <b>Action required</b> [ {len(items)} ]\n"]
    for item in items:
        icon = "🔴" if item.urgent else "⏰"
        when = format_relative_days(item.date, now)
        if item.kind == KIND_MASTER:
            lines.append(
                f"{icon} <b>Renew {safe_text(item.title)}</b> (master)\n"
                f"     📅 {item.date.isoformat()} ({when})"
            )
        else:
            lines.append(
                f"{icon} <b>{safe_text(item.title)}</b> - {safe_text(item.subtitle)}\n"
                f"     📅 {item.date.isoformat()} ({when})"
            )
    return "\n".join(lines)


def format_account_line(account: Account) -> str:
    """One-line summary used in account lists and buttons."""
    emoji = STATUS_EMOJI.get(account.status, "")
    usage = format_slot_usage(account.used_slots, account.total_slots)
    return f"{emoji} {account.service_name} ({usage}) - {account.expiry_date.isoformat()}"


def format_account_details(
    account: Account,
    clients: Sequence[Client],
    now: date
) -> str:
    """
    Format a master account with its slots.

    Args:
        account: Status-derived account
        clients: Known clients, to resolve slot names
        now: Current day

    Returns:
        Formatted details string
    """
    names: Dict[str, str] = {c.id: c.name for c in clients}

    msg = (
        f"🏢 <b>{safe_text(account.service_name)}</b>\n\n"
        f"📧 <b>Login =</b> <code>{safe_text(account.email)}</code>\n"
    )
    if account.password:
        msg += f"🔑 <b>Password =</b> <tg-spoiler>{safe_text(account.password)}</tg-spoiler>\n"
    msg += (
        f"📅 <b>Expires =</b> [ {account.expiry_date.isoformat()} ] "
        f"({format_relative_days(account.expiry_date, now)})\n"
        f"📌 <b>Status =</b> {format_status(account.status)}\n"
        f"🎟 <b>Slots =</b> [ {format_slot_usage(account.used_slots, account.total_slots)} ]\n"
    )
    if account.notes:
        msg += f"📝 {safe_text(account.notes)}\n"

    msg += "\n"
    for idx, slot in enumerate(account.slots, start=1):
        emoji = STATUS_EMOJI.get(slot.status, "")
        if slot.client_id is None:
            msg += f"{emoji} <b>Slot {idx}</b> - empty\n"
            continue
        name = names.get(slot.client_id, "Unknown Client")
        expiry = slot.expiry_date.isoformat() if slot.expiry_date else "-"
        msg += f"{emoji} <b>Slot {idx}</b> - {safe_text(name)} - {expiry}\n"

    return msg.rstrip("\n")


def format_client_details(
    client: Client,
    accounts: Sequence[Account]
) -> str:
    """Format a client with every slot they hold."""
    msg = f"👤 <b>{safe_text(client.name)}</b>\n"
    if client.phone:
        msg += f"📞 <code>{safe_text(client.phone)}</code>\n"
    if client.notes:
        msg += f"📝 {safe_text(client.notes)}\n"

    held: List[str] = []
    for account in accounts:
        for slot in account.slots:
            if slot.client_id == client.id:
                expiry = slot.expiry_date.isoformat() if slot.expiry_date else "-"
                held.append(
                    f"{STATUS_EMOJI.get(slot.status, '')} {safe_text(account.service_name)} - {expiry}"
                )

    msg += f"\n🎟 <b>Slots =</b> [ {len(held)} ]\n"
    if held:
        msg += "\n".join(held)
    return msg.rstrip("\n")
