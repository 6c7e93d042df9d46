"""
Dashboard, alerts, outbound notification and insight handlers.
"""
import logging

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message, CallbackQuery

from ..api.gemini_client import GeminiClient
from ..config.settings import DATABASE_PATH, GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS
from ..keyboards.inline_keyboards import get_refresh_dashboard_kb, get_settings_kb
from ..keyboards.main_keyboards import BTN_ALERTS, BTN_DASHBOARD, BTN_NOTIFY
from ..services.alert_service import check_and_notify
from ..services.notification_builder import build_report
from ..services.report_formatter import format_action_list, format_stats_report
from ..services.snapshot_builder import build_snapshot
from ..services.stats import compute_stats
from ..utils.date_helpers import now_str, today
from ..utils.logging_helpers import log_error
from ..utils.text_helpers import safe_text
from .state import clear_step, is_admin

logger = logging.getLogger(__name__)
router = Router()


async def render_dashboard() -> str:
    """Stats plus the action list, recomputed from the store."""
    snap = await build_snapshot(DATABASE_PATH, today())
    stats = compute_stats(snap.accounts)
    report = build_report(snap.today, snap.accounts, snap.clients)

    return (
        format_stats_report(stats)
        + "\n\n"
        + format_action_list(report.items, snap.today)
        + f"\n\n<b>Updated at</b> {now_str()}"
    )


@router.message(Command("dashboard"))
@router.message(F.text == BTN_DASHBOARD)
async def dashboard_cmd(message: Message):
    """Handle dashboard command."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    try:
        await message.answer(
            await render_dashboard(),
            reply_markup=get_refresh_dashboard_kb(),
            parse_mode="HTML"
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error in dashboard command: {e}")


@router.callback_query(F.data == "refresh_dashboard")
async def refresh_dashboard(query: CallbackQuery):
    """Handle dashboard refresh callback."""
    try:
        new_msg = await render_dashboard()
        await query.message.edit_text(new_msg, reply_markup=get_refresh_dashboard_kb(), parse_mode="HTML")
        await query.answer("✅ Updated", show_alert=False)
    except Exception as e:
        log_error(e)
        logger.error(f"Error refreshing dashboard: {e}")
        await query.answer("❌ Refresh failed", show_alert=True)


@router.message(Command("alerts"))
@router.message(F.text == BTN_ALERTS)
async def alerts_cmd(message: Message):
    """Only the items needing attention."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    try:
        snap = await build_snapshot(DATABASE_PATH, today())
        report = build_report(snap.today, snap.accounts, snap.clients)
        await message.answer(format_action_list(report.items, snap.today), parse_mode="HTML")
    except Exception as e:
        log_error(e)
        logger.error(f"Error in alerts command: {e}")


@router.message(Command("notify"))
@router.message(F.text == BTN_NOTIFY)
async def notify_cmd(message: Message):
    """Send the alert summary to the configured destination."""
    if not is_admin(message.from_user.id):
        return
    clear_step(message.from_user.id)

    try:
        status_msg = await message.answer("📤 Sending...")
        report, delivered = await check_and_notify(DATABASE_PATH, today())

        if delivered:
            await status_msg.edit_text(f"✅ Sent! ({len(report.items)} items)")
            return

        await status_msg.edit_text(
            "❌ Could not send the alert.\n\n"
            "Check the bot token and chat id in ⚙️ Settings.",
            reply_markup=get_settings_kb()
        )
    except Exception as e:
        log_error(e)
        logger.error(f"Error in notify command: {e}")


@router.message(Command("insights"))
async def insights_cmd(message: Message):
    """AI summary of utilisation and health."""
    if not is_admin(message.from_user.id):
        return

    try:
        snap = await build_snapshot(DATABASE_PATH, today())
        async with GeminiClient(GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS) as gemini:
            summary = await gemini.summarize(snap.accounts, snap.clients)

        await message.answer(f"💡 <b>Insights</b>\n\n{safe_text(summary)}", parse_mode="HTML")
    except Exception as e:
        log_error(e)
        logger.error(f"Error in insights command: {e}")
