"""
Build the current report and deliver it to the configured destination.
"""
import logging
from datetime import date
from typing import Tuple

from ..api.telegram_sender import send_notification
from ..database.repositories.settings_repository import SettingsRepository
from ..models.report import Report
from .notification_builder import build_report
from .snapshot_builder import build_snapshot

logger = logging.getLogger(__name__)


async def check_and_notify(db_path: str, now: date) -> Tuple[Report, bool]:
    """
    Recompute statuses, build the report and send its message once.

    Returns:
        (report, delivered); delivered is False when the destination is not
        configured or Telegram refused the message
    """
    config = await SettingsRepository(db_path).get_notification_config()
    snap = await build_snapshot(db_path, now)
    report = build_report(now, snap.accounts, snap.clients)

    if not config.is_complete:
        logger.warning("⚠️ Alert destination not configured, skipping delivery")
        return report, False

    delivered = await send_notification(config, report.message)
    return report, delivered
