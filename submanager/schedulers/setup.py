"""
Registers the bot's background jobs.
"""
import logging
from zoneinfo import ZoneInfo

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from .daily_report import send_daily_alerts
from ..config.settings import (
    DAILY_REPORT_HOUR,
    DAILY_REPORT_MINUTE,
    DATABASE_PATH,
    TIMEZONE
)

logger = logging.getLogger(__name__)

DAILY_ALERTS_JOB_ID = "daily_alerts"


def setup_schedulers(scheduler: AsyncIOScheduler, db_path: str = DATABASE_PATH):
    """
    Add the daily alert job; re-running replaces the existing job.

    Args:
        scheduler: APScheduler instance (started by the caller)
        db_path: Record store the job reads from
    """
    scheduler.add_job(
        send_daily_alerts,
        "cron",
        hour=DAILY_REPORT_HOUR,
        minute=DAILY_REPORT_MINUTE,
        timezone=ZoneInfo(TIMEZONE),
        id=DAILY_ALERTS_JOB_ID,
        replace_existing=True,
        args=[db_path]
    )

    logger.info(
        f"⏰ Daily alerts scheduled at {DAILY_REPORT_HOUR:02d}:{DAILY_REPORT_MINUTE:02d} ({TIMEZONE})"
    )
