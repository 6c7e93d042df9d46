"""
Daily alert scheduler service.
"""
import logging

from ..config.settings import DATABASE_PATH
from ..services.alert_service import check_and_notify
from ..utils.date_helpers import today

logger = logging.getLogger(__name__)

async def send_daily_alerts(db_path: str = DATABASE_PATH):
    """
    Send the daily alert summary to the configured destination.

    Failures are logged; the job runs again the next day.
    """
    try:
        report, delivered = await check_and_notify(db_path, today())

        if delivered:
            logger.info(f"📤 Daily alert sent ({len(report.items)} items)")
        else:
            logger.warning("⚠️ Daily alert was not delivered")

    except Exception as e:
        logger.error(f"Error in send_daily_alerts: {e}", exc_info=True)

    logger.info("✅ Daily Alerts Completed.")
