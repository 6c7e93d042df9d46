"""
Notification settings repository.
"""
import logging

from ...models.entities import NotificationConfig
from ..models import KEY_TELEGRAM
from .record_repository import RecordRepository

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Repository for the alert destination"""

    def __init__(self, db_path: str):
        self.records = RecordRepository(db_path)

    async def get_notification_config(self) -> NotificationConfig:
        """Get the stored config, empty if never saved"""
        data = await self.records.load(KEY_TELEGRAM)
        return NotificationConfig.from_dict(data if isinstance(data, dict) else None)

    async def save_notification_config(self, config: NotificationConfig) -> None:
        """Save the alert destination"""
        await self.records.save(KEY_TELEGRAM, config.to_dict())
        logger.info("✅ Notification settings saved")
