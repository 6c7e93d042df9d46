"""
Outbound alert delivery to the configured Telegram chat.
"""
import logging

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from aiogram.utils.token import TokenValidationError

from ..models.entities import NotificationConfig

logger = logging.getLogger(__name__)

TEST_MESSAGE = "🔔 SubManager Pro: Connection Successful!"


async def send_notification(config: NotificationConfig, text: str) -> bool:
    """
    Send one Markdown message with the stored bot token.

    Single attempt; any failure is logged and reported as False.

    Args:
        config: Bot token and destination chat id
        text: Markdown-formatted message

    Returns:
        True if Telegram accepted the message
    """
    if not config.is_complete:
        logger.warning("Notification settings incomplete, message not sent")
        return False

    try:
        bot = Bot(token=config.bot_token)
    except TokenValidationError as e:
        logger.error(f"Invalid alert bot token: {e}")
        return False

    try:
        await bot.send_message(config.chat_id, text, parse_mode="Markdown")
        logger.info(f"📤 Alert sent to {config.chat_id}")
        return True
    except TelegramAPIError as e:
        logger.error(f"Failed to send Telegram message: {e}")
        return False
    except Exception as e:
        logger.error(f"Failed to send Telegram message: {e}", exc_info=True)
        return False
    finally:
        await bot.session.close()
