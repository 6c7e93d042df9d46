from .gemini_client import GeminiClient, DRAFT_FALLBACK, INSIGHTS_FALLBACK
from .telegram_sender import send_notification, TEST_MESSAGE

__all__ = [
    "GeminiClient",
    "DRAFT_FALLBACK",
    "INSIGHTS_FALLBACK",
    "send_notification",
    "TEST_MESSAGE"
]
