from .setup import setup_schedulers
from .daily_report import send_daily_alerts

__all__ = [
    "setup_schedulers",
    "send_daily_alerts"
]
