from .date_helpers import today, now_str, parse_user_date, days_until
from .text_helpers import safe_text, escape_markdown, truncate_text
from .formatters import (
    STATUS_EMOJI,
    STATUS_LABEL,
    format_status,
    format_slot_usage,
    format_relative_days
)
from .logging_helpers import log_error

__all__ = [
    "today",
    "now_str",
    "parse_user_date",
    "days_until",
    "safe_text",
    "escape_markdown",
    "truncate_text",
    "STATUS_EMOJI",
    "STATUS_LABEL",
    "format_status",
    "format_slot_usage",
    "format_relative_days",
    "log_error"
]
