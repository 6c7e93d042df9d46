from .status_engine import (
    EXPIRING_WINDOW_DAYS,
    compute_status,
    derive_slot_status,
    derive_account_status,
    derive_statuses
)
from .renewal import add_months, renew
from .slot_allocator import (
    assign_client,
    release_client,
    set_slot_expiry,
    renew_slot,
    renew_account
)
from .notification_builder import collect_items, build_report
from .stats import compute_stats
from .account_factory import (
    create_account,
    create_client,
    create_empty_slots,
    accounts_from_descriptors
)
from .errors import SubManagerError, ValidationError
from .report_formatter import (
    HEALTHY_MESSAGE,
    format_alert_message,
    format_stats_report,
    format_action_list,
    format_account_line,
    format_account_details,
    format_client_details
)

__all__ = [
    # Status engine
    "EXPIRING_WINDOW_DAYS",
    "compute_status",
    "derive_slot_status",
    "derive_account_status",
    "derive_statuses",
    # Renewal
    "add_months",
    "renew",
    # Slot allocator
    "assign_client",
    "release_client",
    "set_slot_expiry",
    "renew_slot",
    "renew_account",
    # Notifications and stats
    "collect_items",
    "build_report",
    "compute_stats",
    # Account factory
    "create_account",
    "create_client",
    "create_empty_slots",
    "accounts_from_descriptors",
    "SubManagerError",
    "ValidationError",
    # Report formatter
    "HEALTHY_MESSAGE",
    "format_alert_message",
    "format_stats_report",
    "format_action_list",
    "format_account_line",
    "format_account_details",
    "format_client_details"
]
