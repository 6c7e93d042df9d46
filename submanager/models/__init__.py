from .entities import (
    STATUS_ACTIVE,
    STATUS_EXPIRING_SOON,
    STATUS_EXPIRED,
    STATUS_EMPTY,
    Client,
    Slot,
    Account,
    ServiceDef,
    NotificationConfig,
    DashboardStats,
    parse_date,
    format_date
)
from .report import KIND_MASTER, KIND_SLOT, ReportItem, Report

__all__ = [
    "STATUS_ACTIVE",
    "STATUS_EXPIRING_SOON",
    "STATUS_EXPIRED",
    "STATUS_EMPTY",
    "Client",
    "Slot",
    "Account",
    "ServiceDef",
    "NotificationConfig",
    "DashboardStats",
    "parse_date",
    "format_date",
    "KIND_MASTER",
    "KIND_SLOT",
    "ReportItem",
    "Report"
]
