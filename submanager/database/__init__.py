from .models import (
    DatabaseSchema,
    KEY_ACCOUNTS,
    KEY_CLIENTS,
    KEY_SERVICES,
    KEY_TELEGRAM
)
from .connection import DatabaseManager
from .repositories import (
    RecordRepository,
    AccountRepository,
    ClientRepository,
    ServiceRepository,
    SettingsRepository
)

__all__ = [
    "DatabaseSchema",
    "KEY_ACCOUNTS",
    "KEY_CLIENTS",
    "KEY_SERVICES",
    "KEY_TELEGRAM",
    "DatabaseManager",
    "RecordRepository",
    "AccountRepository",
    "ClientRepository",
    "ServiceRepository",
    "SettingsRepository"
]
