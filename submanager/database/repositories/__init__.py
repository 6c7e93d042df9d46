"""
Database repositories initialization
"""
from .record_repository import RecordRepository
from .account_repository import AccountRepository
from .client_repository import ClientRepository
from .service_repository import ServiceRepository
from .settings_repository import SettingsRepository

__all__ = [
    "RecordRepository",
    "AccountRepository",
    "ClientRepository",
    "ServiceRepository",
    "SettingsRepository"
]
