"""
Service for loading the current record set with derived statuses.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..database.repositories.account_repository import AccountRepository
from ..database.repositories.client_repository import ClientRepository
from ..models.entities import Account, Client
from .status_engine import derive_statuses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Accounts (statuses derived for ``today``) and clients at one point in time"""

    today: date
    accounts: List[Account]
    clients: List[Client]

    def account(self, account_id: str) -> Optional[Account]:
        for acc in self.accounts:
            if acc.id == account_id:
                return acc
        return None

    def client(self, client_id: str) -> Optional[Client]:
        for client in self.clients:
            if client.id == client_id:
                return client
        return None


async def build_snapshot(db_path: str, today: date) -> Snapshot:
    """Load accounts and clients and derive statuses for ``today``."""
    accounts = await AccountRepository(db_path).get_all_accounts()
    clients = await ClientRepository(db_path).get_all_clients()

    derived = derive_statuses(today, accounts)
    logger.debug(f"Snapshot: {len(derived)} accounts, {len(clients)} clients")
    return Snapshot(today=today, accounts=derived, clients=clients)
