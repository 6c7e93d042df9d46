"""
Account repository. Writes change single entries of the stored list.
"""
from typing import Callable, List, Optional, Tuple
import logging

from ...models.entities import Account
from ..models import KEY_ACCOUNTS
from .record_repository import RecordRepository, item_id

logger = logging.getLogger(__name__)

class AccountRepository:
    """Repository for master accounts and their slots"""

    def __init__(self, db_path: str):
        self.records = RecordRepository(db_path)

    async def get_all_accounts(self) -> List[Account]:
        """
        Load all accounts as stored.

        Statuses are whatever was last saved; run derive_statuses before use.
        Entries that cannot be decoded are skipped here but stay in the store.
        """
        data = await self.records.load(KEY_ACCOUNTS) or []
        accounts = []
        for item in data:
            try:
                accounts.append(Account.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed account record: {e}")
        return accounts

    async def get_account(self, account_id: str) -> Optional[Account]:
        """Get one account by id"""
        for account in await self.get_all_accounts():
            if account.id == account_id:
                return account
        return None

    async def save_accounts(self, accounts: List[Account]) -> None:
        """Replace the whole stored list; entries that failed to decode are dropped"""
        await self.records.save(KEY_ACCOUNTS, [a.to_dict() for a in accounts])

    async def add_accounts(self, new_accounts: List[Account]) -> None:
        """Append accounts to the stored list"""
        await self.records.append_items(KEY_ACCOUNTS, [a.to_dict() for a in new_accounts])
        logger.info(f"➕ Added {len(new_accounts)} accounts")

    async def update_account(self, updated: Account) -> bool:
        """
        Replace the account with the same id.
        Returns False if it no longer exists.
        """
        return await self.records.replace_item(KEY_ACCOUNTS, updated.to_dict())

    async def modify_account(
        self,
        account_id: str,
        change: Callable[[Account], Account]
    ) -> Optional[Tuple[Account, Account]]:
        """
        Apply ``change`` to the stored account and save the result in one
        locked step, so concurrent edits of the same account are not lost.

        Returns:
            (stored, changed); ``changed is stored`` when ``change`` was a
            no-op. None if the account is missing or cannot be decoded
        """
        result: List[Tuple[Account, Account]] = []

        def mutate(data):
            data = list(data or [])
            for idx, item in enumerate(data):
                if item_id(item) != account_id:
                    continue
                try:
                    account = Account.from_dict(item)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(f"Cannot change malformed account {account_id}: {e}")
                    return None
                updated = change(account)
                result.append((account, updated))
                if updated is account:
                    return None
                data[idx] = updated.to_dict()
                return data
            return None

        await self.records.update(KEY_ACCOUNTS, mutate)
        return result[0] if result else None

    async def delete_account(self, account_id: str) -> bool:
        """Delete an account with all its slots"""
        deleted = await self.records.remove_item(KEY_ACCOUNTS, account_id)
        if deleted:
            logger.info(f"🗑️ Deleted account {account_id}")
        return deleted
