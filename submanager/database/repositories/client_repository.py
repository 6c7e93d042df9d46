"""
Client repository.
"""
from typing import List, Optional
import logging

from ...models.entities import Client
from ..models import KEY_CLIENTS
from .record_repository import RecordRepository

logger = logging.getLogger(__name__)

class ClientRepository:
    """Repository for clients"""

    def __init__(self, db_path: str):
        self.records = RecordRepository(db_path)

    async def get_all_clients(self) -> List[Client]:
        """Get all clients"""
        data = await self.records.load(KEY_CLIENTS) or []
        clients = []
        for item in data:
            try:
                clients.append(Client.from_dict(item))
            except (KeyError, TypeError) as e:
                logger.warning(f"Skipping malformed client record: {e}")
        return clients

    async def get_client(self, client_id: str) -> Optional[Client]:
        """Get one client by id"""
        for client in await self.get_all_clients():
            if client.id == client_id:
                return client
        return None

    async def save_clients(self, clients: List[Client]) -> None:
        """Replace the whole stored list; entries that failed to decode are dropped"""
        await self.records.save(KEY_CLIENTS, [c.to_dict() for c in clients])

    async def add_client(self, client: Client) -> None:
        """Add a new client"""
        await self.records.append_items(KEY_CLIENTS, [client.to_dict()])
        logger.info(f"➕ Added client {client.name}")

    async def update_client(self, updated: Client) -> bool:
        """Replace the client with the same id"""
        return await self.records.replace_item(KEY_CLIENTS, updated.to_dict())

    async def delete_client(self, client_id: str) -> bool:
        """
        Delete a client.

        Slots still pointing at the client are left as they are and show up
        as 'Unknown Client' until released.
        """
        deleted = await self.records.remove_item(KEY_CLIENTS, client_id)
        if deleted:
            logger.info(f"🗑️ Deleted client {client_id}")
        return deleted
