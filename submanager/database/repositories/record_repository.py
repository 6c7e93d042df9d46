"""
Key/value record store for whole JSON documents.

List documents are changed item by item under a per-key lock, so concurrent
handlers never overwrite each other and entries this version cannot decode
are written back untouched.
"""
import aiosqlite
import asyncio
import json
import time
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

_locks: Dict[Tuple[str, str], asyncio.Lock] = {}


def _lock_for(db_path: str, key: str) -> asyncio.Lock:
    return _locks.setdefault((db_path, key), asyncio.Lock())


def item_id(item: Any) -> Optional[str]:
    """Id of a stored list entry, None if it has none"""
    if isinstance(item, dict) and item.get("id") is not None:
        return str(item["id"])
    return None


class CorruptRecordError(Exception):
    """The stored payload of a key is not valid JSON; refusing to overwrite it"""


class RecordRepository:
    """Load and save one JSON document per key"""

    def __init__(self, db_path: str):
        self.db_path = db_path

    async def _read(self, db: aiosqlite.Connection, key: str) -> Tuple[bool, Any]:
        """(row exists, decoded payload); raises CorruptRecordError"""
        cur = await db.execute("SELECT payload FROM records WHERE key=?", (key,))
        row = await cur.fetchone()
        if not row or not row[0]:
            return False, None
        try:
            return True, json.loads(row[0])
        except (json.JSONDecodeError, TypeError) as e:
            raise CorruptRecordError(f"Record '{key}' is not valid JSON") from e

    async def _write(self, db: aiosqlite.Connection, key: str, blob: Any) -> None:
        await db.execute(
            "INSERT OR REPLACE INTO records(key, payload, updated_at) VALUES (?, ?, ?)",
            (key, json.dumps(blob, ensure_ascii=False), int(time.time()))
        )
        await db.commit()

    async def load(self, key: str) -> Optional[Any]:
        """Get the stored document for a key, or None"""
        async with aiosqlite.connect(self.db_path) as db:
            try:
                return (await self._read(db, key))[1]
            except CorruptRecordError:
                logger.warning(f"Failed to decode record '{key}'")
                return None

    async def save(self, key: str, blob: Any) -> None:
        """Replace the stored document for a key"""
        async with _lock_for(self.db_path, key):
            async with aiosqlite.connect(self.db_path) as db:
                await self._write(db, key, blob)

    async def update(self, key: str, mutate: Callable[[Any], Optional[Any]]) -> bool:
        """
        Read, change and write one document while holding the key's lock.

        Args:
            key: Record key
            mutate: Gets the stored document (None if missing) and returns
                the new one, or None to leave the record as it is

        Returns:
            True if a new document was written

        Raises:
            CorruptRecordError: the stored payload cannot be decoded
        """
        async with _lock_for(self.db_path, key):
            async with aiosqlite.connect(self.db_path) as db:
                _, blob = await self._read(db, key)
                new_blob = mutate(blob)
                if new_blob is None:
                    return False
                await self._write(db, key, new_blob)
                return True

    async def append_items(self, key: str, items: List[Dict[str, Any]]) -> None:
        """Append entries to a list document"""
        await self.update(key, lambda data: list(data or []) + list(items))

    async def replace_item(self, key: str, item: Dict[str, Any]) -> bool:
        """Swap the entry with the same id; False if there is none"""
        wanted = item_id(item)

        def mutate(data):
            data = list(data or [])
            if not any(item_id(i) == wanted for i in data):
                return None
            return [item if item_id(i) == wanted else i for i in data]

        return await self.update(key, mutate)

    async def remove_item(self, key: str, wanted: str) -> bool:
        """Drop the entry with the given id; False if there is none"""
        def mutate(data):
            data = list(data or [])
            remaining = [i for i in data if item_id(i) != wanted]
            return remaining if len(remaining) != len(data) else None

        return await self.update(key, mutate)

    async def get_updated_at(self, key: str) -> Optional[int]:
        """Get timestamp of the last save of a key"""
        async with aiosqlite.connect(self.db_path) as db:
            cur = await db.execute(
                "SELECT updated_at FROM records WHERE key=?",
                (key,)
            )
            row = await cur.fetchone()
            return row[0] if row else None
