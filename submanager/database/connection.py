"""
SQLite connection handling for the record store.
"""
import aiosqlite
from typing import AsyncIterator, List, Tuple
from contextlib import asynccontextmanager
import logging

from .models import DatabaseSchema

logger = logging.getLogger(__name__)

class DatabaseManager:
    """Owns the database file: schema creation and housekeeping queries"""

    def __init__(self, db_path: str = "data.db"):
        """
        Args:
            db_path: Path to the SQLite file; created on first connect
        """
        self.db_path = db_path
        logger.info(f"📁 Database path: {db_path}")

    @asynccontextmanager
    async def get_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection that is closed when the block exits"""
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()

    async def init_db(self):
        """Create the records table if it does not exist yet"""
        async with self.get_connection() as conn:
            await conn.executescript(DatabaseSchema.SCHEMA_SQL)
            await conn.commit()

        logger.info("✅ Database schema initialized")

    async def list_tables(self) -> List[str]:
        async with self.get_connection() as conn:
            cur = await conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
            )
            return [row[0] for row in await cur.fetchall()]

    async def record_sizes(self) -> List[Tuple[str, int]]:
        """(key, payload bytes) for every stored record"""
        async with self.get_connection() as conn:
            cur = await conn.execute(
                "SELECT key, length(payload) FROM records ORDER BY key"
            )
            return [(row[0], row[1]) for row in await cur.fetchall()]
