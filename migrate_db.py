import argparse
import asyncio
import json
import logging
from pathlib import Path

from submanager.database.connection import DatabaseManager
from submanager.database.models import KEY_ACCOUNTS, KEY_CLIENTS, KEY_TELEGRAM
from submanager.database.repositories.record_repository import RecordRepository

logging.basicConfig(level=logging.INFO)

# localStorage keys of the browser version of SubManager
LEGACY_KEYS = {
    "submanager_accounts_v2": KEY_ACCOUNTS,
    "submanager_clients_v2": KEY_CLIENTS,
    "submanager_telegram": KEY_TELEGRAM,
}


async def import_legacy_export(db_path: str, export_path: Path) -> int:
    """
    Copy a JSON dump of the browser app's localStorage into the record store.

    Values may be JSON documents or JSON-encoded strings (as localStorage
    stores them). Returns the number of keys imported.
    """
    data = json.loads(export_path.read_text(encoding="utf-8"))
    records = RecordRepository(db_path)
    imported = 0

    for legacy_key, key in LEGACY_KEYS.items():
        if legacy_key not in data:
            continue
        value = data[legacy_key]
        if isinstance(value, str):
            value = json.loads(value)
        await records.save(key, value)
        imported += 1
        print(f"  ✅ {legacy_key} → {key}")

    return imported


async def migrate_database(db_path: str, export_path: Path | None = None):
    """Create the schema and optionally import a legacy export"""
    print("🔄 Starting database migration...")

    manager = DatabaseManager(db_path)
    await manager.init_db()
    print("✅ Database migration completed successfully!")

    if export_path is not None:
        print(f"\n📥 Importing {export_path}...")
        count = await import_legacy_export(db_path, export_path)
        print(f"✅ Imported {count} record keys")

    print("\n📋 Current records in database:")
    for key, size in await manager.record_sizes():
        print(f"  - {key} → {size} bytes")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or upgrade the SubManager database")
    parser.add_argument("--db", default="data.db", help="SQLite database path")
    parser.add_argument("--import-json", type=Path, help="localStorage export to import")
    args = parser.parse_args()

    asyncio.run(migrate_database(args.db, args.import_json))
