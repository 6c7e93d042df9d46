"""
Database schema definitions.
"""
# Record keys; each holds one JSON document.
KEY_ACCOUNTS = "accounts"
KEY_CLIENTS = "clients"
KEY_SERVICES = "services"
KEY_TELEGRAM = "telegram"



class DatabaseSchema:
    """Database schema manager"""
    
    SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS records (
        key TEXT PRIMARY KEY,
        payload TEXT NOT NULL,
        updated_at INTEGER NOT NULL
    );
    """
