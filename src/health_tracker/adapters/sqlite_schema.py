"""Schema for the local SQLite store."""

import logging

import aiosqlite

_logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_STATEMENTS = [
    """CREATE TABLE IF NOT EXISTS entries (
        id TEXT PRIMARY KEY,
        type TEXT NOT NULL,
        subtype TEXT,
        date TEXT NOT NULL,
        timestamp TEXT NOT NULL,
        notes TEXT NOT NULL DEFAULT '',
        has_photo INTEGER NOT NULL DEFAULT 0,
        duration_minutes INTEGER
    )""",
    "CREATE INDEX IF NOT EXISTS idx_entries_date ON entries (date)",
    "CREATE INDEX IF NOT EXISTS idx_entries_type ON entries (type)",
    "CREATE INDEX IF NOT EXISTS idx_entries_date_type ON entries (date, type)",
    """CREATE TABLE IF NOT EXISTS photos (
        id TEXT PRIMARY KEY,
        entry_id TEXT REFERENCES entries (id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        category TEXT NOT NULL CHECK (category IN ('meal', 'body')),
        sync_status TEXT NOT NULL
            CHECK (sync_status IN ('unsynced', 'synced', 'processed')),
        payload BLOB NOT NULL,
        timestamp TEXT NOT NULL
    )""",
    "CREATE INDEX IF NOT EXISTS idx_photos_entry_id ON photos (entry_id)",
    "CREATE INDEX IF NOT EXISTS idx_photos_date ON photos (date)",
    "CREATE INDEX IF NOT EXISTS idx_photos_category ON photos (category)",
    "CREATE INDEX IF NOT EXISTS idx_photos_sync_status ON photos (sync_status)",
    """CREATE TABLE IF NOT EXISTS daily_summary (
        date TEXT PRIMARY KEY,
        water_oz INTEGER,
        weight TEXT,
        sleep TEXT,
        notes TEXT
    )""",
    """CREATE TABLE IF NOT EXISTS analysis (
        date TEXT PRIMARY KEY,
        data TEXT NOT NULL
    )""",
    """CREATE TABLE IF NOT EXISTS profile (
        key TEXT PRIMARY KEY,
        value TEXT
    )""",
    """CREATE TABLE IF NOT EXISTS meal_plan (
        generated_date TEXT PRIMARY KEY,
        data TEXT NOT NULL
    )""",
]


async def create_schema(conn: aiosqlite.Connection) -> None:
    """Create all tables and indexes. Safe to call repeatedly."""
    for statement in _STATEMENTS:
        await conn.execute(statement)
    await conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
    _logger.info("Local store schema ready (version %s)", SCHEMA_VERSION)
