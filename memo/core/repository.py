"""
FILE: memo/core/repository.py
PURPOSE: Local key/value blob storage on SQLite (the app's "defaults" store)
EXPORTS:
  - configure(db_path) -> None
  - get_connection() -> Connection
  - init_database(conn) -> None
  - get_blob(key) -> bytes | None
  - set_blob(key, data) -> None
  - SQLiteDefaults (get/set object wrapper used by TaskStore)
DEPENDENCIES:
  - sqlite3 (stdlib)
  - pathlib (stdlib)
  - datetime (stdlib)
NOTES:
  - Database stored at ~/.memo/memo.db unless configure() points elsewhere
  - Auto-creates directory and initializes schema on first connection
  - Values are opaque bytes; this layer never looks inside them
  - set_blob() always overwrites the previous value for the key
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


# Database file location (cross-platform)
DB_DIR = Path.home() / ".memo"
DB_PATH = DB_DIR / "memo.db"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS defaults (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def configure(db_path: Union[str, Path]) -> None:
    """
    Point the module at a different database file.

    Args:
        db_path: Path to the SQLite file (parent directory is created lazily)
    """
    global DB_DIR, DB_PATH
    DB_PATH = Path(db_path).expanduser()
    DB_DIR = DB_PATH.parent
    logger.debug("Defaults database set to %s", DB_PATH)


def get_connection() -> sqlite3.Connection:
    """
    Get SQLite connection to the defaults database.

    Creates the data directory if it doesn't exist.
    Enables row_factory for dict-like row access.
    Initializes database schema on first connection.
    """
    DB_DIR.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row

    init_database(conn)

    return conn


def init_database(conn: sqlite3.Connection) -> None:
    """
    Initialize database schema if the table doesn't exist.

    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
    """
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='defaults'"
    )
    if cursor.fetchone() is None:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
        logger.info("Initialized defaults schema in %s", DB_PATH)


def get_blob(key: str) -> Optional[bytes]:
    """
    Fetch the value stored under key.

    Returns:
        Stored bytes, or None if the key was never written
    """
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT value FROM defaults WHERE key = ?", (key,)
        ).fetchone()
    finally:
        conn.close()

    if row is None:
        return None
    value = row["value"]
    # Values written by other tools may come back as TEXT
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def set_blob(key: str, data: bytes) -> None:
    """
    Store data under key, replacing whatever was there.

    Raises:
        sqlite3.Error: If the write fails
    """
    conn = get_connection()
    now = datetime.now().isoformat()
    try:
        conn.execute(
            """
            INSERT INTO defaults (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value,
                                           updated_at = excluded.updated_at
            """,
            (key, sqlite3.Binary(data), now),
        )
        conn.commit()
    finally:
        conn.close()


class SQLiteDefaults:
    """get/set view over this module, the default backing for TaskStore."""

    def get(self, key: str) -> Optional[bytes]:
        return get_blob(key)

    def set(self, key: str, data: bytes) -> None:
        set_blob(key, data)
