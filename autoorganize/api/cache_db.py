"""SQLite cache for metadata provider responses."""

import json
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from autoorganize.config.settings import CACHE_EXPIRATION_SECONDS, DEFAULT_CACHE_DB

CACHE_TABLE = 'api_cache'


class CacheDB:
    """
    Provider responses stored as JSON, keyed by request.

    Entries older than the expiration delay are ignored on read and removed
    by purge_expired. Worker threads share the connection under a lock.

    Attributes:
        db_path: Path to the SQLite database file.
        conn: Active database connection, or None if closed.
    """

    def __init__(self, db_path: Path = DEFAULT_CACHE_DB) -> None:
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self._connect()

    def _connect(self) -> None:
        try:
            self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self.create_tables()
        except sqlite3.Error as e:
            logger.error(f"Cache database connection error: {e}")

    def create_tables(self) -> None:
        if not self.conn:
            return

        try:
            self.conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {CACHE_TABLE} (
                    key TEXT PRIMARY KEY,
                    result TEXT,
                    timestamp INTEGER
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating cache table: {e}")

    def get(self, key: str, expiration: int = CACHE_EXPIRATION_SECONDS) -> Optional[Any]:
        """
        Look up a cached response.

        Args:
            key: Request key (endpoint and sorted query).
            expiration: Maximum age in seconds.

        Returns:
            The decoded response, or None when missing or too old.
        """
        if not self.conn:
            return None

        try:
            with self._lock:
                row = self.conn.execute(
                    f"SELECT result, timestamp FROM {CACHE_TABLE} WHERE key = ?",
                    (key,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Error reading cache entry {key}: {e}")
            return None

        if not row or time.time() - row[1] >= expiration:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupted cache entry {key}: {e}")
            return None

    def set(self, key: str, result: Any) -> None:
        """Store a JSON-serializable response under a request key."""
        if not self.conn:
            return

        try:
            with self._lock:
                self.conn.execute(
                    f"INSERT OR REPLACE INTO {CACHE_TABLE} (key, result, timestamp) VALUES (?, ?, ?)",
                    (key, json.dumps(result), int(time.time()))
                )
                self.conn.commit()
        except sqlite3.Error as e:
            logger.warning(f"Error writing cache entry {key}: {e}")

    def purge_expired(self, expiration: int = CACHE_EXPIRATION_SECONDS) -> int:
        """
        Delete entries older than the expiration delay.

        Returns:
            Number of deleted entries.
        """
        if not self.conn:
            return 0

        try:
            with self._lock:
                cursor = self.conn.execute(
                    f"DELETE FROM {CACHE_TABLE} WHERE timestamp <= ?",
                    (int(time.time()) - expiration,)
                )
                self.conn.commit()
        except sqlite3.Error as e:
            logger.warning(f"Error purging cache: {e}")
            return 0

        if cursor.rowcount:
            logger.debug(f"{cursor.rowcount} expired cache entries removed")
        return cursor.rowcount

    def close(self) -> None:
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "CacheDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
