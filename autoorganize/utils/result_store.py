"""Persistence of organization results and the in-progress registry.

Results live in a SQLite table keyed by id, one row per source path. The
registry of files currently being organized is kept in memory only.
"""

import json
import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from autoorganize.config.settings import DEFAULT_RESULTS_DB
from autoorganize.models.result import (
    FileOrganizerType,
    FileSortingStatus,
    OrganizationResult,
)
from autoorganize.utils.hash import path_id

RESULTS_TABLE = 'organization_results'

_COLUMNS = (
    'id', 'date', 'original_path', 'original_file_name', 'file_size', 'type',
    'extracted_name', 'extracted_year', 'extracted_season_number',
    'extracted_episode_number', 'extracted_ending_episode_number',
    'target_path', 'status', 'status_message', 'duplicate_paths',
)


class ResultStore:
    """
    SQLite store for OrganizationResult records.

    Attributes:
        db_path: Path to the SQLite database file.
        conn: Active database connection, or None if closed.
    """

    def __init__(self, db_path: Path = DEFAULT_RESULTS_DB) -> None:
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self._in_progress: Dict[str, OrganizationResult] = {}
        self._in_progress_lock = threading.Lock()
        self._connect()

    def _connect(self) -> None:
        """Establish database connection and create the results table."""
        try:
            self.conn = sqlite3.connect(self.db_path, timeout=10.0, check_same_thread=False)
            self._create_table()
        except sqlite3.Error as e:
            logger.error(f"Database connection error: {e}")

    def _create_table(self) -> None:
        if not self.conn:
            return

        try:
            self.conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {RESULTS_TABLE} (
                    id TEXT PRIMARY KEY,
                    date TEXT,
                    original_path TEXT UNIQUE,
                    original_file_name TEXT,
                    file_size INTEGER,
                    type TEXT,
                    extracted_name TEXT,
                    extracted_year INTEGER,
                    extracted_season_number INTEGER,
                    extracted_episode_number INTEGER,
                    extracted_ending_episode_number INTEGER,
                    target_path TEXT,
                    status TEXT,
                    status_message TEXT,
                    duplicate_paths TEXT
                )
            """)
            self.conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Error creating tables: {e}")

    @staticmethod
    def _to_row(result: OrganizationResult) -> tuple:
        return (
            result.id,
            result.date.isoformat(),
            result.original_path,
            result.original_file_name,
            result.file_size,
            result.type.value,
            result.extracted_name,
            result.extracted_year,
            result.extracted_season_number,
            result.extracted_episode_number,
            result.extracted_ending_episode_number,
            result.target_path,
            result.status.value if result.status else None,
            result.status_message,
            json.dumps(result.duplicate_paths),
        )

    @staticmethod
    def _from_row(row: tuple) -> OrganizationResult:
        values = dict(zip(_COLUMNS, row))
        return OrganizationResult(
            id=values['id'],
            date=datetime.fromisoformat(values['date']),
            original_path=values['original_path'],
            original_file_name=values['original_file_name'] or '',
            file_size=values['file_size'] or 0,
            type=FileOrganizerType(values['type']),
            extracted_name=values['extracted_name'],
            extracted_year=values['extracted_year'],
            extracted_season_number=values['extracted_season_number'],
            extracted_episode_number=values['extracted_episode_number'],
            extracted_ending_episode_number=values['extracted_ending_episode_number'],
            target_path=values['target_path'],
            status=FileSortingStatus(values['status']) if values['status'] else None,
            status_message=values['status_message'] or '',
            duplicate_paths=json.loads(values['duplicate_paths'] or '[]'),
        )

    def _fetch_one(self, column: str, value: str) -> Optional[OrganizationResult]:
        if not self.conn:
            return None

        try:
            with self._lock:
                row = self.conn.execute(
                    f"SELECT {', '.join(_COLUMNS)} FROM {RESULTS_TABLE} WHERE {column} = ?",
                    (value,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.warning(f"Error reading result {column}={value}: {e}")
            return None
        return self._from_row(row) if row else None

    def get_by_id(self, result_id: str) -> Optional[OrganizationResult]:
        return self._fetch_one('id', result_id)

    def get_by_source_path(self, path: str) -> Optional[OrganizationResult]:
        return self._fetch_one('original_path', path)

    def list_results(self) -> List[OrganizationResult]:
        """All stored results, most recent first."""
        if not self.conn:
            return []

        try:
            with self._lock:
                rows = self.conn.execute(
                    f"SELECT {', '.join(_COLUMNS)} FROM {RESULTS_TABLE} ORDER BY date DESC"
                ).fetchall()
        except sqlite3.Error as e:
            logger.warning(f"Error listing results: {e}")
            return []
        return [self._from_row(row) for row in rows]

    def assign_id(self, result: OrganizationResult) -> str:
        """
        Give a result its id if it has none yet.

        The id is derived from the source path, so every attempt on the same
        file maps to the same record.
        """
        if not result.id:
            result.id = path_id(result.original_path)
        return result.id

    def save(self, result: OrganizationResult) -> None:
        """
        Insert or replace a result.

        Raises:
            sqlite3.Error: If the write fails.
        """
        self.assign_id(result)
        if not self.conn:
            raise sqlite3.OperationalError(f"Result database {self.db_path} is not open")

        with self._lock:
            self.conn.execute(
                f"INSERT OR REPLACE INTO {RESULTS_TABLE} ({', '.join(_COLUMNS)}) "
                f"VALUES ({', '.join('?' * len(_COLUMNS))})",
                self._to_row(result)
            )
            self.conn.commit()
        logger.debug(f"Result saved for {result.original_path}: {result.status}")

    def delete(self, result_id: str) -> None:
        if not self.conn:
            return
        with self._lock:
            self.conn.execute(f"DELETE FROM {RESULTS_TABLE} WHERE id = ?", (result_id,))
            self.conn.commit()

    def try_begin(self, result: OrganizationResult, is_new: bool) -> bool:
        """
        Register a result as being processed.

        Args:
            result: Result whose source file is about to be organized.
            is_new: Whether the result has never been stored before.

        Returns:
            False if the same source file is already being processed.
        """
        with self._in_progress_lock:
            if result.original_path in self._in_progress:
                return False
            self._in_progress[result.original_path] = result

        logger.debug(f"{'Added' if is_new else 'Updated'} in-progress result: {result.original_path}")
        return True

    def end(self, result: OrganizationResult) -> None:
        """Unregister a result registered with try_begin."""
        with self._in_progress_lock:
            self._in_progress.pop(result.original_path, None)

    def is_in_progress(self, path: str) -> bool:
        with self._in_progress_lock:
            return path in self._in_progress

    def close(self) -> None:
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self) -> "ResultStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
