"""SQLite implementation of the link store."""

import logging
import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Optional

from ..codec import INT32_MAX
from ..errors import StoreError
from .base import LinkStoreBase
from .models import ShortLink

DEFAULT_DB_PATH = "short-links.db"


class SQLiteLinkStore(LinkStoreBase):
    """Link store backed by a local SQLite file.

    One connection is opened at construction and shared by every caller until
    :meth:`close`. A lock serializes statements on it, which also makes id
    allocation atomic.
    """

    SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS short_links (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        url TEXT NOT NULL,
        created_at TEXT NOT NULL
    );
    """

    def __init__(
        self,
        db_path: str = DEFAULT_DB_PATH,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Open the database file and create the schema if needed.

        Args:
            db_path: Path to the SQLite file (":memory:" for a private in-memory db)
            timeout_seconds: How long to wait on a locked database file
            logger: Optional logger instance
        """
        super().__init__(db_path)

        self.logger = logger or logging.getLogger(__name__)
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        if db_path != ":memory:":
            directory = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(directory, exist_ok=True)

        try:
            self._conn = sqlite3.connect(
                db_path,
                timeout=timeout_seconds,
                check_same_thread=False,
            )
            with self._conn:
                self._conn.executescript(self.SCHEMA_SQL)
        except sqlite3.Error as e:
            self.logger.error(f"Failed to open link store at {db_path}: {e}")
            raise StoreError(f"Failed to open link store: {e}") from e

        self.logger.info(f"Link store opened at {db_path}")

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Link store is closed")
        return self._conn

    def insert(self, url: str, created_at: Optional[datetime] = None) -> int:
        """Persist a new link and return its id.

        Args:
            url: Canonical absolute URL
            created_at: Optional creation timestamp (defaults to now UTC)

        Returns:
            Record id allocated by SQLite

        Raises:
            StoreError: On database failure or when the 32-bit id space is used up
        """
        if created_at is None:
            created_at = datetime.now(timezone.utc)
        elif created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        with self._lock:
            conn = self._connection()
            try:
                with conn:
                    cur = conn.execute(
                        "INSERT INTO short_links (url, created_at) VALUES (?, ?)",
                        (url, created_at.isoformat()),
                    )
                    record_id = cur.lastrowid
                    if record_id > INT32_MAX:
                        # Raising inside the transaction rolls the row back
                        raise StoreError("Record id space exhausted")
            except sqlite3.Error as e:
                self.logger.error(f"Error inserting link: {e}")
                raise StoreError(f"Failed to insert link: {e}") from e

        self.logger.debug(f"Inserted link {record_id} -> {url}")
        return record_id

    def find_by_id(self, record_id: int) -> Optional[ShortLink]:
        """Look up a link by record id.

        Args:
            record_id: The record id

        Returns:
            The link, or None if not found
        """
        with self._lock:
            conn = self._connection()
            try:
                row = conn.execute(
                    "SELECT id, url, created_at FROM short_links WHERE id = ? LIMIT 1",
                    (record_id,),
                ).fetchone()
            except sqlite3.Error as e:
                self.logger.error(f"Error looking up link {record_id}: {e}")
                raise StoreError(f"Failed to look up link: {e}") from e

        if row is None:
            return None
        return ShortLink.from_row(row)

    def count(self) -> int:
        """Return the number of stored links."""
        with self._lock:
            conn = self._connection()
            try:
                row = conn.execute("SELECT COUNT(*) FROM short_links").fetchone()
            except sqlite3.Error as e:
                self.logger.error(f"Error counting links: {e}")
                raise StoreError(f"Failed to count links: {e}") from e
        return row[0]

    def health_check(self) -> bool:
        """Check if the database answers a trivial query."""
        try:
            with self._lock:
                self._connection().execute("SELECT 1").fetchone()
            return True
        except (sqlite3.Error, StoreError) as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                self.logger.info(f"Link store at {self.db_path} closed")
