"""Shared SQLite connection handling for the stores."""

import contextlib
import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)


class SQLiteStore:
    """Lazily connected SQLite database with WAL mode and reconnect-on-error.

    Subclasses provide SCHEMA, executed once per new connection.
    """

    SCHEMA = ""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA busy_timeout=5000")
            self._init_schema()
        return self._conn

    def _init_schema(self) -> None:
        """Initialize the database schema."""
        self.conn.executescript(self.SCHEMA)
        self.conn.commit()

    def _reconnect(self) -> None:
        """Close and discard the current connection."""
        if self._conn is not None:
            with contextlib.suppress(Exception):
                self._conn.close()
            self._conn = None

    def _execute(self, sql: str, params: tuple[object, ...] = ()) -> sqlite3.Cursor:
        """Execute SQL with auto-reconnect on error."""
        try:
            return self.conn.execute(sql, params)
        except sqlite3.DatabaseError:
            logger.warning("%s: DatabaseError, reconnecting", type(self).__name__)
            self._reconnect()
            return self.conn.execute(sql, params)

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None
