"""Conversion history storage."""

import sqlite3
from datetime import UTC, datetime

from mdtree.models import Conversion
from mdtree.stores.sqlite import SQLiteStore


class ConversionStore(SQLiteStore):
    """Raw markdown input and serialized JSON output of each conversion."""

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS conversions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            markdown_content TEXT NOT NULL,
            json_output TEXT NOT NULL,
            created_at TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_conversions_created_at
            ON conversions(created_at);
    """

    def add(self, markdown_content: str, json_output: str) -> Conversion:
        """Store a conversion and return it with its new id."""
        created_at = datetime.now(UTC).isoformat()
        cursor = self._execute(
            "INSERT INTO conversions (markdown_content, json_output, created_at) VALUES (?, ?, ?)",
            (markdown_content, json_output, created_at),
        )
        self.conn.commit()
        return Conversion(
            id=int(cursor.lastrowid or 0),
            markdown_content=markdown_content,
            json_output=json_output,
            created_at=created_at,
        )

    def get(self, conversion_id: int) -> Conversion | None:
        cursor = self._execute("SELECT * FROM conversions WHERE id = ?", (conversion_id,))
        row = cursor.fetchone()
        return self._row_to_conversion(row) if row else None

    def recent(self, limit: int = 10) -> list[Conversion]:
        """Most recent conversions first."""
        cursor = self._execute(
            "SELECT * FROM conversions ORDER BY created_at DESC, id DESC LIMIT ?", (limit,)
        )
        return [self._row_to_conversion(row) for row in cursor.fetchall()]

    def count(self) -> int:
        cursor = self._execute("SELECT COUNT(*) FROM conversions")
        result = cursor.fetchone()
        return int(result[0]) if result else 0

    @staticmethod
    def _row_to_conversion(row: sqlite3.Row) -> Conversion:
        return Conversion(
            id=row["id"],
            markdown_content=row["markdown_content"],
            json_output=row["json_output"],
            created_at=row["created_at"],
        )
