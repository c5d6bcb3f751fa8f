"""SQLite store for notes and their link metadata."""

import logging
import sqlite3

from mdtree.models import Note, NoteCreate
from mdtree.stores.sqlite import SQLiteStore

logger = logging.getLogger(__name__)

_COLUMNS = (
    "title",
    "markdown_content",
    "json_output",
    "tags",
    "wikilinks",
    "word_count",
    "reading_time",
    "created_at",
    "updated_at",
)


class NoteStore(SQLiteStore):
    """Notes keyed by integer id.

    Tags and wikilinks are stored comma-joined; backlinks are found by
    substring match of a title against other notes' wikilinks.
    """

    SCHEMA = """
        CREATE TABLE IF NOT EXISTS notes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            markdown_content TEXT NOT NULL,
            json_output TEXT NOT NULL,
            tags TEXT,
            wikilinks TEXT NOT NULL DEFAULT '',
            word_count INTEGER NOT NULL DEFAULT 0,
            reading_time INTEGER NOT NULL DEFAULT 1,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_notes_updated_at
            ON notes(updated_at);
    """

    def create(self, note: NoteCreate) -> Note:
        """Insert a new note and return it with its id."""
        placeholders = ", ".join("?" for _ in _COLUMNS)
        cursor = self._execute(
            f"INSERT INTO notes ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
            tuple(getattr(note, column) for column in _COLUMNS),
        )
        self.conn.commit()
        note_id = int(cursor.lastrowid or 0)
        logger.info("Created note %d (%s)", note_id, note.title)
        return Note(id=note_id, **note.model_dump())

    def update(self, note_id: int, note: NoteCreate) -> Note | None:
        """Overwrite a note, keeping its original created_at.

        Returns None if no note has this id.
        """
        existing = self.get(note_id)
        if existing is None:
            return None

        columns = [c for c in _COLUMNS if c != "created_at"]
        assignments = ", ".join(f"{c} = ?" for c in columns)
        self._execute(
            f"UPDATE notes SET {assignments} WHERE id = ?",
            (*(getattr(note, c) for c in columns), note_id),
        )
        self.conn.commit()
        return Note(id=note_id, **note.model_dump(exclude={"created_at"}), created_at=existing.created_at)

    def get(self, note_id: int) -> Note | None:
        cursor = self._execute("SELECT * FROM notes WHERE id = ?", (note_id,))
        row = cursor.fetchone()
        return self._row_to_note(row) if row else None

    def list_all(self) -> list[Note]:
        """All notes, most recently updated first."""
        cursor = self._execute("SELECT * FROM notes ORDER BY updated_at DESC, id DESC")
        return [self._row_to_note(row) for row in cursor.fetchall()]

    def delete(self, note_id: int) -> bool:
        """Delete a note. Returns False if it did not exist."""
        cursor = self._execute("DELETE FROM notes WHERE id = ?", (note_id,))
        self.conn.commit()
        return cursor.rowcount > 0

    def backlinks(self, title: str) -> list[Note]:
        """Notes whose stored wikilinks contain the title."""
        if not title:
            return []
        cursor = self._execute(
            "SELECT * FROM notes WHERE instr(wikilinks, ?) > 0 ORDER BY id", (title,)
        )
        return [self._row_to_note(row) for row in cursor.fetchall()]

    def count(self) -> int:
        cursor = self._execute("SELECT COUNT(*) FROM notes")
        result = cursor.fetchone()
        return int(result[0]) if result else 0

    @staticmethod
    def _row_to_note(row: sqlite3.Row) -> Note:
        return Note(
            id=row["id"],
            title=row["title"],
            markdown_content=row["markdown_content"],
            json_output=row["json_output"],
            tags=row["tags"],
            wikilinks=row["wikilinks"],
            word_count=row["word_count"],
            reading_time=row["reading_time"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
