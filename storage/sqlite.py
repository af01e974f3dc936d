"""SQLite implementation of the content repository."""

import json
from pathlib import Path
from typing import Iterable

from models import ContentKind, ContentRecord, Gender
from .base import ContentRepository
from .connection import get_connection, DEFAULT_DB_PATH

COLUMNS = (
    "id",
    "kind",
    "german",
    "english",
    "gender",
    "pronunciation",
    "category",
    "tags",
    "frequency",
    "level",
    "difficulty",
    "example_de",
    "example_en",
    "options",
    "helper_text",
    "position",
)


class SQLiteContentRepository(ContentRepository):
    """SQLite implementation of ContentRepository."""

    def __init__(self, db_path: Path = DEFAULT_DB_PATH):
        self.db_path = db_path

    def get_records(
        self,
        kind: ContentKind,
        category: str | None = None,
    ) -> list[ContentRecord]:
        """Load records of one kind in load order."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM content_records WHERE kind = ? ORDER BY position, id",
                (kind.value,),
            )
            records = [self._row_to_model(row) for row in cursor.fetchall()]
        finally:
            conn.close()

        # Tags are stored as JSON, so tag membership is checked in Python
        if category:
            records = [r for r in records if r.matches_category(category)]
        return records

    def get_by_id(self, record_id: str) -> ContentRecord | None:
        """Load a single record by ID."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT * FROM content_records WHERE id = ?", (record_id,)
            )
            row = cursor.fetchone()
            return self._row_to_model(row) if row else None
        finally:
            conn.close()

    def count(self, kind: ContentKind | None = None) -> int:
        conn = get_connection(self.db_path)
        try:
            if kind is None:
                cursor = conn.execute("SELECT COUNT(*) FROM content_records")
            else:
                cursor = conn.execute(
                    "SELECT COUNT(*) FROM content_records WHERE kind = ?",
                    (kind.value,),
                )
            return cursor.fetchone()[0]
        finally:
            conn.close()

    def count_by_kind(self) -> dict[str, int]:
        """Number of records per content kind."""
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute(
                "SELECT kind, COUNT(*) FROM content_records GROUP BY kind"
            )
            return {row[0]: row[1] for row in cursor.fetchall()}
        finally:
            conn.close()

    def insert_records(self, records: Iterable[ContentRecord]) -> int:
        """Insert or replace records, keeping their iteration order.

        Returns:
            Number of records written.
        """
        conn = get_connection(self.db_path)
        try:
            cursor = conn.execute("SELECT COALESCE(MAX(position), -1) FROM content_records")
            next_position = cursor.fetchone()[0] + 1
            written = 0
            placeholders = ", ".join("?" for _ in COLUMNS)
            for record in records:
                conn.execute(
                    f"INSERT OR REPLACE INTO content_records ({', '.join(COLUMNS)}) "
                    f"VALUES ({placeholders})",
                    self._model_to_row(record, next_position + written),
                )
                written += 1
            conn.commit()
            return written
        finally:
            conn.close()

    def clear(self) -> None:
        """Delete every record."""
        conn = get_connection(self.db_path)
        try:
            conn.execute("DELETE FROM content_records")
            conn.commit()
        finally:
            conn.close()

    def _model_to_row(self, record: ContentRecord, position: int) -> tuple:
        """Convert a ContentRecord to column values."""
        return (
            record.id,
            record.kind.value,
            record.german,
            record.english,
            record.gender.value if record.gender else None,
            record.pronunciation,
            record.category,
            json.dumps(record.tags),
            record.frequency,
            record.level,
            record.difficulty,
            record.example_de,
            record.example_en,
            json.dumps(record.options),
            record.helper_text,
            position,
        )

    def _row_to_model(self, row) -> ContentRecord:
        """Convert a database row to a ContentRecord model."""
        return ContentRecord(
            id=row["id"],
            kind=ContentKind(row["kind"]),
            german=row["german"],
            english=row["english"],
            gender=Gender(row["gender"]) if row["gender"] else None,
            pronunciation=row["pronunciation"],
            category=row["category"],
            tags=json.loads(row["tags"]),
            frequency=row["frequency"],
            level=row["level"],
            difficulty=row["difficulty"],
            example_de=row["example_de"],
            example_en=row["example_en"],
            options=json.loads(row["options"]),
            helper_text=row["helper_text"],
        )
