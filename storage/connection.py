"""Database connection management and schema initialization."""

import sqlite3
from pathlib import Path

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "drill.db"

SCHEMA_SQL = """
-- Content records (vocabulary, articles, grammar practice, lessons)
CREATE TABLE IF NOT EXISTS content_records (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL CHECK (kind IN ('vocabulary', 'article', 'grammar', 'lesson')),
    german TEXT NOT NULL,
    english TEXT NOT NULL,
    gender TEXT CHECK (gender IS NULL OR gender IN ('der', 'die', 'das')),
    pronunciation TEXT,
    category TEXT,
    tags TEXT NOT NULL DEFAULT '[]',
    frequency REAL,
    level INTEGER,
    difficulty INTEGER,
    example_de TEXT,
    example_en TEXT,
    options TEXT NOT NULL DEFAULT '[]',
    helper_text TEXT,
    position INTEGER NOT NULL DEFAULT 0  -- Load order, lessons are read in it
);

CREATE INDEX IF NOT EXISTS idx_content_records_kind ON content_records(kind);
CREATE INDEX IF NOT EXISTS idx_content_records_category ON content_records(category);
"""


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with appropriate settings.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A configured sqlite3 Connection object.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_schema(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    # Ensure the parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
