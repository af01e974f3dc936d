"""Storage layer for the German drill application.

Provides the content repository interface with SQLite and in-memory
implementations, plus JSON loading for bundled and imported content.
"""

from pathlib import Path

from .base import ContentRepository
from .connection import get_connection, init_schema, DEFAULT_DB_PATH
from .json_loader import BUNDLED_CONTENT_PATH, load_records_from_json
from .memory import InMemoryContentRepository
from .sqlite import SQLiteContentRepository

__all__ = [
    # Abstract interface
    "ContentRepository",
    # Implementations
    "SQLiteContentRepository",
    "InMemoryContentRepository",
    # Loading
    "load_records_from_json",
    "BUNDLED_CONTENT_PATH",
    # Connection utilities
    "get_connection",
    "init_schema",
    "DEFAULT_DB_PATH",
    # Factory functions
    "get_content_repo",
    "get_bundled_content_repo",
]


def get_content_repo(db_path: Path = DEFAULT_DB_PATH) -> ContentRepository:
    """Get a ContentRepository backed by the SQLite database."""
    init_schema(db_path)
    return SQLiteContentRepository(db_path)


def get_bundled_content_repo(
    json_path: Path = BUNDLED_CONTENT_PATH,
) -> ContentRepository:
    """Get an in-memory ContentRepository with the bundled sample content."""
    return InMemoryContentRepository(load_records_from_json(json_path))
