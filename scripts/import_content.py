#!/usr/bin/env python3
"""Import JSON content into the SQLite database.

Usage:
    python scripts/import_content.py [content.json ...] [--db PATH] [--force]

Options:
    --db        Database path (default: data/drill.db)
    --force     Clear existing content before importing
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from errors import ContentSourceError
from storage import (
    BUNDLED_CONTENT_PATH,
    DEFAULT_DB_PATH,
    SQLiteContentRepository,
    init_schema,
    load_records_from_json,
)


def import_file(repo: SQLiteContentRepository, json_path: Path) -> int:
    """Import records from one JSON file.

    Args:
        repo: Target repository.
        json_path: Path to a JSON array of content records.

    Returns:
        Number of records imported.
    """
    if not json_path.exists():
        print(f"  Skipping {json_path.name} (not found)")
        return 0

    records = load_records_from_json(json_path)
    repo.insert_records(records)
    print(f"  Imported {len(records)} records from {json_path.name}")
    return len(records)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Import JSON content into SQLite")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        default=[BUNDLED_CONTENT_PATH],
        help="JSON content files (default: data/content.json)",
    )
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Database path")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Clear existing content before importing",
    )
    args = parser.parse_args(argv)

    init_schema(args.db)
    repo = SQLiteContentRepository(args.db)

    existing = repo.count()
    if existing:
        if not args.force:
            print(f"Database at {args.db} already has {existing} records")
            print("Use --force to replace them")
            return 1
        print(f"Clearing {existing} existing records")
        repo.clear()

    print(f"Importing into {args.db}")
    print()

    total = 0
    try:
        for json_path in args.files:
            total += import_file(repo, json_path)
    except ContentSourceError as e:
        print(f"Error: {e}")
        return 1

    print()
    print(f"Done. {total} records imported.")
    for kind, count in sorted(repo.count_by_kind().items()):
        print(f"  {kind}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
