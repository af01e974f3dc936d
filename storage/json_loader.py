"""Load content records from JSON files."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from errors import ContentSourceError
from models import ContentRecord

logger = logging.getLogger(__name__)

BUNDLED_CONTENT_PATH = Path(__file__).parent.parent / "data" / "content.json"


def load_records_from_json(json_path: Path) -> list[ContentRecord]:
    """Load records from a JSON array of record objects.

    Each object needs at least ``id``, ``kind``, ``german`` and ``english``.

    Raises:
        ContentSourceError: If the file is missing, is not valid JSON, or a
            record fails validation.
    """
    try:
        with open(json_path, encoding="utf-8") as f:
            items = json.load(f)
    except FileNotFoundError as e:
        raise ContentSourceError(f"Content file not found: {json_path}") from e
    except json.JSONDecodeError as e:
        raise ContentSourceError(f"Invalid JSON in {json_path}: {e}") from e

    if not isinstance(items, list):
        raise ContentSourceError(f"Expected a JSON array of records in {json_path}")

    records: list[ContentRecord] = []
    seen_ids: set[str] = set()
    for index, item in enumerate(items):
        try:
            record = ContentRecord.model_validate(item)
        except ValidationError as e:
            raise ContentSourceError(
                f"Invalid record at index {index} in {json_path.name}: {e}"
            ) from e
        if record.id in seen_ids:
            logger.warning("Skipping duplicate record id %s in %s", record.id, json_path.name)
            continue
        seen_ids.add(record.id)
        records.append(record)

    logger.info("Loaded %d records from %s", len(records), json_path.name)
    return records
