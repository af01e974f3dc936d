"""In-memory content repository, used for bundled JSON content and tests."""

from typing import Iterable

from models import ContentKind, ContentRecord
from .base import ContentRepository


class InMemoryContentRepository(ContentRepository):
    """Holds a fixed list of records in load order."""

    def __init__(self, records: Iterable[ContentRecord] = ()):
        self._records = list(records)
        self._by_id = {r.id: r for r in self._records}

    def get_records(
        self,
        kind: ContentKind,
        category: str | None = None,
    ) -> list[ContentRecord]:
        records = [r for r in self._records if r.kind == kind]
        if category:
            records = [r for r in records if r.matches_category(category)]
        return records

    def get_by_id(self, record_id: str) -> ContentRecord | None:
        return self._by_id.get(record_id)

    def count(self, kind: ContentKind | None = None) -> int:
        if kind is None:
            return len(self._records)
        return sum(1 for r in self._records if r.kind == kind)
