"""Abstract repository interface for the content source."""

from abc import ABC, abstractmethod

from models import ContentKind, ContentRecord


class ContentRepository(ABC):
    """Read-only source of content records.

    Records are assumed to be validated and de-duplicated by the time they
    are returned; the question engine never mutates them.
    """

    @abstractmethod
    def get_records(
        self,
        kind: ContentKind,
        category: str | None = None,
    ) -> list[ContentRecord]:
        """Load records of one kind.

        Args:
            kind: The content kind to load.
            category: Optional exact category or tag to filter by.

        Returns:
            List of matching records (empty if none).
        """
        pass

    @abstractmethod
    def get_by_id(self, record_id: str) -> ContentRecord | None:
        """Load a single record by ID.

        Args:
            record_id: The record ID.

        Returns:
            The record, or None if not found.
        """
        pass

    @abstractmethod
    def count(self, kind: ContentKind | None = None) -> int:
        """Count records, optionally of a single kind."""
        pass

    def get_all(self) -> list[ContentRecord]:
        """Load every record of every kind."""
        records: list[ContentRecord] = []
        for kind in ContentKind:
            records.extend(self.get_records(kind))
        return records
