"""
Category catalogue for content selection.

Discovers categories and tags from content records so the user can pick a
filter before building a batch, and offers plain-text search over records.
"""

from collections import Counter

from models import ContentKind, ContentRecord


SPECIAL_CATEGORY_NAMES = {
    "personal": "Personal Pronouns",
    "nominative": "Nominative Case",
    "accusative": "Accusative Case",
    "dative": "Dative Case",
    "genitive": "Genitive Case",
    "modal": "Modal Verbs",
    "separable": "Separable Verbs",
    "irregular": "Irregular Verbs",
    "essential": "Essential Words",
    "basic": "Basic Vocabulary",
    "masculine": "Masculine",
    "feminine": "Feminine",
    "neuter": "Neuter",
}


def format_category_name(tag: str) -> str:
    """Convert a category or tag to a display name (e.g., 'daily_life' -> 'Daily life')."""
    if tag in SPECIAL_CATEGORY_NAMES:
        return SPECIAL_CATEGORY_NAMES[tag]
    if not tag:
        return tag
    return tag[0].upper() + tag[1:].replace("_", " ")


class CategoryMenu:
    """Lists the categories available for one content kind."""

    def __init__(self, records: list[ContentRecord], kind: ContentKind | None = None):
        if kind is not None:
            records = [r for r in records if r.kind == kind]
        self.records = records

    def get_all_categories(self) -> list[str]:
        """Extract all unique categories and tags, sorted."""
        categories: set[str] = set()
        for record in self.records:
            if record.category:
                categories.add(record.category)
            categories.update(record.tags)
        return sorted(categories)

    def get_records_for_category(self, category: str) -> list[ContentRecord]:
        """Get all records with a given category or tag."""
        return [r for r in self.records if r.matches_category(category)]

    def get_category_counts(self) -> dict[str, int]:
        """Number of records per category or tag."""
        counts: Counter[str] = Counter()
        for record in self.records:
            keys = set(record.tags)
            if record.category:
                keys.add(record.category)
            counts.update(keys)
        return dict(sorted(counts.items()))

    def get_menu_rows(self) -> list[tuple[str, str, int]]:
        """Rows of (category, display name, record count) for display."""
        return [
            (category, format_category_name(category), count)
            for category, count in self.get_category_counts().items()
        ]

    def search(self, term: str) -> list[ContentRecord]:
        """Case-insensitive substring search over German and English text."""
        term = term.strip().lower()
        if not term:
            return list(self.records)
        return [
            r for r in self.records
            if term in r.german.lower() or term in r.english.lower()
        ]
