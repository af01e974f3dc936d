"""Shared pytest fixtures for the German drill test suite."""

import random
import pytest

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import (
    ContentKind,
    ContentRecord,
    Gender,
    Question,
    QuestionMode,
    QuestionType,
)
from storage import init_schema, InMemoryContentRepository
from timers import CooperativeScheduler, ManualClock


def make_question(
    question_id: str,
    answer: str,
    mode: QuestionMode = QuestionMode.FREE_TEXT,
    prompt: str | None = None,
    options: list[str] | None = None,
) -> Question:
    """Build a bare question without going through a builder."""
    return Question(
        id=question_id,
        type=QuestionType.VOCABULARY,
        mode=mode,
        prompt=prompt or question_id,
        answer=answer,
        options=options or [],
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator for reproducible sampling."""
    return random.Random(42)


@pytest.fixture
def three_nouns() -> list[ContentRecord]:
    """Hund, Katze and Buch: one noun per gender."""
    return [
        ContentRecord(
            id="n001",
            kind=ContentKind.ARTICLE,
            german="Hund",
            english="dog",
            gender=Gender.DER,
            category="animals",
        ),
        ContentRecord(
            id="n002",
            kind=ContentKind.ARTICLE,
            german="Katze",
            english="cat",
            gender=Gender.DIE,
            category="animals",
        ),
        ContentRecord(
            id="n003",
            kind=ContentKind.ARTICLE,
            german="Buch",
            english="book",
            gender=Gender.DAS,
            category="school",
        ),
    ]


@pytest.fixture
def vocabulary_records() -> list[ContentRecord]:
    """A small vocabulary set across two categories."""
    return [
        ContentRecord(
            id="v001",
            kind=ContentKind.VOCABULARY,
            german="Hund",
            english="dog",
            category="animals",
            tags=["a1"],
            level=1,
            difficulty=1,
            example_de="Der Hund schläft.",
            example_en="The dog is sleeping.",
        ),
        ContentRecord(
            id="v002",
            kind=ContentKind.VOCABULARY,
            german="Katze",
            english="cat",
            category="animals",
            tags=["a1"],
            level=1,
            difficulty=1,
        ),
        ContentRecord(
            id="v003",
            kind=ContentKind.VOCABULARY,
            german="Vogel",
            english="bird",
            category="animals",
            tags=["a1"],
            level=1,
            difficulty=2,
        ),
        ContentRecord(
            id="v004",
            kind=ContentKind.VOCABULARY,
            german="Apfel",
            english="apple",
            category="food",
            tags=["a1", "essential"],
            level=1,
            difficulty=1,
            example_de="Ich esse einen Apfel.",
            example_en="I am eating an apple.",
        ),
        ContentRecord(
            id="v005",
            kind=ContentKind.VOCABULARY,
            german="Brot",
            english="bread",
            category="food",
            tags=["a1", "essential"],
            level=1,
            difficulty=1,
        ),
        ContentRecord(
            id="v006",
            kind=ContentKind.VOCABULARY,
            german="Haus",
            english="house/home",
            category="daily_life",
            tags=["a2"],
            level=2,
            difficulty=2,
            example_de="Unser Haus ist groß.",
            example_en="Our house is big.",
        ),
    ]


@pytest.fixture
def grammar_records() -> list[ContentRecord]:
    """Grammar items, one without its own options."""
    return [
        ContentRecord(
            id="g001",
            kind=ContentKind.GRAMMAR,
            german="Ich ___ Student. (sein)",
            english="bin",
            category="verbs",
            options=["bin", "bist", "ist", "sind", "seid"],
        ),
        ContentRecord(
            id="g002",
            kind=ContentKind.GRAMMAR,
            german="Ich sehe ___ Mann. (der)",
            english="den",
            category="accusative",
            options=["den", "dem", "der"],
        ),
        ContentRecord(
            id="g003",
            kind=ContentKind.GRAMMAR,
            german="Das ist das Auto ___ Vaters. (der)",
            english="des",
            category="genitive",
        ),
    ]


@pytest.fixture
def lesson_records() -> list[ContentRecord]:
    return [
        ContentRecord(
            id="l001",
            kind=ContentKind.LESSON,
            german="Definite Articles",
            english="der, die, das",
            helper_text="Learn nouns with their article.",
        ),
        ContentRecord(
            id="l002",
            kind=ContentKind.LESSON,
            german="Personal Pronouns",
            english="ich, du, er/sie/es",
        ),
        ContentRecord(
            id="l003",
            kind=ContentKind.LESSON,
            german="The Accusative Case",
            english="der becomes den",
        ),
    ]


@pytest.fixture
def all_records(
    vocabulary_records, three_nouns, grammar_records, lesson_records
) -> list[ContentRecord]:
    return vocabulary_records + three_nouns + grammar_records + lesson_records


@pytest.fixture
def memory_repo(all_records) -> InMemoryContentRepository:
    return InMemoryContentRepository(all_records)


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock(start=100.0)


@pytest.fixture
def scheduler(manual_clock) -> CooperativeScheduler:
    return CooperativeScheduler(manual_clock)


@pytest.fixture
def test_db_path(tmp_path) -> Path:
    """Create a temporary database with the schema initialized."""
    db_path = tmp_path / "test.db"
    init_schema(db_path)
    return db_path
