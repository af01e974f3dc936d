"""Question builders that turn content records into mode-shaped questions.

Each content kind has a builder. A builder filters its records, samples
without replacement, and shapes every selected record for the requested
mode. Randomness happens here, once per batch: the returned questions are
immutable and their option order never changes afterwards.
"""

import logging
import random
import re
from abc import ABC, abstractmethod
from typing import Sequence

from models import (
    ContentKind,
    ContentRecord,
    Direction,
    Gender,
    Question,
    QuestionMode,
    QuestionType,
)

from .config import QuestionBuilderConfig
from .evaluator import canonical_literal, is_correct
from .sampling import sample_without_replacement, select_distractors, shuffled

logger = logging.getLogger(__name__)

ARTICLE_OPTIONS = [g.value for g in Gender]
BLANK = "_____"


class QuestionBuilder(ABC):
    """Abstract base class for per-kind question builders."""

    kind: ContentKind
    question_type: QuestionType
    supported_modes: tuple[QuestionMode, ...] = ()
    randomize_order: bool = True

    def __init__(
        self,
        records: Sequence[ContentRecord],
        config: QuestionBuilderConfig | None = None,
        rng: random.Random | None = None,
    ):
        # The full domain of this kind; distractors are drawn from it.
        self.records = [r for r in records if r.kind == self.kind]
        self.config = config or QuestionBuilderConfig()
        self.rng = rng or random.Random()

    def supports(self, mode: QuestionMode) -> bool:
        return mode in self.supported_modes

    def eligible_pool(
        self,
        mode: QuestionMode,
        category: str | None = None,
        level: int | None = None,
        difficulty: int | None = None,
    ) -> list[ContentRecord]:
        """Records that pass the filters and can be shaped for mode."""
        if not self.supports(mode):
            return []

        pool = self.records
        if category:
            pool = [r for r in pool if r.matches_category(category)]
        if level is not None:
            pool = [r for r in pool if r.level == level]
        if difficulty is not None:
            pool = [r for r in pool if r.difficulty == difficulty]

        return [r for r in pool if self.is_eligible(r, mode)]

    def build(
        self,
        mode: QuestionMode,
        count: int,
        category: str | None = None,
        direction: Direction = Direction.GERMAN_TO_ENGLISH,
        level: int | None = None,
        difficulty: int | None = None,
    ) -> list[Question]:
        """Build up to count questions for mode.

        Returns an empty list when nothing matches; never raises for an
        empty corpus or filter.
        """
        if not self.supports(mode):
            logger.warning("%s builder does not support mode %s", self.kind.value, mode.value)
            return []

        pool = self.eligible_pool(mode, category, level, difficulty)
        if self.randomize_order:
            selected = sample_without_replacement(pool, count, self.rng)
        else:
            selected = pool[: max(count, 0)]

        questions = [self.build_question(r, mode, direction) for r in selected]
        logger.debug(
            "Built %d %s/%s questions from a pool of %d (requested %d)",
            len(questions),
            self.kind.value,
            mode.value,
            len(pool),
            count,
        )
        return questions

    def is_eligible(self, record: ContentRecord, mode: QuestionMode) -> bool:
        """Whether record can be shaped for mode. Override to exclude records."""
        return True

    @abstractmethod
    def build_question(
        self,
        record: ContentRecord,
        mode: QuestionMode,
        direction: Direction,
    ) -> Question:
        """Shape a single record into a question."""
        ...

    def build_options(
        self,
        correct_answer: str,
        candidates: Sequence[str],
        preferred: Sequence[str] = (),
    ) -> list[str]:
        """Distractors plus the correct literal, shuffled once."""
        distractors = select_distractors(
            correct_answer,
            [canonical_literal(c) for c in candidates],
            count=self.config.max_distractors,
            rng=self.rng,
            preferred=[canonical_literal(p) for p in preferred],
        )
        options = distractors + [canonical_literal(correct_answer)]

        if self.config.shuffle_options:
            self.rng.shuffle(options)
        return options


class VocabularyQuestionBuilder(QuestionBuilder):
    """Translation questions in either direction, plus fill-blank."""

    kind = ContentKind.VOCABULARY
    question_type = QuestionType.VOCABULARY
    supported_modes = (
        QuestionMode.FLASHCARD,
        QuestionMode.MULTIPLE_CHOICE,
        QuestionMode.FREE_TEXT,
        QuestionMode.FILL_BLANK,
    )

    def is_eligible(self, record: ContentRecord, mode: QuestionMode) -> bool:
        if mode == QuestionMode.FILL_BLANK:
            return _blank_out(record.example_de, record.german) is not None
        return True

    def build_question(
        self,
        record: ContentRecord,
        mode: QuestionMode,
        direction: Direction,
    ) -> Question:
        if mode == QuestionMode.FILL_BLANK:
            return Question(
                id=f"{record.id}-fill-blank",
                type=self.question_type,
                mode=mode,
                prompt=_blank_out(record.example_de, record.german) or "",
                answer=record.german,
                helper_text=record.example_en,
                source_record=record,
            )

        source, answer = _terms(record, direction)
        target_language = "English" if direction == Direction.GERMAN_TO_ENGLISH else "German"

        if mode == QuestionMode.MULTIPLE_CHOICE:
            others = [r for r in self.records if r.id != record.id]
            same_category = [
                r for r in others
                if record.category and r.category == record.category
            ]
            return Question(
                id=f"{record.id}-mc-{direction.value}",
                type=self.question_type,
                mode=mode,
                prompt=f'What is the {target_language} translation of "{source}"?',
                answer=answer,
                options=self.build_options(
                    answer,
                    [_terms(r, direction)[1] for r in others],
                    preferred=[_terms(r, direction)[1] for r in same_category]
                    if self.config.prefer_same_category
                    else (),
                ),
                helper_text=record.pronunciation,
                direction=direction,
                source_record=record,
            )

        if mode == QuestionMode.FREE_TEXT:
            return Question(
                id=f"{record.id}-{direction.value}",
                type=self.question_type,
                mode=mode,
                prompt=f'Translate "{source}" to {target_language}',
                answer=answer,
                helper_text=record.pronunciation,
                direction=direction,
                source_record=record,
            )

        question_id = record.id
        if direction == Direction.ENGLISH_TO_GERMAN:
            question_id = f"{record.id}-flashcard-{direction.value}"
        return Question(
            id=question_id,
            type=self.question_type,
            mode=mode,
            prompt=source,
            answer=answer,
            helper_text=record.pronunciation,
            direction=direction,
            source_record=record,
        )


class ArticleQuestionBuilder(QuestionBuilder):
    """der/die/das questions. The option set is closed, so no sampling."""

    kind = ContentKind.ARTICLE
    question_type = QuestionType.ARTICLE
    supported_modes = (
        QuestionMode.FLASHCARD,
        QuestionMode.MULTIPLE_CHOICE,
        QuestionMode.FREE_TEXT,
    )

    def is_eligible(self, record: ContentRecord, mode: QuestionMode) -> bool:
        return record.gender is not None

    def build_question(
        self,
        record: ContentRecord,
        mode: QuestionMode,
        direction: Direction,
    ) -> Question:
        assert record.gender is not None
        answer = record.gender.value

        if mode == QuestionMode.MULTIPLE_CHOICE:
            return Question(
                id=f"{record.id}-mc",
                type=self.question_type,
                mode=mode,
                prompt=f'What is the article for "{record.german}"?',
                answer=answer,
                options=shuffled(ARTICLE_OPTIONS, self.rng),
                helper_text=record.english,
                source_record=record,
            )

        if mode == QuestionMode.FREE_TEXT:
            return Question(
                id=f"{record.id}-text",
                type=self.question_type,
                mode=mode,
                prompt=f'Which article goes with "{record.german}"?',
                answer=answer,
                helper_text=record.english,
                source_record=record,
            )

        return Question(
            id=record.id,
            type=self.question_type,
            mode=mode,
            prompt=record.german,
            answer=answer,
            helper_text=record.english,
            source_record=record,
        )


class GrammarQuestionBuilder(QuestionBuilder):
    """Grammar practice items: a prompt with one correct answer."""

    kind = ContentKind.GRAMMAR
    question_type = QuestionType.GRAMMAR
    supported_modes = (
        QuestionMode.FLASHCARD,
        QuestionMode.MULTIPLE_CHOICE,
        QuestionMode.FREE_TEXT,
    )

    def build_question(
        self,
        record: ContentRecord,
        mode: QuestionMode,
        direction: Direction,
    ) -> Question:
        options: list[str] = []
        if mode == QuestionMode.MULTIPLE_CHOICE:
            # Item-supplied choices first, topped up from other items' answers.
            own_choices = [o for o in record.options if not is_correct(o, record.english)]
            others = [r.english for r in self.records if r.id != record.id]
            options = self.build_options(record.english, others, preferred=own_choices)

        suffix = {
            QuestionMode.MULTIPLE_CHOICE: "-mc",
            QuestionMode.FREE_TEXT: "-text",
        }.get(mode, "")
        return Question(
            id=f"{record.id}{suffix}",
            type=self.question_type,
            mode=mode,
            prompt=record.german,
            answer=record.english,
            options=options,
            helper_text=record.helper_text,
            source_record=record,
        )


class LessonQuestionBuilder(QuestionBuilder):
    """Grammar lessons for passive reading. Lessons keep corpus order."""

    kind = ContentKind.LESSON
    question_type = QuestionType.GRAMMAR
    supported_modes = (QuestionMode.READING,)
    randomize_order = False

    def build_question(
        self,
        record: ContentRecord,
        mode: QuestionMode,
        direction: Direction,
    ) -> Question:
        return Question(
            id=f"lesson-{record.id}",
            type=self.question_type,
            mode=QuestionMode.READING,
            prompt=record.german,
            answer=record.english,
            helper_text=record.helper_text,
            source_record=record,
        )


# Registry of builder classes per content kind
QUESTION_BUILDERS: dict[ContentKind, type[QuestionBuilder]] = {
    ContentKind.VOCABULARY: VocabularyQuestionBuilder,
    ContentKind.ARTICLE: ArticleQuestionBuilder,
    ContentKind.GRAMMAR: GrammarQuestionBuilder,
    ContentKind.LESSON: LessonQuestionBuilder,
}


def get_question_builder(
    kind: ContentKind,
    records: Sequence[ContentRecord],
    config: QuestionBuilderConfig | None = None,
    rng: random.Random | None = None,
) -> QuestionBuilder:
    """Create the builder for the given content kind."""
    return QUESTION_BUILDERS[kind](records, config=config, rng=rng)


def build_questions(
    records: Sequence[ContentRecord],
    mode: QuestionMode,
    count: int,
    category: str | None = None,
    *,
    kind: ContentKind | None = None,
    direction: Direction = Direction.GERMAN_TO_ENGLISH,
    level: int | None = None,
    difficulty: int | None = None,
    config: QuestionBuilderConfig | None = None,
    rng: random.Random | None = None,
) -> list[Question]:
    """Build a batch of questions from a content set.

    When kind is omitted and the records span several kinds, every kind
    that supports mode contributes to one pool, which is sampled as a whole.

    Returns:
        At most count questions; an empty list if nothing matches.
    """
    if not records or count <= 0:
        return []

    rng = rng or random.Random()
    kinds = [kind] if kind else sorted({r.kind for r in records}, key=lambda k: k.value)
    builders = [get_question_builder(k, records, config, rng) for k in kinds]
    builders = [b for b in builders if b.supports(mode)]

    if not builders:
        logger.warning("No content supports mode %s", mode.value)
        return []

    if len(builders) == 1:
        return builders[0].build(mode, count, category, direction, level, difficulty)

    pool = [
        (builder, record)
        for builder in builders
        for record in builder.eligible_pool(mode, category, level, difficulty)
    ]
    selected = sample_without_replacement(pool, count, rng)
    return [builder.build_question(record, mode, direction) for builder, record in selected]


def _terms(record: ContentRecord, direction: Direction) -> tuple[str, str]:
    """Return (source term, expected answer) for a translation direction."""
    if direction == Direction.ENGLISH_TO_GERMAN:
        return record.english, record.german
    return record.german, record.english


def _blank_out(sentence: str | None, word: str) -> str | None:
    """Replace word in sentence with a blank, or None if it does not occur."""
    if not sentence or not word.strip():
        return None
    pattern = re.compile(rf"\b{re.escape(word.strip())}\b", re.IGNORECASE)
    blanked = pattern.sub(BLANK, sentence)
    if blanked == sentence:
        return None
    return blanked
