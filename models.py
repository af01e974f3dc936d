from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    VOCABULARY = "vocabulary"
    ARTICLE = "article"
    GRAMMAR = "grammar"
    LESSON = "lesson"


class Gender(str, Enum):
    """Grammatical gender of a German noun, named by its definite article."""

    DER = "der"
    DIE = "die"
    DAS = "das"


# ============================================================================
# Content Models
# ============================================================================


class ContentRecord(BaseModel):
    """An immutable unit of learnable material.

    The meaning of ``german`` and ``english`` depends on the kind:
    - vocabulary/article: German term and its English translation
    - grammar: practice prompt and its correct answer
    - lesson: lesson title and lesson body
    """

    model_config = ConfigDict(frozen=True)

    id: str
    kind: ContentKind
    german: str
    english: str
    gender: Gender | None = None
    pronunciation: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)  # e.g., ["a1", "animals"]
    frequency: float | None = None
    level: int | None = None
    difficulty: int | None = None
    example_de: str | None = None
    example_en: str | None = None
    options: list[str] = Field(default_factory=list)  # Grammar practice choices
    helper_text: str | None = None

    def matches_category(self, category: str) -> bool:
        """Exact category match or tag membership."""
        return self.category == category or category in self.tags


# ============================================================================
# Question Models
# ============================================================================


class QuestionType(str, Enum):
    VOCABULARY = "vocabulary"
    ARTICLE = "article"
    GRAMMAR = "grammar"


class QuestionMode(str, Enum):
    FLASHCARD = "flashcard"
    MULTIPLE_CHOICE = "multiple-choice"
    FREE_TEXT = "translate-free-text"
    FILL_BLANK = "fill-blank"
    READING = "reading"


class Direction(str, Enum):
    GERMAN_TO_ENGLISH = "de-en"
    ENGLISH_TO_GERMAN = "en-de"


class Question(BaseModel):
    """A mode-shaped presentation of one ContentRecord for one session."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: QuestionType
    mode: QuestionMode
    prompt: str
    answer: str  # May hold alternatives separated by "/"
    options: list[str] = Field(default_factory=list)
    helper_text: str | None = None
    direction: Direction | None = None
    source_record: ContentRecord | None = None

    @property
    def category(self) -> str | None:
        if self.source_record is None:
            return None
        return self.source_record.category

    @property
    def is_scored(self) -> bool:
        return self.mode != QuestionMode.READING


class BatchRequest(BaseModel):
    """The user-chosen configuration that produced a batch.

    Restart replays the same request to get a fresh batch.
    """

    kind: ContentKind
    mode: QuestionMode = QuestionMode.FLASHCARD
    count: int = 20
    category: str | None = None
    direction: Direction = Direction.GERMAN_TO_ENGLISH
    level: int | None = None
    difficulty: int | None = None


# ============================================================================
# Session Models
# ============================================================================


class Mistake(BaseModel):
    question_id: str
    prompt: str
    correct_answer: str
    user_answer: str
    category: str | None = None
    question: Question  # Replayed by review sessions

    @classmethod
    def from_question(cls, question: Question, user_answer: str) -> "Mistake":
        return cls(
            question_id=question.id,
            prompt=question.prompt,
            correct_answer=question.answer,
            user_answer=user_answer,
            category=question.category,
            question=question,
        )


class AnswerFeedback(BaseModel):
    """Reveal state shown to the user before the session advances."""

    is_correct: bool
    submitted: str
    correct_answer: str


class SessionResults(BaseModel):
    total_questions: int
    correct_answers: int
    wrong_answers: int
    time_spent: float  # Seconds
    mistakes: list[Mistake] = Field(default_factory=list)
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def accuracy(self) -> float:
        """Percentage of correct answers (0 when nothing was scored)."""
        if self.total_questions == 0:
            return 0.0
        return self.correct_answers / self.total_questions * 100

    @property
    def time_per_question(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return self.time_spent / self.total_questions


class SessionPhase(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


class SessionState(BaseModel):
    """The mutable aggregate owned by the session controller."""

    phase: SessionPhase = SessionPhase.ACTIVE
    questions: tuple[Question, ...]
    current_index: int = 0
    score: int = 0
    mistakes: list[Mistake] = Field(default_factory=list)
    started_at: float
    feedback: AnswerFeedback | None = None

    @property
    def current_question(self) -> Question | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def scored_total(self) -> int:
        return sum(1 for q in self.questions if q.is_scored)
