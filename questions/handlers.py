"""Answer capture strategies, one per question mode.

These handlers only turn raw user input into the answer string that the
session controller evaluates. They do NOT check correctness themselves:
every mode goes through the same evaluator.
"""

from abc import ABC, abstractmethod
from typing import Literal

from models import Question, QuestionMode

from .evaluator import canonical_literal

InputMode = Literal["choice", "text", "reveal", "read"]

FLASHCARD_YES = {"y", "yes", "j", "ja"}
FLASHCARD_NO = {"n", "no", "nein"}


def parse_letter_input(user_input: str, max_options: int = 4) -> int | None:
    """Parse letter (A-F) or number (1-6) input to 0-based index.

    Args:
        user_input: Raw user input string.
        max_options: Maximum number of valid options.

    Returns:
        0-based index or None if input is invalid or out of bounds.
    """
    user_input = user_input.strip().upper()
    letter_map = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}

    if user_input in letter_map:
        index = letter_map[user_input]
    elif user_input.isdigit():
        index = int(user_input) - 1
    else:
        return None

    if index < 0 or index >= max_options:
        return None

    return index


class AnswerCapture(ABC):
    """Abstract base class for answer capture strategies."""

    input_mode: InputMode

    def __init__(self, question: Question):
        self.question = question

    def get_prompt_text(self) -> str:
        """Return the main prompt text."""
        return self.question.prompt

    def get_options(self) -> list[str]:
        """Return options for display."""
        return []

    @abstractmethod
    def get_input_prompt(self) -> str:
        """Return input prompt string."""
        ...

    @abstractmethod
    def to_submission(self, user_input: str) -> str | None:
        """Convert raw input to the submitted answer.

        Returns:
            The answer string to evaluate, or None if the input is invalid
            and the user should retry.
        """
        ...


class MultipleChoiceCapture(AnswerCapture):
    """Select one option by letter or number; submits the option text."""

    input_mode: InputMode = "choice"

    def get_options(self) -> list[str]:
        return self.question.options

    def get_input_prompt(self) -> str:
        letters = "/".join(chr(65 + i) for i in range(len(self.question.options)))
        return f"Enter your choice ({letters}): "

    def to_submission(self, user_input: str) -> str | None:
        index = parse_letter_input(user_input, len(self.question.options))
        if index is None:
            return None
        return self.question.options[index]


class FreeTextCapture(AnswerCapture):
    """Typed answer, used by translation and fill-blank questions."""

    input_mode: InputMode = "text"

    def get_input_prompt(self) -> str:
        return "Type your answer: "

    def to_submission(self, user_input: str) -> str | None:
        text = user_input.strip()
        return text or None


class FlashcardCapture(AnswerCapture):
    """Self-graded recall: the card is revealed and the user says if they knew it.

    Knowing it submits the canonical answer; not knowing it submits an empty
    answer, which is recorded as the mistake.
    """

    input_mode: InputMode = "reveal"

    def get_input_prompt(self) -> str:
        return "Did you know it? (y/n): "

    def to_submission(self, user_input: str) -> str | None:
        choice = user_input.strip().lower()
        if choice in FLASHCARD_YES:
            return canonical_literal(self.question.answer)
        if choice in FLASHCARD_NO:
            return ""
        return None


class ReadingCapture(AnswerCapture):
    """Passive lesson display. Nothing is submitted."""

    input_mode: InputMode = "read"

    def get_input_prompt(self) -> str:
        return "Press Enter to continue..."

    def to_submission(self, user_input: str) -> str | None:
        return None


# Registry of capture strategies per question mode
ANSWER_CAPTURES: dict[QuestionMode, type[AnswerCapture]] = {
    QuestionMode.FLASHCARD: FlashcardCapture,
    QuestionMode.MULTIPLE_CHOICE: MultipleChoiceCapture,
    QuestionMode.FREE_TEXT: FreeTextCapture,
    QuestionMode.FILL_BLANK: FreeTextCapture,
    QuestionMode.READING: ReadingCapture,
}


def get_answer_capture(question: Question) -> AnswerCapture:
    """Create the capture strategy for a question's mode."""
    return ANSWER_CAPTURES[question.mode](question)
