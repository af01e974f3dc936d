"""Question generation for the German drill.

This package turns content records into session-ready questions and
defines how answers are captured and checked.

Builders:
- VocabularyQuestionBuilder: Translation in either direction, plus fill-blank
- ArticleQuestionBuilder: der/die/das for a noun
- GrammarQuestionBuilder: Practice items with a single correct answer
- LessonQuestionBuilder: Lessons for passive reading

Answer checking:
- is_correct: Case-insensitive match with "/" alternatives

Answer capture:
- MultipleChoiceCapture, FreeTextCapture, FlashcardCapture, ReadingCapture

Configuration:
- QuestionBuilderConfig: Number of options, shuffling, distractor preference
"""

from questions.builders import (
    ArticleQuestionBuilder,
    GrammarQuestionBuilder,
    LessonQuestionBuilder,
    QuestionBuilder,
    VocabularyQuestionBuilder,
    build_questions,
    get_question_builder,
)
from questions.config import QuestionBuilderConfig
from questions.evaluator import canonical_literal, is_correct, normalize, split_alternatives
from questions.factory import QuestionFactory
from questions.handlers import (
    AnswerCapture,
    FlashcardCapture,
    FreeTextCapture,
    MultipleChoiceCapture,
    ReadingCapture,
    get_answer_capture,
    parse_letter_input,
)
from questions.sampling import sample_without_replacement, select_distractors, shuffled

__all__ = [
    # Builders
    "QuestionBuilder",
    "VocabularyQuestionBuilder",
    "ArticleQuestionBuilder",
    "GrammarQuestionBuilder",
    "LessonQuestionBuilder",
    "build_questions",
    "get_question_builder",
    "QuestionFactory",
    # Evaluation
    "is_correct",
    "normalize",
    "split_alternatives",
    "canonical_literal",
    # Sampling
    "shuffled",
    "sample_without_replacement",
    "select_distractors",
    # Answer capture
    "AnswerCapture",
    "MultipleChoiceCapture",
    "FreeTextCapture",
    "FlashcardCapture",
    "ReadingCapture",
    "get_answer_capture",
    "parse_letter_input",
    # Configuration
    "QuestionBuilderConfig",
]
