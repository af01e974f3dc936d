"""Tests for answer capture strategies."""

import pytest

from models import QuestionMode
from questions.handlers import (
    FlashcardCapture,
    FreeTextCapture,
    MultipleChoiceCapture,
    ReadingCapture,
    get_answer_capture,
    parse_letter_input,
)
from questions.evaluator import is_correct

from conftest import make_question


class TestParseLetterInput:
    def test_letters(self):
        assert parse_letter_input("A") == 0
        assert parse_letter_input("d") == 3

    def test_numbers(self):
        assert parse_letter_input("1") == 0
        assert parse_letter_input("4") == 3

    def test_out_of_bounds(self):
        assert parse_letter_input("D", max_options=3) is None
        assert parse_letter_input("0") is None

    def test_invalid(self):
        assert parse_letter_input("hello") is None
        assert parse_letter_input("") is None


class TestMultipleChoiceCapture:
    def test_letter_maps_to_option_text(self):
        question = make_question(
            "q1", "das", QuestionMode.MULTIPLE_CHOICE, options=["der", "die", "das"]
        )
        capture = MultipleChoiceCapture(question)
        assert capture.to_submission("c") == "das"
        assert capture.get_options() == ["der", "die", "das"]

    def test_invalid_letter_asks_again(self):
        question = make_question(
            "q1", "das", QuestionMode.MULTIPLE_CHOICE, options=["der", "die", "das"]
        )
        assert MultipleChoiceCapture(question).to_submission("D") is None

    def test_input_prompt_lists_letters(self):
        question = make_question(
            "q1", "das", QuestionMode.MULTIPLE_CHOICE, options=["der", "die", "das"]
        )
        assert "A/B/C" in MultipleChoiceCapture(question).get_input_prompt()


class TestFreeTextCapture:
    def test_strips_input(self):
        capture = FreeTextCapture(make_question("q1", "dog"))
        assert capture.to_submission("  dog ") == "dog"

    def test_empty_input_asks_again(self):
        capture = FreeTextCapture(make_question("q1", "dog"))
        assert capture.to_submission("   ") is None


class TestFlashcardCapture:
    @pytest.mark.parametrize("answer", ["y", "yes", "J", "ja"])
    def test_knew_it_submits_accepted_answer(self, answer):
        question = make_question("q1", "Apfel/Äpfel", QuestionMode.FLASHCARD)
        submission = FlashcardCapture(question).to_submission(answer)
        assert submission == "Apfel"
        assert is_correct(submission, question.answer)

    @pytest.mark.parametrize("answer", ["n", "no", "Nein"])
    def test_did_not_know_submits_blank(self, answer):
        question = make_question("q1", "dog", QuestionMode.FLASHCARD)
        submission = FlashcardCapture(question).to_submission(answer)
        assert submission == ""
        assert not is_correct(submission, question.answer)

    def test_other_input_asks_again(self):
        question = make_question("q1", "dog", QuestionMode.FLASHCARD)
        assert FlashcardCapture(question).to_submission("maybe") is None


class TestGetAnswerCapture:
    @pytest.mark.parametrize(
        "mode,capture_class",
        [
            (QuestionMode.FLASHCARD, FlashcardCapture),
            (QuestionMode.MULTIPLE_CHOICE, MultipleChoiceCapture),
            (QuestionMode.FREE_TEXT, FreeTextCapture),
            (QuestionMode.FILL_BLANK, FreeTextCapture),
            (QuestionMode.READING, ReadingCapture),
        ],
    )
    def test_registry(self, mode, capture_class):
        capture = get_answer_capture(make_question("q1", "x", mode))
        assert isinstance(capture, capture_class)

    def test_reading_submits_nothing(self):
        capture = get_answer_capture(make_question("q1", "body", QuestionMode.READING))
        assert capture.input_mode == "read"
        assert capture.to_submission("") is None
