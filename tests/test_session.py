"""Tests for the practice session state machine."""

import random

import pytest

from errors import StateError
from models import QuestionMode, SessionPhase
from questions import build_questions
from session import SessionController

from conftest import make_question


@pytest.fixture
def controller(manual_clock) -> SessionController:
    return SessionController(clock=manual_clock, rng=random.Random(3))


@pytest.fixture
def three_questions():
    return [
        make_question("q1", "dog"),
        make_question("q2", "cat"),
        make_question("q3", "house/home"),
    ]


def answer_all(controller, answers):
    for submitted in answers:
        controller.answer(submitted)
        controller.advance()


class TestStart:
    def test_starts_active(self, controller, three_questions, manual_clock):
        assert controller.phase == SessionPhase.IDLE
        assert controller.start(three_questions)
        assert controller.phase == SessionPhase.ACTIVE
        assert controller.current_index == 0
        assert controller.score == 0
        assert controller.mistakes == []
        assert controller.state.started_at == manual_clock()
        assert controller.current_question.id == "q1"

    def test_empty_batch_stays_idle(self, controller):
        assert not controller.start([])
        assert controller.phase == SessionPhase.IDLE
        assert controller.is_empty

    def test_empty_batch_from_completed_stays_completed(
        self, controller, three_questions
    ):
        controller.start(three_questions)
        answer_all(controller, ["dog", "cat", "house"])
        assert not controller.start([])
        assert controller.phase == SessionPhase.COMPLETED
        assert controller.results is not None

    def test_empty_batch_while_active_keeps_session(self, controller, three_questions):
        controller.start(three_questions)
        assert not controller.start([])
        assert not controller.is_empty
        assert controller.phase == SessionPhase.ACTIVE
        assert controller.current_question.id == "q1"
        assert controller.answer("dog").is_correct

    def test_start_supersedes_active_session(self, controller, three_questions):
        controller.start(three_questions)
        controller.answer("dog")
        controller.start([make_question("other", "x")])
        assert controller.phase == SessionPhase.ACTIVE
        assert controller.score == 0
        assert controller.total_questions == 1

    def test_questions_are_kept_as_given(self, controller, three_questions):
        controller.start(three_questions)
        assert [q.id for q in controller.questions] == ["q1", "q2", "q3"]


class TestAnswer:
    def test_correct_answer_scores(self, controller, three_questions):
        controller.start(three_questions)
        feedback = controller.answer(" DOG ")
        assert feedback.is_correct
        assert feedback.correct_answer == "dog"
        assert controller.score == 1
        assert controller.mistakes == []

    def test_wrong_answer_records_mistake(self, controller, three_questions):
        controller.start(three_questions)
        feedback = controller.answer("cat")
        assert not feedback.is_correct
        assert controller.score == 0
        mistake = controller.mistakes[0]
        assert mistake.question_id == "q1"
        assert mistake.user_answer == "cat"
        assert mistake.correct_answer == "dog"

    def test_alternatives_are_accepted(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["dog", "cat"])
        assert controller.answer("home").is_correct

    def test_double_answer_is_ignored(self, controller, three_questions):
        controller.start(three_questions)
        controller.answer("dog")
        assert controller.answer("dog") is None
        assert controller.score == 1

    def test_double_wrong_answer_records_one_mistake(self, controller, three_questions):
        controller.start(three_questions)
        controller.answer("x")
        controller.answer("y")
        assert len(controller.mistakes) == 1

    def test_answer_when_idle_is_ignored(self, controller):
        assert controller.answer("dog") is None
        assert controller.phase == SessionPhase.IDLE

    def test_answer_when_completed_is_ignored(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["dog", "cat", "house"])
        assert controller.answer("dog") is None
        assert controller.score == 3

    def test_reading_question_cannot_be_answered(self, controller):
        controller.start([make_question("l1", "body", QuestionMode.READING)])
        assert controller.answer("anything") is None
        assert controller.feedback is None

    def test_custom_evaluator(self, manual_clock):
        controller = SessionController(evaluator=lambda s, c: True, clock=manual_clock)
        controller.start([make_question("q1", "dog")])
        assert controller.answer("wrong").is_correct


class TestAdvance:
    def test_advance_requires_answer(self, controller, three_questions):
        controller.start(three_questions)
        assert not controller.advance()
        assert controller.current_index == 0

    def test_advance_moves_to_next(self, controller, three_questions):
        controller.start(three_questions)
        controller.answer("dog")
        assert controller.advance()
        assert controller.current_index == 1
        assert controller.feedback is None

    def test_reading_question_advances_without_answer(self, controller):
        controller.start(
            [
                make_question("l1", "a", QuestionMode.READING),
                make_question("l2", "b", QuestionMode.READING),
            ]
        )
        assert controller.advance()
        assert controller.current_index == 1
        assert controller.advance()
        assert controller.phase == SessionPhase.COMPLETED

    def test_finalises_after_last(self, controller, three_questions, manual_clock):
        controller.start(three_questions)
        controller.answer("dog")
        controller.advance()
        controller.answer("dog")
        controller.advance()
        manual_clock.advance(30)
        controller.answer("house")
        controller.advance()

        assert controller.phase == SessionPhase.COMPLETED
        results = controller.results
        assert results.total_questions == 3
        assert results.correct_answers == 2
        assert results.wrong_answers == 1
        assert results.time_spent == 30
        assert results.accuracy == pytest.approx(200 / 3)
        assert results.time_per_question == 10
        assert controller.current_question is None

    def test_length_one_session(self, controller):
        controller.start([make_question("only", "dog")])
        controller.answer("dog")
        assert controller.advance()
        assert controller.phase == SessionPhase.COMPLETED
        assert controller.results.accuracy == 100

    def test_advance_when_idle_is_ignored(self, controller):
        assert not controller.advance()

    def test_reading_sessions_score_nothing(self, controller):
        controller.start([make_question("l1", "a", QuestionMode.READING)])
        controller.advance()
        assert controller.results.total_questions == 0
        assert controller.results.accuracy == 0


class TestThreeNounScenario:
    """Hund/Katze/Buch gender quiz, answered der, die, der."""

    def test_score_and_mistake(self, controller, three_nouns, rng):
        questions = build_questions(
            three_nouns, QuestionMode.MULTIPLE_CHOICE, 3, rng=rng
        )
        assert len(questions) == 3
        for question in questions:
            assert sorted(question.options) == ["das", "der", "die"]

        controller.start(questions)
        submitted = {"Hund": "der", "Katze": "die", "Buch": "der"}
        while controller.phase == SessionPhase.ACTIVE:
            noun = controller.current_question.source_record.german
            controller.answer(submitted[noun])
            controller.advance()

        assert controller.score == 2
        assert len(controller.mistakes) == 1
        mistake = controller.mistakes[0]
        assert mistake.prompt == 'What is the article for "Buch"?'
        assert mistake.user_answer == "der"
        assert mistake.correct_answer == "das"

        assert controller.review_mistakes()
        assert controller.phase == SessionPhase.ACTIVE
        assert controller.total_questions == 1
        assert controller.current_question.source_record.german == "Buch"


class TestRestart:
    def test_restart_rebuilds_batch(self, controller, three_questions):
        calls = []

        def rebuild():
            calls.append(1)
            return [make_question("fresh", "x")]

        controller.start(three_questions, rebuild)
        answer_all(controller, ["dog", "cat", "house"])
        assert controller.restart()
        assert calls == [1]
        assert controller.phase == SessionPhase.ACTIVE
        assert [q.id for q in controller.questions] == ["fresh"]
        assert controller.score == 0
        assert controller.results is None

    def test_restart_only_from_completed(self, controller, three_questions):
        controller.start(three_questions, lambda: three_questions)
        assert not controller.restart()
        assert controller.current_index == 0

    def test_restart_without_rebuild_is_ignored(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["dog", "cat", "house"])
        assert not controller.restart()
        assert controller.phase == SessionPhase.COMPLETED

    def test_restart_with_empty_rebuild_stays_completed(
        self, controller, three_questions
    ):
        controller.start(three_questions, lambda: [])
        answer_all(controller, ["dog", "cat", "house"])
        assert not controller.restart()
        assert controller.phase == SessionPhase.COMPLETED
        assert controller.is_empty


class TestReviewMistakes:
    def test_review_contains_exactly_the_mistakes(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["x", "cat", "y"])
        assert controller.review_mistakes()
        assert {q.id for q in controller.questions} == {"q1", "q3"}
        assert controller.mistakes == []

    def test_review_without_mistakes_is_ignored(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["dog", "cat", "house"])
        assert not controller.can_review_mistakes
        assert not controller.review_mistakes()
        assert controller.phase == SessionPhase.COMPLETED

    def test_review_mistake_logs_are_independent(self, controller, three_questions):
        controller.start(three_questions)
        answer_all(controller, ["x", "y", "z"])
        controller.review_mistakes()
        # Review order is shuffled, so answer by question
        while controller.phase == SessionPhase.ACTIVE:
            question = controller.current_question
            controller.answer("wrong" if question.id == "q3" else question.answer)
            controller.advance()
        assert [m.question_id for m in controller.mistakes] == ["q3"]
        assert controller.results.total_questions == 3

    def test_restart_after_review_replays_first_request(
        self, controller, three_questions
    ):
        controller.start(three_questions, lambda: three_questions)
        answer_all(controller, ["x", "cat", "house"])
        controller.review_mistakes()
        answer_all(controller, ["dog"])
        assert controller.restart()
        assert controller.total_questions == 3


class TestExit:
    @pytest.mark.parametrize("answers", [[], ["dog"], ["dog", "cat", "house"]])
    def test_exit_returns_to_idle(self, controller, three_questions, answers):
        controller.start(three_questions)
        answer_all(controller, answers)
        controller.exit()
        assert controller.phase == SessionPhase.IDLE
        assert controller.results is None
        assert controller.questions == ()
        assert controller.score == 0

    def test_exit_when_idle(self, controller):
        controller.exit()
        assert controller.phase == SessionPhase.IDLE


class TestStrictMode:
    def test_invalid_calls_raise(self, manual_clock):
        controller = SessionController(clock=manual_clock, strict=True)
        with pytest.raises(StateError, match="Cannot answer while idle"):
            controller.answer("dog")
        with pytest.raises(StateError):
            controller.advance()
        with pytest.raises(StateError):
            controller.restart()
        with pytest.raises(StateError):
            controller.review_mistakes()

    def test_state_survives_error(self, manual_clock):
        controller = SessionController(clock=manual_clock, strict=True)
        controller.start([make_question("q1", "dog"), make_question("q2", "cat")])
        controller.answer("dog")
        with pytest.raises(StateError):
            controller.answer("dog")
        assert controller.score == 1
        assert controller.advance()
        assert controller.current_index == 1

    def test_empty_start_does_not_raise(self, manual_clock):
        controller = SessionController(clock=manual_clock, strict=True)
        assert not controller.start([])
