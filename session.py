"""Practice session state machine.

One controller drives every content kind and mode. The phases are::

    IDLE --start--> ACTIVE --advance past last--> COMPLETED
    COMPLETED --restart / review_mistakes--> ACTIVE
    any --exit--> IDLE

Answering schedules a deferred advance (when a scheduler is configured) so
the user can see feedback first. That task is cancelled on every transition
and is bound to the session that created it, so a late timer can never move
a newer session.
"""

import logging
import random
import time
from typing import Callable, Sequence

from errors import StateError
from models import (
    AnswerFeedback,
    Mistake,
    Question,
    QuestionMode,
    SessionPhase,
    SessionResults,
    SessionState,
)
from questions.evaluator import is_correct
from questions.sampling import shuffled
from timers import Clock, CooperativeScheduler, ScheduledTask

logger = logging.getLogger(__name__)

DEFAULT_ADVANCE_DELAY = 1.5
DEFAULT_FREE_TEXT_ADVANCE_DELAY = 2.0

Rebuild = Callable[[], list[Question]]
Evaluator = Callable[[str, str], bool]


class SessionController:
    """Owns a single practice run: pointer, score, mistakes and timing."""

    def __init__(
        self,
        evaluator: Evaluator = is_correct,
        scheduler: CooperativeScheduler | None = None,
        clock: Clock = time.monotonic,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
        free_text_advance_delay: float = DEFAULT_FREE_TEXT_ADVANCE_DELAY,
        strict: bool = False,
        rng: random.Random | None = None,
    ):
        """Create an idle controller.

        Args:
            evaluator: Answer equivalence predicate.
            scheduler: If given, answering schedules an automatic advance.
            clock: Monotonic clock used for time spent.
            advance_delay: Feedback delay for flashcard and choice questions.
            free_text_advance_delay: Feedback delay for typed answers.
            strict: Raise StateError on invalid calls instead of ignoring them.
            rng: Random generator used to reshuffle review batches.
        """
        self.evaluator = evaluator
        self.scheduler = scheduler
        self.clock = clock
        self.advance_delay = advance_delay
        self.free_text_advance_delay = free_text_advance_delay
        self.strict = strict
        self.rng = rng or random.Random()

        self.state: SessionState | None = None
        self.results: SessionResults | None = None
        self.is_empty = False
        self._rebuild: Rebuild | None = None
        self._pending_advance: ScheduledTask | None = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        if self.state is None:
            return SessionPhase.IDLE
        return self.state.phase

    @property
    def questions(self) -> tuple[Question, ...]:
        return self.state.questions if self.state else ()

    @property
    def current_question(self) -> Question | None:
        if self.phase != SessionPhase.ACTIVE:
            return None
        return self.state.current_question

    @property
    def current_index(self) -> int:
        return self.state.current_index if self.state else 0

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def score(self) -> int:
        return self.state.score if self.state else 0

    @property
    def mistakes(self) -> list[Mistake]:
        return list(self.state.mistakes) if self.state else []

    @property
    def feedback(self) -> AnswerFeedback | None:
        return self.state.feedback if self.state else None

    @property
    def has_pending_advance(self) -> bool:
        return self._pending_advance is not None and self._pending_advance.pending

    @property
    def can_review_mistakes(self) -> bool:
        return self.phase == SessionPhase.COMPLETED and bool(self.state.mistakes)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self, questions: Sequence[Question], rebuild: Rebuild | None = None) -> bool:
        """Begin a session on a fixed batch.

        An empty batch flags the empty state and leaves the phase unchanged.

        Args:
            questions: The batch, built by the caller.
            rebuild: Builder call that restart() replays. Kept from the
                previous start when omitted.

        Returns:
            True if a session started.
        """
        if rebuild is not None:
            self._rebuild = rebuild

        if not questions:
            if self.phase != SessionPhase.ACTIVE:
                self.is_empty = True
            logger.info("Empty batch; staying %s", self.phase.value)
            return False

        self._begin(questions)
        return True

    def answer(self, submitted: str) -> AnswerFeedback | None:
        """Evaluate an answer for the current question.

        Answers are final: a second call before advancing is ignored.

        Returns:
            The feedback to reveal, or None if the call was ignored.
        """
        if self.phase != SessionPhase.ACTIVE:
            return self._reject("answer", "no active session")

        question = self.state.current_question
        if not question.is_scored:
            return self._reject("answer", "reading questions are not scored")
        if self.state.feedback is not None:
            return self._reject("answer", f"question {question.id} already answered")

        correct = self.evaluator(submitted, question.answer)
        if correct:
            self.state.score += 1
        else:
            self.state.mistakes.append(Mistake.from_question(question, submitted))

        self.state.feedback = AnswerFeedback(
            is_correct=correct,
            submitted=submitted,
            correct_answer=question.answer,
        )
        logger.debug(
            "Answered %s (%d/%d): %s",
            question.id,
            self.state.current_index + 1,
            len(self.state.questions),
            "correct" if correct else "incorrect",
        )

        self._schedule_advance(question)
        return self.state.feedback

    def advance(self) -> bool:
        """Move to the next question, or finalize after the last one.

        The current question must be answered first, except reading
        questions.

        Returns:
            True if the session moved (to the next question or to completed).
        """
        if self.phase != SessionPhase.ACTIVE:
            return bool(self._reject("advance", "no active session"))

        question = self.state.current_question
        if question.is_scored and self.state.feedback is None:
            return bool(self._reject("advance", f"question {question.id} not answered"))

        self._cancel_pending_advance()

        if self.state.is_last_question:
            self._finalize()
        else:
            self.state.current_index += 1
            self.state.feedback = None
        return True

    def restart(self, rebuild: Rebuild | None = None) -> bool:
        """Start again with a freshly built batch for the same request.

        Returns:
            True if a new session started.
        """
        if self.phase != SessionPhase.COMPLETED:
            return bool(self._reject("restart", "session not completed"))

        rebuild = rebuild or self._rebuild
        if rebuild is None:
            return bool(self._reject("restart", "no builder to replay"))

        logger.info("Restarting session")
        return self.start(rebuild(), rebuild)

    def review_mistakes(self) -> bool:
        """Start a session on exactly the questions missed in the last run.

        Returns:
            True if a review session started.
        """
        if self.phase != SessionPhase.COMPLETED:
            return bool(self._reject("review mistakes", "session not completed"))
        if not self.state.mistakes:
            return bool(self._reject("review mistakes", "no mistakes to review"))

        questions = shuffled([m.question for m in self.state.mistakes], self.rng)
        logger.info("Reviewing %d mistake(s)", len(questions))
        return self.start(questions)

    def exit(self) -> None:
        """Discard the session and return to idle. No results are emitted."""
        self._cancel_pending_advance()
        self._generation += 1
        if self.state is not None:
            logger.info("Exited session in phase %s", self.state.phase.value)
        self.state = None
        self.results = None
        self.is_empty = False

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin(self, questions: Sequence[Question]) -> None:
        self._cancel_pending_advance()
        self._generation += 1
        self.state = SessionState(
            phase=SessionPhase.ACTIVE,
            questions=tuple(questions),
            started_at=self.clock(),
        )
        self.results = None
        self.is_empty = False
        logger.info("Started session with %d question(s)", len(questions))

    def _finalize(self) -> None:
        time_spent = self.clock() - self.state.started_at
        total = self.state.scored_total
        self.results = SessionResults(
            total_questions=total,
            correct_answers=self.state.score,
            wrong_answers=total - self.state.score,
            time_spent=time_spent,
            mistakes=list(self.state.mistakes),
        )
        self.state.phase = SessionPhase.COMPLETED
        self.state.feedback = None
        logger.info(
            "Session completed: %d/%d correct in %.1fs",
            self.results.correct_answers,
            self.results.total_questions,
            time_spent,
        )

    def _schedule_advance(self, question: Question) -> None:
        if self.scheduler is None:
            return

        delay = self.advance_delay
        if question.mode in (QuestionMode.FREE_TEXT, QuestionMode.FILL_BLANK):
            delay = self.free_text_advance_delay

        generation = self._generation
        index = self.state.current_index

        def fire() -> None:
            # Belongs to an older session or question: do nothing
            if generation != self._generation or self.phase != SessionPhase.ACTIVE:
                return
            if self.state.current_index != index:
                return
            self._pending_advance = None
            self.advance()

        self._cancel_pending_advance()
        self._pending_advance = self.scheduler.call_later(delay, fire)

    def _cancel_pending_advance(self) -> None:
        if self._pending_advance is not None:
            self._pending_advance.cancel()
            self._pending_advance = None

    def _reject(self, operation: str, reason: str) -> None:
        if self.strict:
            raise StateError(operation, self.phase.value, reason)
        logger.debug("Ignored %s in phase %s: %s", operation, self.phase.value, reason)
        return None
