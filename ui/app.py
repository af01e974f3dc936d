from rich.console import Console
from rich.text import Text
from rich.panel import Panel
from ui.components import (
    CategoryTable,
    FeedbackPanel,
    LessonPanel,
    MistakeTable,
    QuestionPanel,
    ResultsPanel,
    WelcomeScreen,
)
from ui.styles import (
    DEFAULT_THEME,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)
from typing import Optional, List, Literal, Tuple

from models import AnswerFeedback, Question, SessionResults
from questions.handlers import AnswerCapture

QUIT_COMMANDS = {"q", "quit"}

PostSessionChoice = Literal["restart", "review", "exit"]


class DrillUI:
    """Main UI orchestrator for the German drill."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(theme=DEFAULT_THEME)

    def show_welcome(
        self,
        record_count: int,
        kind: str,
        mode: str,
        question_count: int,
    ) -> None:
        """Display the welcome screen and wait for user to press Enter."""
        welcome = WelcomeScreen(
            record_count=record_count,
            kind=kind,
            mode=mode,
            question_count=question_count,
        )
        self.console.print(welcome)
        self.console.print()
        self.console.input(Text("Press Enter to start...", style=f"bold {MUTED_GRAY}"))

    def show_question(
        self,
        capture: AnswerCapture,
        question_number: int,
        total_questions: int,
    ) -> str:
        """Display a question and collect a valid answer.

        Input is re-requested until the capture strategy accepts it.

        Args:
            capture: Strategy for the question's mode.
            question_number: Current question number (1-indexed).
            total_questions: Total number of questions in session.

        Returns:
            "quit" if user quits, otherwise the answer to submit. For
            reading questions the empty string means "continue".
        """
        if capture.input_mode == "read":
            self.console.print(
                LessonPanel(capture.question, question_number, total_questions)
            )
        else:
            self.console.print(
                QuestionPanel(
                    question=capture.question,
                    options=capture.get_options(),
                    question_number=question_number,
                    total_questions=total_questions,
                    input_mode=capture.input_mode,
                )
            )
        self.console.print()

        if capture.input_mode == "reveal":
            return self._get_reveal_input(capture)
        return self._get_input(capture)

    def _get_input(self, capture: AnswerCapture) -> str:
        while True:
            user_input = self.console.input(
                Text(capture.get_input_prompt(), style=f"bold {MUTED_GRAY}")
            ).strip()

            if user_input.lower() in QUIT_COMMANDS:
                return "quit"

            if capture.input_mode == "read":
                return ""

            submission = capture.to_submission(user_input)
            if submission is not None:
                return submission

            self.console.print(Text(self._retry_hint(capture), style=ERROR_RED))

    def _get_reveal_input(self, capture: AnswerCapture) -> str:
        """Flashcards: reveal on Enter, then ask for a self-grade."""
        user_input = self.console.input(
            Text("Press Enter to reveal...", style=f"bold {MUTED_GRAY}")
        ).strip()
        if user_input.lower() in QUIT_COMMANDS:
            return "quit"

        self.console.print(Text("Answer: ", style=MUTED_GRAY), end="")
        self.console.print(Text(capture.question.answer, style=f"bold {SUCCESS_GREEN}"))
        if capture.question.helper_text:
            self.console.print(Text(capture.question.helper_text, style=MUTED_GRAY))
        self.console.print()

        return self._get_input(capture)

    @staticmethod
    def _retry_hint(capture: AnswerCapture) -> str:
        if capture.input_mode == "choice":
            letters = ", ".join(chr(65 + i) for i in range(len(capture.get_options())))
            return f"Please enter one of {letters} (or 'q' to quit)\n"
        if capture.input_mode == "reveal":
            return "Please enter y or n (or 'q' to quit)\n"
        return "Please type an answer (or 'q' to quit)\n"

    def show_feedback(self, feedback: AnswerFeedback, question: Question) -> None:
        """Display feedback for the user's answer."""
        helper_text = None
        if question.source_record is not None and question.source_record.example_de:
            helper_text = question.source_record.example_de
        self.console.print(FeedbackPanel(feedback, helper_text))
        self.console.print()

    def show_results(self, results: SessionResults) -> None:
        """Display the session summary and any mistakes."""
        self.console.print(ResultsPanel(results))
        if results.mistakes:
            self.console.print(MistakeTable(results))
        self.console.print()

    def prompt_post_session(self, has_mistakes: bool) -> PostSessionChoice:
        """Ask what to do after a session: restart, review mistakes or exit."""
        choices: List[Tuple[str, PostSessionChoice, str]] = [
            ("r", "restart", "Restart with a new batch"),
        ]
        if has_mistakes:
            choices.append(("m", "review", "Review mistakes"))
        choices.append(("e", "exit", "Exit"))

        for key, _, label in choices:
            self.console.print(Text(f"  [{key}] {label}", style=INFO_BLUE))
        self.console.print()

        keys = {key: choice for key, choice, _ in choices}
        while True:
            user_input = self.console.input(
                Text("Choice: ", style=f"bold {MUTED_GRAY}")
            ).strip().lower()

            if user_input in keys:
                return keys[user_input]
            if user_input in QUIT_COMMANDS:
                return "exit"

            self.console.print(
                Text(f"Please enter {', '.join(keys)}\n", style=ERROR_RED)
            )

    def show_empty_state(self, kind: str, category: Optional[str] = None) -> None:
        """Display message when no questions match the request."""
        where = f" in category '{category}'" if category else ""
        self.console.print(
            Panel(
                Text(
                    f"No {kind} content found{where}.\n\n"
                    "Try another category or mode.",
                    style=MUTED_GRAY,
                ),
                title="Nothing to practise",
                border_style=INFO_BLUE,
            )
        )

    def show_categories(self, rows: List[Tuple[str, str, int]], title: str) -> None:
        self.console.print(CategoryTable(rows, title))

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(
            Panel(
                Text(f"Error: {message}", style=ERROR_RED),
                title="Error",
                border_style=ERROR_RED,
            )
        )

    def show_info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(Text(message, style=INFO_BLUE))

    def show_quit_message(self) -> None:
        """Display the quit message."""
        self.console.print()
        self.console.print(Text("Tschüss! See you next time.", style=MUTED_GRAY))

    def clear_screen(self) -> None:
        """Clear the terminal screen."""
        self.console.clear()
