from rich.text import Text
from rich.panel import Panel
from rich.table import Table
from rich.style import Style
from rich.align import Align
from rich.columns import Columns
from rich import box
from typing import Optional, List, Tuple

from models import AnswerFeedback, Question, QuestionType, SessionResults
from questions.handlers import InputMode
from ui.styles import (
    GERMAN_RED,
    GERMAN_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    MUTED_GRAY,
    TEXT_WHITE,
    create_error_header,
    create_success_header,
    format_duration,
    get_accuracy_style,
    get_gender_style,
)

INPUT_HINTS = {
    "choice": "Type the letter of your answer (or 'q' to quit)",
    "text": "Type your answer and press Enter (or 'q' to quit)",
    "reveal": "Press Enter to reveal the answer (or 'q' to quit)",
    "read": "Press Enter to continue (or 'q' to quit)",
}


class QuestionPanel:
    """A styled panel for displaying the current question."""

    def __init__(
        self,
        question: Question,
        options: List[str],
        question_number: int = 0,
        total_questions: int = 0,
        input_mode: InputMode = "choice",
    ):
        self.question = question
        self.options = options
        self.question_number = question_number
        self.total_questions = total_questions
        self.input_mode = input_mode

    @property
    def progress_percent(self) -> float:
        if self.total_questions == 0:
            return 0.0
        return (self.question_number - 1) / self.total_questions * 100

    def render(self) -> Panel:
        content = Text()

        if self.total_questions > 0:
            content.append(self._create_progress_bar(), Style(color=MUTED_GRAY))
            content.append("\n")
            content.append(
                f"Question {self.question_number}/{self.total_questions}\n",
                Style(color=MUTED_GRAY),
            )

        content.append(self.question.prompt, Style(color=GERMAN_RED, bold=True))
        content.append("\n")

        # Pronunciation hints are fine up front; translations would give it away
        if self.question.helper_text and self.question.type == QuestionType.VOCABULARY:
            content.append(f"({self.question.helper_text})\n", Style(color=MUTED_GRAY))
        content.append("\n")

        for i, option in enumerate(self.options):
            content.append(f"{chr(65 + i)}. ", Style(color=GERMAN_GOLD, bold=True))
            content.append(option, get_gender_style(option)
                           if self.question.type == QuestionType.ARTICLE
                           else Style(color=TEXT_WHITE))
            content.append("\n")

        return Panel(
            Align.left(content),
            title="German Drill",
            subtitle=INPUT_HINTS[self.input_mode],
            border_style=GERMAN_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def _create_progress_bar(self) -> str:
        """Create a text-based progress bar."""
        width = 30
        filled = int(width * self.progress_percent / 100)
        remaining = width - filled
        bar = "█" * filled + "░" * remaining
        return f"[{bar}] {self.progress_percent:.0f}%"

    def __rich__(self) -> Panel:
        return self.render()


class FeedbackPanel:
    """A styled panel for revealing whether an answer was correct."""

    def __init__(self, feedback: AnswerFeedback, helper_text: Optional[str] = None):
        self.feedback = feedback
        self.helper_text = helper_text

    def render(self) -> Panel:
        content = Text()

        if self.feedback.is_correct:
            content.append(create_success_header())
            content.append("\n")
        else:
            content.append(create_error_header())
            content.append("\n")
            if self.feedback.submitted:
                content.append(
                    f"You answered: {self.feedback.submitted}\n", Style(color=MUTED_GRAY)
                )

        content.append("\n")
        content.append("Correct answer: ", Style(color=MUTED_GRAY))
        content.append(
            self.feedback.correct_answer,
            get_gender_style(self.feedback.correct_answer)
            if self.feedback.correct_answer in ("der", "die", "das")
            else Style(color=SUCCESS_GREEN, bold=True),
        )

        if self.helper_text:
            content.append("\n")
            content.append(self.helper_text, Style(color=MUTED_GRAY, italic=True))

        return Panel(
            Align.left(content),
            title="Result",
            border_style=SUCCESS_GREEN if self.feedback.is_correct else ERROR_RED,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class LessonPanel:
    """A grammar lesson shown for reading."""

    def __init__(self, question: Question, lesson_number: int = 0, total_lessons: int = 0):
        self.question = question
        self.lesson_number = lesson_number
        self.total_lessons = total_lessons

    def render(self) -> Panel:
        content = Text()
        content.append(self.question.answer, Style(color=TEXT_WHITE))
        if self.question.helper_text:
            content.append("\n\n")
            content.append("Tip: ", Style(color=GERMAN_GOLD, bold=True))
            content.append(self.question.helper_text, Style(color=MUTED_GRAY))

        subtitle = None
        if self.total_lessons > 0:
            subtitle = f"Lesson {self.lesson_number}/{self.total_lessons}"

        return Panel(
            Align.left(content),
            title=self.question.prompt,
            subtitle=subtitle,
            border_style=GERMAN_GOLD,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ResultsPanel:
    """Session summary with accuracy, timing and the mistake list."""

    def __init__(self, results: SessionResults):
        self.results = results

    def render(self) -> Panel:
        results = self.results

        stats = Table(
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.SIMPLE,
        )
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        stats.add_row("Questions", f"{results.total_questions}")
        stats.add_row(
            "Correct",
            Text(f"{results.correct_answers}", style=Style(color=SUCCESS_GREEN)),
        )
        stats.add_row(
            "Incorrect",
            Text(f"{results.wrong_answers}", style=Style(color=ERROR_RED)),
        )
        stats.add_row(
            "Accuracy",
            Text(f"{results.accuracy:.0f}%", style=get_accuracy_style(results.accuracy)),
        )
        stats.add_row("Time spent", format_duration(results.time_spent))
        stats.add_row("Per question", f"{results.time_per_question:.1f}s")

        content = Text()
        content.append("Session Complete!\n\n", Style(color=GERMAN_RED, bold=True))
        if results.mistakes:
            content.append(
                f"{len(results.mistakes)} to review.\n", Style(color=MUTED_GRAY)
            )
        else:
            content.append("No mistakes. Ausgezeichnet!\n", Style(color=SUCCESS_GREEN))

        panels = [Align.center(content), Align.center(stats)]

        return Panel(
            Columns(panels, align="center", padding=(0, 1)),
            title="Session Summary",
            border_style=GERMAN_GOLD,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()


class MistakeTable:
    """A styled table listing the mistakes of a session."""

    def __init__(self, results: SessionResults):
        self.results = results

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=GERMAN_RED, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )

        table.add_column("Question", style=Style(color=TEXT_WHITE))
        table.add_column("Your answer", style=Style(color=ERROR_RED))
        table.add_column("Correct answer", style=Style(color=SUCCESS_GREEN))

        for mistake in self.results.mistakes:
            table.add_row(
                mistake.prompt,
                mistake.user_answer or "(blank)",
                mistake.correct_answer,
            )

        return Panel(
            Align.center(table),
            title="Mistakes",
            border_style=GERMAN_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class CategoryTable:
    """Available categories with their record counts."""

    def __init__(self, rows: List[Tuple[str, str, int]], title: str = "Categories"):
        self.rows = rows
        self.title = title

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=GERMAN_RED, bold=True),
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        table.add_column("Category", style=Style(color=GERMAN_GOLD))
        table.add_column("Name", style=Style(color=TEXT_WHITE))
        table.add_column("Items", justify="right")

        for category, display_name, count in self.rows:
            table.add_row(category, display_name, str(count))

        return Panel(
            Align.center(table),
            title=self.title,
            border_style=GERMAN_GOLD,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class WelcomeScreen:
    """Welcome screen with banner and session info."""

    def __init__(self, record_count: int, kind: str, mode: str, question_count: int):
        self.record_count = record_count
        self.kind = kind
        self.mode = mode
        self.question_count = question_count

    def render(self) -> Panel:
        banner = Text()
        banner.append("╔═══════════════════════════════╗\n", Style(color=GERMAN_RED))
        banner.append("║         ", Style(color=GERMAN_RED))
        banner.append("Deutsch Drill", Style(color=GERMAN_GOLD, bold=True))
        banner.append("         ║\n", Style(color=GERMAN_RED))
        banner.append("╚═══════════════════════════════╝\n", Style(color=GERMAN_RED))
        banner.append("\n")
        banner.append("Type 'q' at any time to quit.\n", Style(color=MUTED_GRAY))

        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.ROUNDED)
        stats.add_column("Label", justify="center")
        stats.add_column("Value", justify="center")
        for label, value in (
            ("Content", self.kind),
            ("Mode", self.mode),
            ("Available", str(self.record_count)),
            ("Questions", str(self.question_count)),
        ):
            stats.add_row(
                Text(label, style=Style(color=MUTED_GRAY)),
                Text(value, style=Style(color=GERMAN_GOLD, bold=True)),
            )

        return Panel(
            Columns(
                [Align.center(banner), Align.center(stats)],
                align="center",
                padding=(3, 3),
            ),
            border_style=GERMAN_RED,
            box=box.HEAVY,
            padding=(2, 3),
        )

    def __rich__(self) -> Panel:
        return self.render()
