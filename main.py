import argparse
import logging
import random
import signal
import sys
import time
from pathlib import Path
from typing import Callable

from rich.console import Console

from categories import CategoryMenu
from config import DrillSettings, configure_logging, load_settings
from errors import DrillError
from models import (
    BatchRequest,
    ContentKind,
    Direction,
    QuestionMode,
    SessionPhase,
    SessionResults,
)
from questions import QuestionFactory, get_answer_capture
from session import SessionController
from storage import (
    BUNDLED_CONTENT_PATH,
    ContentRepository,
    get_bundled_content_repo,
    get_content_repo,
)
from timers import Clock, CooperativeScheduler
from ui import DrillUI
from ui.styles import DEFAULT_THEME

logger = logging.getLogger(__name__)

DEFAULT_MODES: dict[ContentKind, QuestionMode] = {
    ContentKind.VOCABULARY: QuestionMode.FLASHCARD,
    ContentKind.ARTICLE: QuestionMode.MULTIPLE_CHOICE,
    ContentKind.GRAMMAR: QuestionMode.MULTIPLE_CHOICE,
    ContentKind.LESSON: QuestionMode.READING,
}


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(description="German Drill")
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="JSON settings file (default: built-in settings)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite content database (default: data/drill.db)",
    )
    parser.add_argument(
        "--content",
        type=Path,
        default=None,
        help="JSON content file used when the database is empty",
    )
    # Drill flags are accepted before the subcommand too, which is how the
    # default drill (no subcommand) gets them.
    add_drill_arguments(parser)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    drill_parser = subparsers.add_parser("drill", help="Run a practice session (default)")
    add_drill_arguments(drill_parser, use_defaults=False)

    cat_parser = subparsers.add_parser("categories", help="List categories for a content kind")
    cat_parser.add_argument(
        "--kind",
        "-k",
        type=ContentKind,
        choices=list(ContentKind),
        default=argparse.SUPPRESS,
        help="Content kind (default: vocabulary)",
    )
    cat_parser.add_argument(
        "--search",
        "-s",
        type=str,
        default=None,
        help="Show matching records instead of categories",
    )

    return parser


def add_drill_arguments(parser: argparse.ArgumentParser, use_defaults: bool = True) -> None:
    """Add the drill flags.

    Subparsers pass use_defaults=False so that an unset flag keeps the value
    parsed before the subcommand instead of resetting it.
    """

    def default(value):
        return value if use_defaults else argparse.SUPPRESS

    parser.add_argument(
        "--kind",
        "-k",
        type=ContentKind,
        choices=list(ContentKind),
        default=default(ContentKind.VOCABULARY),
        help="Content kind (default: vocabulary)",
    )
    parser.add_argument(
        "--mode",
        "-m",
        type=QuestionMode,
        choices=list(QuestionMode),
        default=default(None),
        help="Question mode (default depends on kind)",
    )
    parser.add_argument(
        "--direction",
        "-d",
        type=Direction,
        choices=list(Direction),
        default=default(Direction.GERMAN_TO_ENGLISH),
        help="Translation direction for vocabulary (default: de-en)",
    )
    parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=default(None),
        help="Number of questions (default: from settings)",
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=default(None),
        help="Only use records with this category or tag",
    )
    parser.add_argument("--level", type=int, default=default(None), help="Only this level")
    parser.add_argument(
        "--difficulty", type=int, default=default(None), help="Only this difficulty"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=default(None),
        help="Random seed for reproducibility",
    )


def build_request(args: argparse.Namespace, settings: DrillSettings) -> BatchRequest:
    """Turn drill arguments into a batch request."""
    kind = getattr(args, "kind", ContentKind.VOCABULARY)
    mode = getattr(args, "mode", None) or DEFAULT_MODES[kind]
    count = getattr(args, "count", None)
    return BatchRequest(
        kind=kind,
        mode=mode,
        count=settings.default_count if count is None else count,
        category=getattr(args, "category", None),
        direction=getattr(args, "direction", Direction.GERMAN_TO_ENGLISH),
        level=getattr(args, "level", None),
        difficulty=getattr(args, "difficulty", None),
    )


def load_content_repo(
    settings: DrillSettings,
    content_path: Path | None = None,
) -> ContentRepository:
    """Use the SQLite database if it has content, else the JSON corpus."""
    if content_path is None:
        repo = get_content_repo(settings.db_path)
        if repo.count() > 0:
            return repo
        logger.info("Database %s is empty; using bundled content", settings.db_path)
        content_path = BUNDLED_CONTENT_PATH
    return get_bundled_content_repo(content_path)


def create_sigint_handler(ui: DrillUI, controller: SessionController):
    """Create a SIGINT handler that discards the session before exiting."""

    def sigint_handler(signum, frame):
        controller.exit()
        ui.show_quit_message()
        sys.exit(0)

    return sigint_handler


def wait_for_advance(
    controller: SessionController,
    scheduler: CooperativeScheduler,
    sleep: Callable[[float], None],
) -> None:
    """Block until the controller's scheduled advance has fired."""
    while controller.has_pending_advance:
        delay = scheduler.seconds_until_next()
        if delay is None:
            break
        if delay > 0:
            sleep(delay)
        scheduler.run_due()


def run_session_loop(
    controller: SessionController,
    scheduler: CooperativeScheduler,
    ui: DrillUI,
    sleep: Callable[[float], None],
) -> bool:
    """Drive the active session until it completes.

    Returns:
        False if the user quit, True if the session completed.
    """
    while controller.phase == SessionPhase.ACTIVE:
        ui.clear_screen()
        question = controller.current_question
        capture = get_answer_capture(question)

        user_input = ui.show_question(
            capture,
            question_number=controller.current_index + 1,
            total_questions=controller.total_questions,
        )

        if user_input == "quit":
            controller.exit()
            ui.show_quit_message()
            return False

        if not question.is_scored:
            controller.advance()
            continue

        feedback = controller.answer(user_input)
        if feedback is None:
            continue
        ui.show_feedback(feedback, question)

        if controller.has_pending_advance:
            wait_for_advance(controller, scheduler, sleep)
        else:
            controller.advance()

    return controller.phase == SessionPhase.COMPLETED


def run_interactive(
    request: BatchRequest,
    settings: DrillSettings | None = None,
    repo: ContentRepository | None = None,
    ui: DrillUI | None = None,
    rng: random.Random | None = None,
    clock: Clock = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> SessionResults | None:
    """Run practice sessions until the user exits.

    Returns:
        Results of the last completed session, or None if none completed.
    """
    settings = settings or DrillSettings()
    ui = ui or DrillUI()
    rng = rng or random.Random()
    repo = repo or load_content_repo(settings)

    factory = QuestionFactory(repo, settings.questions, rng)
    rebuild = factory.rebuild_for(request)

    scheduler = CooperativeScheduler(clock)
    controller = SessionController(
        scheduler=scheduler,
        clock=clock,
        advance_delay=settings.auto_advance_delay,
        free_text_advance_delay=settings.free_text_advance_delay,
        strict=settings.strict_state_errors,
        rng=rng,
    )
    signal.signal(signal.SIGINT, create_sigint_handler(ui, controller))

    ui.clear_screen()
    questions = rebuild()
    ui.show_welcome(
        record_count=repo.count(request.kind),
        kind=request.kind.value,
        mode=request.mode.value,
        question_count=len(questions),
    )

    if not controller.start(questions, rebuild):
        ui.show_empty_state(request.kind.value, request.category)
        return None

    last_results: SessionResults | None = None
    while True:
        if not run_session_loop(controller, scheduler, ui, sleep):
            return last_results

        last_results = controller.results
        ui.show_results(last_results)

        choice = ui.prompt_post_session(controller.can_review_mistakes)
        if choice == "restart":
            if not controller.restart():
                ui.show_empty_state(request.kind.value, request.category)
                controller.exit()
                return last_results
        elif choice == "review":
            controller.review_mistakes()
        else:
            controller.exit()
            ui.show_quit_message()
            return last_results


def run_categories(args: argparse.Namespace, repo: ContentRepository, ui: DrillUI) -> None:
    """List the categories (or search results) for one content kind."""
    menu = CategoryMenu(repo.get_records(args.kind))

    if args.search:
        rows = [
            (record.id, f"{record.german} - {record.english}", 1)
            for record in menu.search(args.search)
        ]
        if not rows:
            ui.show_info(f"No {args.kind.value} records match '{args.search}'.")
            return
        ui.show_categories(rows, f"Search: {args.search}")
        return

    rows = menu.get_menu_rows()
    if not rows:
        ui.show_info(f"No {args.kind.value} categories found.")
        return
    ui.show_categories(rows, f"{args.kind.value.capitalize()} categories")


def main(argv: list[str] | None = None):
    """Main entry point with CLI routing."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = Console(theme=DEFAULT_THEME)
    ui = DrillUI(console)

    try:
        settings = load_settings(args.settings)
        if args.db is not None:
            settings.db_path = args.db
        configure_logging(settings, console)

        repo = load_content_repo(settings, args.content)
        if args.command == "categories":
            run_categories(args, repo, ui)
            return

        # Default to a drill session
        request = build_request(args, settings)
        rng = random.Random(args.seed) if args.seed is not None else None
        run_interactive(request, settings, repo=repo, ui=ui, rng=rng)
    except DrillError as e:
        logger.error("%s", e)
        ui.show_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
