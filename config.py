"""Application settings and logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from pydantic import BaseModel, Field
from rich.console import Console
from rich.logging import RichHandler

from questions.config import QuestionBuilderConfig
from storage.connection import DEFAULT_DB_PATH

PROJECT_ROOT = Path(__file__).parent
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed_handlers: list[logging.Handler] = []


class DrillSettings(BaseModel):
    """Settings for the drill application.

    Defaults can be overridden by a JSON settings file and then by
    command line flags.
    """

    db_path: Path = DEFAULT_DB_PATH
    log_dir: Path = PROJECT_ROOT / "log"
    log_file: str = "drill.log"
    log_level: str = "INFO"
    console_log_level: str = "WARNING"
    log_to_file: bool = True
    default_count: int = Field(default=20, ge=1)
    auto_advance_delay: float = Field(default=1.5, ge=0.0)
    free_text_advance_delay: float = Field(default=2.0, ge=0.0)
    strict_state_errors: bool = False
    questions: QuestionBuilderConfig = Field(default_factory=QuestionBuilderConfig)


def load_settings(path: Path | None = None) -> DrillSettings:
    """Load settings from a JSON file, or return defaults if no path."""
    if path is None:
        return DrillSettings()
    return DrillSettings.model_validate_json(path.read_text(encoding="utf-8"))


def configure_logging(
    settings: DrillSettings,
    console: Console | None = None,
) -> logging.Logger:
    """Install file and console handlers on the root logger.

    Calling this again replaces the handlers it installed before.
    """
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    console_handler.setLevel(settings.console_log_level.upper())
    root.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    if settings.log_to_file:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            settings.log_dir / settings.log_file,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(settings.log_level.upper())
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    return root
