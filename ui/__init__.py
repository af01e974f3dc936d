"""German Drill UI Module - terminal interface for practice sessions."""

from ui.app import DrillUI
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
    GERMAN_RED,
    GERMAN_GOLD,
    SUCCESS_GREEN,
    ERROR_RED,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "DrillUI",
    "CategoryTable",
    "FeedbackPanel",
    "LessonPanel",
    "MistakeTable",
    "QuestionPanel",
    "ResultsPanel",
    "WelcomeScreen",
    "GERMAN_RED",
    "GERMAN_GOLD",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "INFO_BLUE",
    "MUTED_GRAY",
]
