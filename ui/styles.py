from rich.style import Style
from rich.text import Text
from rich.theme import Theme

GERMAN_BLACK = "#2C3E50"
GERMAN_RED = "#DD0000"
GERMAN_GOLD = "#FFCE00"
SUCCESS_GREEN = "#27AE60"
ERROR_RED = "#C0392B"
INFO_BLUE = "#3498DB"
MUTED_GRAY = "#7F8C8D"
TEXT_WHITE = "#FFFFFF"

# Article colour coding: der blue, die pink, das gray
GENDER_COLORS = {
    "der": "#3B82F6",
    "die": "#EC4899",
    "das": "#9CA3AF",
}

DEFAULT_THEME = Theme(
    {
        "primary": Style(color=GERMAN_RED, bold=True),
        "secondary": Style(color=GERMAN_GOLD, bold=True),
        "success": Style(color=SUCCESS_GREEN),
        "error": Style(color=ERROR_RED, bold=True),
        "info": Style(color=INFO_BLUE),
        "muted": Style(color=MUTED_GRAY),
        "option_label": Style(color=GERMAN_GOLD, bold=True),
        "option_text": Style(color=TEXT_WHITE),
        "der": Style(color=GENDER_COLORS["der"], bold=True),
        "die": Style(color=GENDER_COLORS["die"], bold=True),
        "das": Style(color=GENDER_COLORS["das"], bold=True),
    }
)


def get_gender_style(gender: str | None) -> Style:
    """Get colour style for a der/die/das value; plain white otherwise."""
    if gender is None:
        return Style(color=TEXT_WHITE)
    color = GENDER_COLORS.get(gender.strip().lower())
    if color is None:
        return Style(color=TEXT_WHITE)
    return Style(color=color, bold=True)


def get_accuracy_style(accuracy: float) -> Style:
    """Get color style based on accuracy percentage."""
    if accuracy >= 80:
        return Style(color=SUCCESS_GREEN, bold=True)
    elif accuracy >= 50:
        return Style(color=GERMAN_GOLD)
    else:
        return Style(color=ERROR_RED)


def format_duration(seconds: float) -> str:
    """Format seconds as '1m 05s' or '42s'."""
    total = round(seconds)
    minutes, secs = divmod(total, 60)
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def create_success_header() -> Text:
    """Create a success/correct answer header."""
    header = Text()
    header.append("✓ ", Style(color=SUCCESS_GREEN, bold=True))
    header.append("Correct!", Style(color=SUCCESS_GREEN, bold=True))
    return header


def create_error_header() -> Text:
    """Create an error/incorrect answer header."""
    header = Text()
    header.append("✗ ", Style(color=ERROR_RED, bold=True))
    header.append("Not quite!", Style(color=ERROR_RED, bold=True))
    return header
