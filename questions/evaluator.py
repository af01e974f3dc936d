"""Answer equivalence rules shared by every question mode."""

ALTERNATIVE_SEPARATOR = "/"


def normalize(text: str) -> str:
    """Trim surrounding whitespace and lower-case."""
    return text.strip().lower()


def split_alternatives(canonical: str) -> list[str]:
    """Split an answer like "Apfel/Äpfel" into its trimmed literals."""
    return [alt.strip() for alt in canonical.split(ALTERNATIVE_SEPARATOR)]


def canonical_literal(canonical: str) -> str:
    """Return the first literal of an answer, used as the displayed option."""
    return split_alternatives(canonical)[0]


def is_correct(submitted: str, canonical: str) -> bool:
    """Check whether a submitted answer matches the canonical answer.

    Comparison is case-insensitive and ignores surrounding whitespace. If the
    canonical answer encodes alternatives separated by "/", matching any one
    of them is enough. There is no fuzzy matching.

    Args:
        submitted: Free text typed by the user or the selected option.
        canonical: The question's answer string.

    Returns:
        True if the submission is an accepted answer.
    """
    normalized_submission = normalize(submitted)
    normalized_canonical = normalize(canonical)

    if ALTERNATIVE_SEPARATOR in normalized_canonical:
        return any(
            alt == normalized_submission
            for alt in split_alternatives(normalized_canonical)
        )

    return normalized_submission == normalized_canonical
