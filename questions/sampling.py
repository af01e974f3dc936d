"""Shuffling and sampling helpers shared by the question builders.

Every helper takes an optional ``random.Random`` so tests can seed it; the
module-level generator is used otherwise.
"""

import random
from typing import Sequence, TypeVar

from .evaluator import is_correct, normalize

T = TypeVar("T")


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a shuffled copy of items, leaving the input untouched."""
    rng = rng or random
    result = list(items)
    rng.shuffle(result)
    return result


def sample_without_replacement(
    pool: Sequence[T],
    count: int,
    rng: random.Random | None = None,
) -> list[T]:
    """Draw up to count distinct items from pool in random order.

    Never pads with repeats: if count exceeds the pool, the whole pool is
    returned shuffled.
    """
    if count <= 0 or not pool:
        return []
    rng = rng or random
    return rng.sample(list(pool), min(count, len(pool)))


def select_distractors(
    correct_answer: str,
    candidates: Sequence[str],
    count: int = 3,
    rng: random.Random | None = None,
    preferred: Sequence[str] = (),
) -> list[str]:
    """Select wrong options for a multiple choice question.

    Prefers values from ``preferred`` (e.g., same category as the target),
    falls back to random values from ``candidates``. A value qualifies when it
    is non-empty after trimming, is not accepted as the correct answer, and
    differs from every value already chosen.

    Args:
        correct_answer: The question's answer (may contain alternatives).
        candidates: All values from the same content domain.
        count: Maximum number of distractors to return.
        rng: Optional random generator.
        preferred: Values to try before the general pool.

    Returns:
        Up to count distractors; fewer if the corpus is too small.
    """
    rng = rng or random
    distractors: list[str] = []
    seen = {normalize(correct_answer)}

    for group in (preferred, candidates):
        if len(distractors) >= count:
            break
        for value in shuffled(group, rng):
            if len(distractors) >= count:
                break
            text = value.strip()
            key = normalize(text)
            if not text or key in seen or is_correct(text, correct_answer):
                continue
            distractors.append(text)
            seen.add(key)

    return distractors
