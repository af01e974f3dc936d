"""Configuration for question generation.

These configuration models allow users to tune question building behavior,
such as the number of options shown, whether to shuffle options, etc.
"""

from pydantic import BaseModel, Field


class QuestionBuilderConfig(BaseModel):
    """Configuration for building question batches."""

    total_options: int = Field(default=4, ge=2, le=6)
    distractor_count: int = Field(default=3, ge=0)
    prefer_same_category: bool = True
    shuffle_options: bool = True

    @property
    def max_distractors(self) -> int:
        """Distractors that fit next to the correct answer."""
        return min(self.distractor_count, self.total_options - 1)
