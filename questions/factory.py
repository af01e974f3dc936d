"""Resolves batch requests against an injected content source."""

import logging
import random
from functools import partial
from typing import Callable

from models import BatchRequest, Question
from storage.base import ContentRepository

from .builders import build_questions
from .config import QuestionBuilderConfig

logger = logging.getLogger(__name__)


class QuestionFactory:
    """Builds question batches from a content repository.

    The repository is passed in explicitly so the factory can be tested with
    fixture content and no global state is involved.
    """

    def __init__(
        self,
        content_source: ContentRepository,
        config: QuestionBuilderConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.content_source = content_source
        self.config = config or QuestionBuilderConfig()
        self.rng = rng or random.Random()

    def build(self, request: BatchRequest) -> list[Question]:
        """Build a fresh batch for the request.

        The whole kind is loaded (not just the category) so distractors can
        come from the full content domain.
        """
        records = self.content_source.get_records(request.kind)
        questions = build_questions(
            records,
            request.mode,
            request.count,
            request.category,
            kind=request.kind,
            direction=request.direction,
            level=request.level,
            difficulty=request.difficulty,
            config=self.config,
            rng=self.rng,
        )
        logger.info(
            "Built batch of %d %s/%s questions (category=%s)",
            len(questions),
            request.kind.value,
            request.mode.value,
            request.category or "all",
        )
        return questions

    def rebuild_for(self, request: BatchRequest) -> Callable[[], list[Question]]:
        """Return a zero-argument call that rebuilds the same request."""
        return partial(self.build, request.model_copy())
