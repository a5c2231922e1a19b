"""
Trivia query orchestration (business logic):
- Validates the query against the dataset, filters, shuffles, truncates.
- Keeps the web layer thin and swappable.
"""
from __future__ import annotations
import logging
import random
from typing import List, Optional

from config import settings
from dataset import Dataset, get_dataset
from schemas import Category, DifficultyFilter, TriviaQuestion

logger = logging.getLogger(__name__)


class UnknownCategoryError(LookupError):
    """Requested category id is not in the dataset."""


class LimitOutOfRangeError(ValueError):
    """Requested limit is outside [min_limit, max_limit]."""


class TriviaService:
    def __init__(self, dataset: Dataset, rng: Optional[random.Random] = None) -> None:
        self._dataset = dataset
        self._rng = rng or random.Random(settings.shuffle_seed)

    def list_categories(self) -> List[Category]:
        return self._dataset.categories

    def query(
        self,
        category: int,
        difficulty: DifficultyFilter = DifficultyFilter.ANY,
        limit: int = settings.default_limit,
    ) -> List[TriviaQuestion]:
        """
        PURPOSE:
        - Return up to `limit` questions from `category`, in random order.

        BEHAVIOR:
        - Unknown category -> UnknownCategoryError (checked before limit).
        - limit outside [min_limit, max_limit] -> LimitOutOfRangeError.
        - difficulty ANY keeps every difficulty.
        - Fewer than `limit` matches returns all of them.
        """
        logger.info("Trivia query: category=%s difficulty=%s limit=%s",
                    category, getattr(difficulty, "value", difficulty), limit)

        if not self._dataset.has_category(category):
            raise UnknownCategoryError(f"Category {category} not found")
        if not (settings.min_limit <= limit <= settings.max_limit):
            raise LimitOutOfRangeError(
                f"limit must be between {settings.min_limit} and {settings.max_limit}, got {limit}"
            )

        # questions_for builds a fresh list; shuffling it never touches the dataset
        pool = self._dataset.questions_for(category, difficulty)
        self._rng.shuffle(pool)
        return pool[:limit]


_service: Optional[TriviaService] = None


def get_trivia_service() -> TriviaService:
    """FastAPI dependency; built lazily over the process-wide dataset."""
    global _service
    if _service is None:
        _service = TriviaService(get_dataset())
    return _service


def set_trivia_service(service: Optional[TriviaService]) -> None:
    global _service
    _service = service
