"""
Dataset adapter (tiny):
- Loads categories + trivia once, exposes category lookup & question filtering.
- Records are frozen pydantic models; nothing mutates them after load.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from config import settings
from dataset_loader import (
    load_categories,
    load_trivia,
    DatasetValidationError,
)
from schemas import Category, DifficultyFilter, TriviaQuestion

logger = logging.getLogger(__name__)


def check_integrity(categories: List[Category], questions: List[TriviaQuestion]) -> None:
    """
    Raise DatasetValidationError on the first broken invariant:
    duplicate ids, empty/duplicate options, answer not among options,
    or a question pointing at an unknown category.
    """
    category_ids: set[int] = set()
    for cat in categories:
        if cat.id in category_ids:
            raise DatasetValidationError(f"Duplicate category id {cat.id}")
        category_ids.add(cat.id)

    question_ids: set[int] = set()
    for q in questions:
        if q.id in question_ids:
            raise DatasetValidationError(f"Duplicate question id {q.id}")
        question_ids.add(q.id)

        if not q.options:
            raise DatasetValidationError(f"Question {q.id} has no options")
        option_ids = [opt.id for opt in q.options]
        if len(set(option_ids)) != len(option_ids):
            raise DatasetValidationError(f"Question {q.id} has duplicate option ids: {option_ids}")
        if q.answer not in option_ids:
            raise DatasetValidationError(
                f"Question {q.id} answer {q.answer} is not one of its option ids {option_ids}"
            )
        if q.category not in category_ids:
            raise DatasetValidationError(f"Question {q.id} references unknown category {q.category}")


class Dataset:
    def __init__(
        self,
        categories_path: Optional[Path] = None,
        trivia_path: Optional[Path] = None,
        validate: Optional[bool] = None,
    ) -> None:
        self._categories_path = categories_path or settings.categories_path
        self._trivia_path = trivia_path or settings.trivia_path
        self._validate = settings.validate_dataset if validate is None else validate
        self._loaded: Optional[Tuple[List[Category], List[TriviaQuestion]]] = None
        self._by_id: Dict[int, Category] = {}

    @classmethod
    def from_records(
        cls,
        categories: List[Category],
        questions: List[TriviaQuestion],
        validate: bool = True,
    ) -> "Dataset":
        """Build an already-loaded dataset (tests, alternative sources)."""
        ds = cls(validate=validate)
        ds._install(list(categories), list(questions))
        return ds

    def load(self) -> "Dataset":
        """Load now instead of on first access."""
        _ = self.categories
        return self

    def _install(self, categories: List[Category], questions: List[TriviaQuestion]) -> None:
        if self._validate:
            check_integrity(categories, questions)
        self._loaded = (categories, questions)
        self._by_id = {cat.id: cat for cat in categories}

    def _load(self) -> None:
        raw_categories = load_categories(self._categories_path)
        raw_trivia = load_trivia(self._trivia_path)
        try:
            categories = [Category.model_validate(rec) for rec in raw_categories]
            questions = [TriviaQuestion.model_validate(rec) for rec in raw_trivia]
        except ValidationError as e:
            raise DatasetValidationError(f"Malformed record: {e}") from e
        try:
            self._install(categories, questions)
        except DatasetValidationError:
            logger.error("Dataset integrity check failed for %s / %s", self._categories_path, self._trivia_path)
            raise
        logger.info(
            "Loaded %d categories and %d trivia questions", len(categories), len(questions)
        )

    # ---- Public helpers --------------------------------------------------
    @property
    def categories(self) -> List[Category]:
        if self._loaded is None:
            self._load()
        return self._loaded[0]

    @property
    def questions(self) -> List[TriviaQuestion]:
        if self._loaded is None:
            self._load()
        return self._loaded[1]

    def get_category(self, category_id: int) -> Category | None:
        _ = self.categories
        return self._by_id.get(category_id)

    def has_category(self, category_id: int) -> bool:
        return self.get_category(category_id) is not None

    def questions_for(self, category_id: int, difficulty: DifficultyFilter = DifficultyFilter.ANY) -> List[TriviaQuestion]:
        """Questions in a category, optionally narrowed to one difficulty. Stored order."""
        wanted = DifficultyFilter(difficulty)
        return [
            q for q in self.questions
            if q.category == category_id
            and (wanted is DifficultyFilter.ANY or q.difficulty.value == wanted.value)
        ]


_dataset: Optional[Dataset] = None


def get_dataset() -> Dataset:
    """Process-wide dataset; FastAPI dependency."""
    global _dataset
    if _dataset is None:
        _dataset = Dataset()
    return _dataset


def set_dataset(dataset: Optional[Dataset]) -> None:
    """Swap the process-wide dataset (startup, tests). None resets to lazy default."""
    global _dataset
    _dataset = dataset
