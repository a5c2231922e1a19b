import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dataset import Dataset, set_dataset
from main import app
from schemas import Category, TriviaQuestion
from trivia_service import TriviaService, set_trivia_service


def _question(qid, category, difficulty, answer=1, n_options=4):
    return {
        "id": qid,
        "question": f"Question {qid}?",
        "options": [{"id": i, "text": f"Option {i}"} for i in range(1, n_options + 1)],
        "answer": answer,
        "category": category,
        "difficulty": difficulty,
    }


CATEGORY_RECORDS = [
    {"id": 1, "name": "General Knowledge", "image": ""},
    {"id": 2, "name": "Science & Nature", "image": "https://example.com/science.png"},
    {"id": 3, "name": "Empty Category", "image": ""},
]

TRIVIA_RECORDS = [
    _question(1, 1, "easy"),
    _question(2, 1, "easy", answer=2),
    _question(3, 1, "easy", answer=3),
    _question(4, 1, "medium"),
    _question(5, 1, "medium", answer=4),
    _question(6, 1, "hard", answer=2),
    _question(7, 2, "easy"),
    _question(8, 2, "easy", answer=3),
    _question(9, 2, "hard", answer=2, n_options=2),
]


@pytest.fixture
def category_records():
    return [dict(rec) for rec in CATEGORY_RECORDS]


@pytest.fixture
def trivia_records():
    return [dict(rec) for rec in TRIVIA_RECORDS]


@pytest.fixture
def dataset(category_records, trivia_records):
    return Dataset.from_records(
        [Category.model_validate(rec) for rec in category_records],
        [TriviaQuestion.model_validate(rec) for rec in trivia_records],
    )


@pytest.fixture(autouse=True)
def install_dataset(dataset):
    """Point the app at the small fixture dataset instead of the bundle."""
    set_dataset(dataset)
    set_trivia_service(TriviaService(dataset, rng=random.Random(1234)))
    try:
        yield dataset
    finally:
        set_trivia_service(None)
        set_dataset(None)
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
