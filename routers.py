"""
FastAPI routes for the trivia API.

We expose:
- GET  /v1/categories   (every category, as loaded)
- GET  /v1/trivia       (shuffled questions for one category)

ASSUMPTION: Read-only, no auth. Query shapes are validated by FastAPI before
the handler body runs; range/existence checks happen in TriviaService.
"""
from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from config import settings
from schemas import Category, DifficultyFilter, ErrorResponse, TriviaQuestion
from trivia_service import (
    LimitOutOfRangeError, TriviaService, UnknownCategoryError, get_trivia_service,
)

router = APIRouter(tags=["trivia"])

_DIGITS = r"^[0-9]+$"


@router.get(
    "/categories",
    response_model=List[Category],
    summary="Get all categories",
    description="Retrieve a list of trivia categories for the Trivia App.",
    responses={
        200: {"description": "Successful response with a list of categories."},
        500: {"model": ErrorResponse, "description": "Internal server error."},
    },
)
def list_categories(service: TriviaService = Depends(get_trivia_service)) -> List[Category]:
    return service.list_categories()


@router.get(
    "/trivia",
    response_model=List[TriviaQuestion],
    summary="Get trivia questions",
    description="Retrieve randomly ordered trivia questions for a category, optionally filtered by difficulty.",
    responses={
        200: {"description": "Successful response with a list of trivia questions."},
        400: {"model": ErrorResponse, "description": "Invalid query parameters."},
        404: {"model": ErrorResponse, "description": "Category not found."},
        500: {"model": ErrorResponse, "description": "Internal server error."},
    },
)
def list_trivia(
    category: str = Query(..., pattern=_DIGITS, description="Category id.", examples=["1"]),
    difficulty: DifficultyFilter = Query(DifficultyFilter.ANY, description="easy, medium, hard or any."),
    limit: str = Query(
        str(settings.default_limit), pattern=_DIGITS,
        description=f"Number of questions, {settings.min_limit}-{settings.max_limit}.",
    ),
    service: TriviaService = Depends(get_trivia_service),
) -> List[TriviaQuestion]:
    try:
        return service.query(category=int(category), difficulty=difficulty, limit=int(limit))
    except UnknownCategoryError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except LimitOutOfRangeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
