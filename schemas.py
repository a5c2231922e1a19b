"""
Pydantic models for the trivia API.
"""
from __future__ import annotations
from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultyFilter(str, Enum):
    """Query-side difficulty; ANY matches every question."""
    ANY = "any"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ErrorType(str, Enum):
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    PARSE = "PARSE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    UNKNOWN = "UNKNOWN"


# ---- Records (also used as response models) ----

class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(description="The unique identifier for the category.", examples=[1])
    name: str = Field(description="The name of the category.", examples=["General Knowledge"])
    image: str = Field(default="", description="URL or path to the category image.", examples=[""])


class TriviaOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str


class TriviaQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    question: str
    options: List[TriviaOption]                  # Display order as stored
    answer: int                                  # Id of the correct option
    category: int                                # Category.id
    difficulty: Difficulty


# ---- Errors ----

class ErrorResponse(BaseModel):
    error_type: ErrorType
    error: str
    docs: str
