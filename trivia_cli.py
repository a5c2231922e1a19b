#!/usr/bin/env python3
# trivia_cli.py
#
# Terminal companion to the API, working on the same dataset files.
# - validate: load + integrity check, print a per-category summary
# - quiz:     run a shuffled quiz for one category (interactive, or --simulate)
# - serve:    run the HTTP API under uvicorn

import argparse
import random
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from config import settings
from dataset import Dataset
from dataset_loader import DatasetLoadError, DatasetValidationError
from logging_config import configure_logging
from schemas import DifficultyFilter, TriviaQuestion
from trivia_service import LimitOutOfRangeError, TriviaService, UnknownCategoryError


def _open_dataset(categories_path: Optional[str], trivia_path: Optional[str]) -> Dataset:
    return Dataset(
        categories_path=Path(categories_path) if categories_path else None,
        trivia_path=Path(trivia_path) if trivia_path else None,
        validate=True,
    ).load()


# --------------------- validate ----------------------------
def run_validate(args: argparse.Namespace) -> int:
    try:
        ds = _open_dataset(args.categories, args.trivia)
    except (DatasetLoadError, DatasetValidationError) as e:
        print(f"[cli] INVALID: {e}")
        return 1

    names = {c.id: c.name for c in ds.categories}
    df = pd.DataFrame(
        [{"category": names[q.category], "difficulty": q.difficulty.value} for q in ds.questions],
        columns=["category", "difficulty"],
    )
    print(f"[cli] OK: {len(ds.categories)} categories, {len(ds.questions)} questions")
    if not df.empty:
        table = pd.crosstab(df["category"], df["difficulty"])
        print(table.to_string())
    return 0


# --------------------- quiz ----------------------------
def _ask(q: TriviaQuestion, turn: int, simulate: bool, rng: random.Random) -> Optional[bool]:
    print(f"\nQ{turn} [{q.difficulty.value}] {q.question}")
    for opt in q.options:
        print(f"  {opt.id}) {opt.text}")
    valid = {str(opt.id) for opt in q.options}

    if simulate:
        choice = str(rng.choice(q.options).id)
        print(f"[cli] Simulated answer: {choice}")
    else:
        while True:
            choice = input("Answer (option id, q=quit): ").strip().lower()
            if choice == "q":
                return None
            if choice in valid:
                break

    correct = int(choice) == q.answer
    print("Correct!" if correct else f"Wrong, answer was {q.answer}.")
    return correct


def run_quiz(args: argparse.Namespace) -> int:
    try:
        ds = _open_dataset(args.categories, args.trivia)
    except (DatasetLoadError, DatasetValidationError) as e:
        print(f"[cli] INVALID: {e}")
        return 1

    rng = random.Random(args.seed)
    service = TriviaService(ds, rng=rng)
    try:
        questions: List[TriviaQuestion] = service.query(
            category=args.category, difficulty=DifficultyFilter(args.difficulty), limit=args.limit,
        )
    except (UnknownCategoryError, LimitOutOfRangeError) as e:
        print(f"[cli] {e}")
        return 2

    if not questions:
        print("[cli] No questions match these filters.")
        return 0

    score = asked = 0
    for turn, q in enumerate(questions, start=1):
        result = _ask(q, turn, args.simulate, rng)
        if result is None:
            print("[cli] Quit requested.")
            break
        asked += 1
        score += int(result)

    print(f"\n[cli] Finished. score={score}/{asked}")
    return 0


# --------------------- serve ----------------------------
def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("main:app", host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


# --------------------- main ----------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="trivia-time", description="Trivia Time API tools")
    parser.add_argument("--categories", type=str, default=None,
                        help="Categories file (.json/.csv/.xlsx); defaults to the bundled data")
    parser.add_argument("--trivia", type=str, default=None,
                        help="Trivia file (.json/.csv/.xlsx); defaults to the bundled data")
    sub = parser.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Load the dataset and check its integrity")
    p_validate.set_defaults(func=run_validate)

    p_quiz = sub.add_parser("quiz", help="Play a shuffled quiz in the terminal")
    p_quiz.add_argument("--category", type=int, required=True, help="Category id")
    p_quiz.add_argument("--difficulty", choices=[d.value for d in DifficultyFilter], default="any")
    p_quiz.add_argument("--limit", type=int, default=settings.default_limit, help="Questions to ask")
    p_quiz.add_argument("--simulate", action="store_true", help="Pick answers at random")
    p_quiz.add_argument("--seed", type=int, default=None, help="RNG seed (shuffle and --simulate)")
    p_quiz.set_defaults(func=run_quiz)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", type=str, default=settings.host)
    p_serve.add_argument("--port", type=int, default=settings.port)
    p_serve.set_defaults(func=run_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
