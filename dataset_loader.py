#!/usr/bin/env python3
"""
dataset_loader.py

Load the bundled trivia data (categories + questions) into plain record dicts.
- Supports .json (the shipped bundle), .csv and .xlsx
- Simple required-column / required-key validation
- Exposes a small public API plus a main() for local testing

Tabular layout (csv / xlsx):
- categories: id, name, image
- trivia:     id, question, option_1..option_N, answer, category, difficulty
  Option ids are the column numbers; blank option cells are skipped.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from config import settings

# --------------------------- Exceptions --------------------------------------
class DatasetLoadError(Exception):
    """Raised when a data file fails to load due to IO or parsing issues."""


class DatasetValidationError(Exception):
    """Raised when a data file loads but violates expected schema constraints."""


# --------------------------- Helpers -----------------------------------------
CATEGORY_COLUMNS: Sequence[str] = ("id", "name")
TRIVIA_COLUMNS: Sequence[str] = ("id", "question", "answer", "category", "difficulty")
_OPTION_COLUMN = re.compile(r"^option_(\d+)$")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        if pd.isna(value):
            return True
    except (TypeError, ValueError):
        pass
    return False


def _safe_str(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    text = str(value).strip()
    return text or None


def _int_or_none(value: Any) -> Optional[int]:
    text = _safe_str(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    # Spreadsheet cells often come back as "3.0"
    try:
        as_float = float(text)
    except ValueError:
        return None
    return int(as_float) if as_float.is_integer() else None


def _read_json(path: Path) -> List[Dict[str, Any]]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DatasetLoadError(f"Failed to read JSON {path!s}: {e!r}") from e
    if not isinstance(data, list):
        raise DatasetValidationError(f"{path!s}: expected a JSON array at top level, got {type(data).__name__}")
    for pos, rec in enumerate(data):
        if not isinstance(rec, dict):
            raise DatasetValidationError(f"{path!s}: entry #{pos} is not an object")
    return data


def _read_table(path: Path, sheet: Optional[str | int] = None) -> pd.DataFrame:
    """Read a CSV or Excel sheet as strings; Excel defaults to the first sheet."""
    try:
        if path.suffix.lower() == ".csv":
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(path, sheet_name=0 if sheet is None else sheet, dtype=str)
    except Exception as e:
        raise DatasetLoadError(f"Failed to read {path!s}: {e!r}") from e
    # Normalize column names (strip whitespace, case)
    df.columns = [str(c).strip().lower() for c in df.columns]
    return df


def _validate_required_columns(columns: Sequence[str], required: Sequence[str], where: str) -> None:
    missing = [c for c in required if c not in columns]
    if missing:
        raise DatasetValidationError(
            f"{where}: missing required column(s): {', '.join(missing)}. "
            f"Available columns: {list(columns)}"
        )


def _resolve(path: str | Path | None, default: Path) -> Path:
    p = Path(path) if path is not None else default
    if not p.exists():
        raise DatasetLoadError(f"File not found: {p!s}")
    if not p.is_file():
        raise DatasetLoadError(f"Path is not a file: {p!s}")
    if p.suffix.lower() not in (".json", ".csv", ".xlsx"):
        raise DatasetLoadError(f"Unsupported file extension {p.suffix.lower()!r}. Use .json, .csv or .xlsx.")
    return p


def _require_int(value: Any, field: str, where: str) -> int:
    parsed = _int_or_none(value)
    if parsed is None:
        raise DatasetValidationError(f"{where}: {field!r} must be an integer, got {value!r}")
    return parsed


# --------------------------- Row converters ----------------------------------
def _category_from_row(row: Dict[str, Any], where: str) -> Dict[str, Any]:
    return {
        "id": _require_int(row.get("id"), "id", where),
        "name": _safe_str(row.get("name")) or "",
        "image": _safe_str(row.get("image")) or "",
    }


def _trivia_from_row(row: Dict[str, Any], option_columns: Sequence[tuple[int, str]], where: str) -> Dict[str, Any]:
    options = []
    for option_id, column in option_columns:
        text = _safe_str(row.get(column))
        if text is not None:
            options.append({"id": option_id, "text": text})
    return {
        "id": _require_int(row.get("id"), "id", where),
        "question": _safe_str(row.get("question")) or "",
        "options": options,
        "answer": _require_int(row.get("answer"), "answer", where),
        "category": _require_int(row.get("category"), "category", where),
        "difficulty": (_safe_str(row.get("difficulty")) or "").lower(),
    }


# --------------------------- Public API --------------------------------------
def load_categories(path: str | Path | None = None) -> List[Dict[str, Any]]:
    """
    Load category records.

    Parameters
    ----------
    path : str | Path | None
        Path to .json, .csv or .xlsx. If None, uses settings.categories_path.

    Returns
    -------
    list of {"id", "name", "image"} dicts, in file order.
    """
    p = _resolve(path, settings.categories_path)
    if p.suffix.lower() == ".json":
        records = _read_json(p)
        for pos, rec in enumerate(records):
            _validate_required_columns(list(rec), CATEGORY_COLUMNS, f"{p!s} entry #{pos}")
        return [{**rec, "image": rec.get("image") or ""} for rec in records]

    df = _read_table(p)
    _validate_required_columns(list(df.columns), CATEGORY_COLUMNS, str(p))
    return [
        _category_from_row(row, f"{p!s} row {pos + 2}")
        for pos, row in enumerate(df.to_dict(orient="records"))
    ]


def load_trivia(path: str | Path | None = None) -> List[Dict[str, Any]]:
    """
    Load trivia question records.

    Parameters
    ----------
    path : str | Path | None
        Path to .json, .csv or .xlsx. If None, uses settings.trivia_path.

    Returns
    -------
    list of {"id", "question", "options", "answer", "category", "difficulty"} dicts.
    """
    p = _resolve(path, settings.trivia_path)
    if p.suffix.lower() == ".json":
        records = _read_json(p)
        for pos, rec in enumerate(records):
            _validate_required_columns(list(rec), (*TRIVIA_COLUMNS, "options"), f"{p!s} entry #{pos}")
        return records

    df = _read_table(p)
    _validate_required_columns(list(df.columns), TRIVIA_COLUMNS, str(p))
    option_columns = sorted(
        (int(m.group(1)), c) for c in df.columns if (m := _OPTION_COLUMN.match(c))
    )
    if not option_columns:
        raise DatasetValidationError(f"{p!s}: no option_<n> columns found")
    return [
        _trivia_from_row(row, option_columns, f"{p!s} row {pos + 2}")
        for pos, row in enumerate(df.to_dict(orient="records"))
    ]


# --------------------------- Local test entrypoint ----------------------------
def _summarize(categories: List[Dict[str, Any]], trivia: List[Dict[str, Any]]) -> str:
    counts = pd.DataFrame(trivia, columns=list(TRIVIA_COLUMNS)).groupby(["category", "difficulty"]).size()
    return (
        f"Categories: {len(categories):,}\n"
        f"Questions: {len(trivia):,}\n"
        f"Questions per category/difficulty:\n{counts.to_string() if len(counts) else '(none)'}"
    )


def main() -> None:
    """
    Local smoke-test:
    - Loads the configured categories + trivia files
    - Prints a short summary
    """
    try:
        categories = load_categories()
        trivia = load_trivia()
    except (DatasetLoadError, DatasetValidationError) as e:
        print(str(e))
        return
    print(_summarize(categories, trivia))


if __name__ == "__main__":
    main()
