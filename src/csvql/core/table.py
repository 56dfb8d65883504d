"""In-memory table helpers.

A table is a ``pandas.DataFrame`` whose cells are all ``str`` and whose index
is a fresh ``RangeIndex``. Row identity is the positional index, valid only
within one load/compute/save cycle. Numeric interpretation of a cell is done
on demand with ``parse_number`` and never stored back into the frame.

Helpers here never mutate their input; every operation returns a new frame.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from .errors import UnknownColumnError


# Joins cell values into a row signature. Not expected in ordinary CSV data.
SIGNATURE_SEPARATOR = "\x1f"

_QUOTES = ("'", '"')


def parse_number(value) -> Optional[float]:
    """Return the numeric value of a cell, or None when it is not a number.

    Blank cells, non-finite spellings ("nan", "inf") and digit-grouping
    underscores ("1_000") are not numbers.

    Examples:
        >>> parse_number(" 42 ")
        42.0
        >>> parse_number("abc") is None
        True
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text or "_" in text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_numeric(value) -> bool:
    """Returns True if value can be read as a finite number."""
    return parse_number(value) is not None


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def unquote(text: str) -> str:
    """Strip one layer of matching surrounding single or double quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _QUOTES:
        return text[1:-1]
    return text


def new_table(columns: Sequence[str], rows: Iterable[Sequence[str]] = ()) -> pd.DataFrame:
    """Build a text table from column names and row value sequences.

    Raises:
        ValueError: If a row does not have exactly one cell per column.
    """
    columns = [str(c) for c in columns]
    data: List[List[str]] = []
    for i, row in enumerate(rows):
        cells = ["" if v is None else str(v) for v in row]
        if len(cells) != len(columns):
            raise ValueError(
                f"Row {i} has {len(cells)} cells, expected {len(columns)} ({', '.join(columns)})"
            )
        data.append(cells)
    return pd.DataFrame(data, columns=columns, dtype=object)


def empty_like(df: pd.DataFrame) -> pd.DataFrame:
    """Zero-row table keeping the column schema of ``df``."""
    return new_table(list(df.columns))


def as_text_table(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize any frame into a text table (str cells, fresh index)."""
    out = df.copy()
    out.columns = [str(c) for c in out.columns]
    for col in out.columns:
        out[col] = ["" if _is_missing(v) else str(v) for v in out[col].tolist()]
    return out.reset_index(drop=True)


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def take_rows(df: pd.DataFrame, positions: Iterable[int]) -> pd.DataFrame:
    """Subset ``df`` to the given row positions, re-indexed from zero."""
    return df.iloc[list(positions)].reset_index(drop=True)


def validate_columns(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Raise UnknownColumnError for the first name not present in ``df``."""
    existing = set(df.columns)
    for col in columns:
        if col not in existing:
            raise UnknownColumnError(col, df.columns)


def column_values(df: pd.DataFrame, column: str) -> List[str]:
    return df[column].tolist()


def row_signature(values: Iterable[str]) -> str:
    """Deterministic stand-in for row identity: cells joined in column order."""
    return SIGNATURE_SEPARATOR.join(str(v) for v in values)


def row_signatures(df: pd.DataFrame) -> List[str]:
    return [row_signature(row) for row in df.itertuples(index=False, name=None)]


__all__ = [
    "SIGNATURE_SEPARATOR",
    "parse_number",
    "is_numeric",
    "is_blank",
    "unquote",
    "new_table",
    "empty_like",
    "as_text_table",
    "take_rows",
    "validate_columns",
    "column_values",
    "row_signature",
    "row_signatures",
]
