"""Projection, ordering, row limits and de-duplication.

All functions are pure: they take a text table and return a new one.
"""

from __future__ import annotations

import logging
import re
from typing import List, Tuple

import pandas as pd

from .compare import sort_positions
from .enums import SortDirection
from .errors import InvalidDirectionError
from .table import column_values, row_signatures, take_rows, validate_columns


logger = logging.getLogger(__name__)

_DISTINCT_RE = re.compile(r"^\s*distinct\b", flags=re.IGNORECASE)


def parse_select_list(select_text: str, df: pd.DataFrame) -> Tuple[List[str], bool]:
    """Split a select list into column names and a DISTINCT flag.

    An empty list or ``*`` selects every column. A leading ``DISTINCT``
    keyword (any case) requests de-duplication.

    Examples:
        >>> parse_select_list("DISTINCT name, age", df)
        (['name', 'age'], True)
    """
    text = select_text or ""
    distinct = bool(_DISTINCT_RE.match(text))
    if distinct:
        text = _DISTINCT_RE.sub("", text, count=1)
    text = text.strip()
    if not text or text == "*":
        return list(df.columns), distinct

    columns: List[str] = []
    for part in text.split(","):
        name = part.strip()
        if not name:
            continue
        if name in columns:
            logger.debug("Column %s selected more than once; keeping the first", name)
            continue
        columns.append(name)
    if not columns:
        return list(df.columns), distinct
    return columns, distinct


def project(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """Restrict ``df`` to ``columns`` in the requested order."""
    validate_columns(df, columns)
    return df.loc[:, list(columns)].reset_index(drop=True)


def parse_order_by(order_by: str) -> Tuple[str, SortDirection]:
    """Parse ``"<column> [asc|desc]"``.

    Raises:
        InvalidDirectionError: Empty clause, unknown direction or trailing tokens.
    """
    parts = (order_by or "").split()
    if not parts:
        raise InvalidDirectionError("empty ORDER BY clause")
    if len(parts) > 2:
        raise InvalidDirectionError(
            f"invalid ORDER BY clause: {order_by.strip()} (use '<column> [asc|desc]')"
        )
    direction = SortDirection.ASC
    if len(parts) == 2:
        try:
            direction = SortDirection(parts[1].lower())
        except ValueError:
            raise InvalidDirectionError(
                f"invalid ORDER BY direction: {parts[1]} (use 'asc' or 'desc')"
            ) from None
    return parts[0], direction


def sort(df: pd.DataFrame, order_by: str) -> pd.DataFrame:
    """Stable single-key sort using numeric-or-text comparison.

    An empty clause returns ``df`` unchanged.
    """
    if not order_by or not order_by.strip():
        return df
    column, direction = parse_order_by(order_by)
    validate_columns(df, [column])
    positions = sort_positions(
        column_values(df, column), descending=direction == SortDirection.DESC
    )
    return take_rows(df, positions)


def limit(df: pd.DataFrame, n: int) -> pd.DataFrame:
    """First ``n`` rows; non-positive or oversized limits are a no-op."""
    if n is None or n <= 0 or n >= len(df):
        return df
    return df.iloc[:n].reset_index(drop=True)


def distinct(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose full content repeats an earlier row."""
    seen = set()
    keep: List[int] = []
    for i, signature in enumerate(row_signatures(df)):
        if signature in seen:
            continue
        seen.add(signature)
        keep.append(i)
    if len(keep) == len(df):
        return df
    logger.debug("DISTINCT removed %d duplicate rows", len(df) - len(keep))
    return take_rows(df, keep)


__all__ = [
    "parse_select_list",
    "project",
    "parse_order_by",
    "sort",
    "limit",
    "distinct",
]
