"""INSERT / UPDATE / DELETE over a text table.

Mutations never patch a frame in place: each one builds a fresh table that
the caller hands to the persistence layer. UPDATE and DELETE refuse to run
without a WHERE condition.

Locating the rows a WHERE condition refers to is done in one of two ways
(see ``RowMatching``):

- POSITION (default): use the row positions reported by the condition
  evaluator.
- SIGNATURE: filter the table, collect the content signatures of the
  filtered rows, and treat every source row whose signature is in that set
  as matched. Rows with identical content are indistinguishable and are
  always touched together.

A single-column predicate always gives the same answer for rows with
identical content, so both strategies select the same rows.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from .condition import evaluate, matching_positions
from .enums import RowMatching
from .errors import (
    EmptyInputError,
    InvalidAssignmentError,
    InvalidRowNumberError,
    MissingWhereClauseError,
    UnknownColumnError,
)
from .table import (
    empty_like,
    new_table,
    row_signatures,
    take_rows,
    unquote,
    validate_columns,
)


logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')


def split_assignments(text: str) -> List[str]:
    """Split ``a=1,b='x, y'`` on commas that are not inside quotes.

    A quote only opens a quoted value when it is the first non-space
    character after ``=``; elsewhere (``name=O'Brien``) it is plain text.

    Raises:
        InvalidAssignmentError: A quoted value is never closed.
    """
    parts: List[str] = []
    current: List[str] = []
    quote = None
    seen_equals = False
    at_value_start = False
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
            current.append(ch)
            continue
        if ch == ",":
            parts.append("".join(current))
            current = []
            seen_equals = at_value_start = False
            continue
        if ch == "=" and not seen_equals:
            seen_equals = at_value_start = True
        elif at_value_start and ch in _QUOTES:
            quote = ch
            at_value_start = False
        elif not ch.isspace():
            at_value_start = False
        current.append(ch)
    if quote:
        raise InvalidAssignmentError(f"unterminated quote in assignment: {text.strip()}")
    parts.append("".join(current))
    return parts


def parse_assignments(text: str) -> Dict[str, str]:
    """Parse ``"col1=val1,col2='val 2'"`` into an ordered column→value map.

    Values are trimmed and lose one layer of surrounding quotes. A later
    assignment to the same column overrides an earlier one.

    Raises:
        EmptyInputError: The text is empty.
        InvalidAssignmentError: An item has no ``=`` or no column name.
    """
    if not text or not text.strip():
        raise EmptyInputError("assignment values cannot be empty")

    values: Dict[str, str] = {}
    for item in split_assignments(text):
        item = item.strip()
        if "=" not in item:
            raise InvalidAssignmentError(
                f"invalid assignment format: {item} (expected col=value)"
            )
        column, value = item.split("=", 1)
        column = column.strip()
        if not column:
            raise InvalidAssignmentError(
                f"invalid assignment format: {item} (expected col=value)"
            )
        values[column] = unquote(value.strip())
    return values


def build_row(columns: Sequence[str], values: Dict[str, str]) -> List[str]:
    """Order assigned values by table column; unassigned columns are empty."""
    return [values.get(col, "") for col in columns]


def _rows(df: pd.DataFrame) -> List[List[str]]:
    return [list(row) for row in df.itertuples(index=False, name=None)]


def _require_where(where: str, operation: str) -> None:
    if not where or not where.strip():
        raise MissingWhereClauseError(
            f"{operation} requires WHERE condition to prevent accidental mass "
            f"{'deletion' if operation == 'DELETE' else 'updates'}"
        )


def matched_positions(
    df: pd.DataFrame, where: str, matching: RowMatching = RowMatching.POSITION
) -> List[int]:
    """Positions in ``df`` that a WHERE condition refers to."""
    if RowMatching(matching) == RowMatching.POSITION:
        return matching_positions(df, where)

    targets = set(row_signatures(evaluate(df, where)))
    if not targets:
        return []
    return [i for i, signature in enumerate(row_signatures(df)) if signature in targets]


def insert_rows(df: pd.DataFrame, assignments: Iterable[str]) -> Tuple[pd.DataFrame, int]:
    """Append one row per assignment string.

    Every assignment is validated before any row is added, so a bad
    assignment in a batch leaves nothing half-inserted.

    Returns:
        Tuple of (new table, number of rows inserted).
    """
    columns = list(df.columns)
    new_rows: List[List[str]] = []
    for text in assignments:
        values = parse_assignments(text)
        validate_columns(df, values.keys())
        new_rows.append(build_row(columns, values))
    if not new_rows:
        raise EmptyInputError("no rows to insert")
    return new_table(columns, _rows(df) + new_rows), len(new_rows)


def insert_from_table(df: pd.DataFrame, source: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """Append every row of ``source``; its columns must all exist in ``df``."""
    existing = set(df.columns)
    for col in source.columns:
        if col not in existing:
            raise UnknownColumnError(col, df.columns)
    columns = list(df.columns)
    appended = [
        build_row(columns, dict(zip(source.columns, row)))
        for row in source.itertuples(index=False, name=None)
    ]
    return new_table(columns, _rows(df) + appended), len(appended)


def update_rows(
    df: pd.DataFrame,
    assignment_text: str,
    where: str,
    matching: RowMatching = RowMatching.POSITION,
) -> Tuple[pd.DataFrame, int]:
    """Rewrite the assigned cells of every row the WHERE condition refers to.

    Returns:
        Tuple of (new table, rows affected). With no matching rows the input
        table is returned unchanged with a count of 0.

    Raises:
        EmptyInputError: Empty assignment text.
        MissingWhereClauseError: Empty WHERE condition.
        UnknownColumnError: An assigned or filtered column does not exist.
    """
    if not assignment_text or not assignment_text.strip():
        raise EmptyInputError("UPDATE values cannot be empty")
    _require_where(where, "UPDATE")

    updates = parse_assignments(assignment_text)
    validate_columns(df, updates.keys())

    positions = matched_positions(df, where, matching)
    if not positions:
        return df, 0

    columns = list(df.columns)
    targets = [(columns.index(col), value) for col, value in updates.items()]
    rows = _rows(df)
    for pos in positions:
        for col_index, value in targets:
            rows[pos][col_index] = value
    logger.debug("UPDATE rewrote %d rows (%s matching)", len(positions), RowMatching(matching).value)
    return new_table(columns, rows), len(positions)


def delete_rows(
    df: pd.DataFrame, where: str, matching: RowMatching = RowMatching.POSITION
) -> Tuple[pd.DataFrame, int]:
    """Remove every row the WHERE condition refers to.

    Returns:
        Tuple of (remaining table, rows deleted). Deleting every row keeps
        the original column schema.

    Raises:
        MissingWhereClauseError: Empty WHERE condition.
    """
    _require_where(where, "DELETE")

    doomed = set(matched_positions(df, where, matching))
    if not doomed:
        return df, 0

    keep = [i for i in range(len(df)) if i not in doomed]
    remaining = take_rows(df, keep) if keep else empty_like(df)
    return remaining, len(df) - len(remaining)


def delete_positions(df: pd.DataFrame, row_numbers: Iterable[int]) -> Tuple[pd.DataFrame, int]:
    """Remove rows by 1-based row number.

    Raises:
        InvalidRowNumberError: A number is outside ``1..len(df)``.
    """
    doomed = set()
    for number in row_numbers:
        if number < 1 or number > len(df):
            raise InvalidRowNumberError(
                f"invalid row number: {number} (valid range: 1-{len(df)})"
            )
        doomed.add(number - 1)
    if not doomed:
        raise EmptyInputError("no row numbers given")
    keep = [i for i in range(len(df)) if i not in doomed]
    remaining = take_rows(df, keep) if keep else empty_like(df)
    return remaining, len(doomed)


def truncate(df: pd.DataFrame) -> Tuple[pd.DataFrame, int]:
    """Remove all rows, keeping the column schema."""
    return empty_like(df), len(df)


__all__ = [
    "split_assignments",
    "parse_assignments",
    "build_row",
    "matched_positions",
    "insert_rows",
    "insert_from_table",
    "update_rows",
    "delete_rows",
    "delete_positions",
    "truncate",
]
