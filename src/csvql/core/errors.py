"""Error types raised by the query and mutation engine.

Every error derives from ``CsvqlError``, itself a ``ValueError``, so callers
that already guard against ``ValueError`` (bad user input) keep working.
All errors are terminal for the current operation: nothing is persisted once
one of them is raised.
"""

from __future__ import annotations

from typing import Iterable, Optional


class CsvqlError(ValueError):
    """Base class for all csvql engine errors."""


class UnknownColumnError(CsvqlError):
    """A referenced column is not part of the table."""

    def __init__(self, column: str, available: Optional[Iterable[str]] = None) -> None:
        self.column = column
        self.available = list(available) if available is not None else []
        message = f"column '{column}' does not exist in CSV"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class MalformedConditionError(CsvqlError):
    """A WHERE condition has no recognised operator or no column."""


class InvalidDirectionError(CsvqlError):
    """An ORDER BY clause uses something other than ``asc``/``desc``."""


class ColumnTypeError(CsvqlError):
    """SUM/AVG used on a column holding non-numeric values."""


class MissingWhereClauseError(CsvqlError):
    """UPDATE/DELETE attempted without a WHERE condition."""


class EmptyInputError(CsvqlError):
    """INSERT/UPDATE assignment text is empty."""


class InvalidAssignmentError(CsvqlError):
    """An assignment is not of the form ``col=value``."""


class InvalidRowNumberError(CsvqlError):
    """A 1-based row number is outside the table."""


class CodecError(CsvqlError):
    """Reading or writing the delimited-text file failed."""


__all__ = [
    "CsvqlError",
    "UnknownColumnError",
    "MalformedConditionError",
    "InvalidDirectionError",
    "ColumnTypeError",
    "MissingWhereClauseError",
    "EmptyInputError",
    "InvalidAssignmentError",
    "InvalidRowNumberError",
    "CodecError",
]
