"""Operation result models.

This module defines the values returned by ``csvql.operations``:
- QueryResult: rows produced by a SELECT
- AggregateResult: alias → value mapping produced by an aggregate SELECT
- MutationResult: outcome of INSERT / UPDATE / DELETE
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd


@dataclass(frozen=True)
class QueryResult:
    """Rows returned by a SELECT.

    Attributes:
        table: Result table after WHERE, ORDER BY, projection, DISTINCT and LIMIT.
        source_rows: Row count of the table the query ran against.
    """

    table: pd.DataFrame
    source_rows: int = 0

    @property
    def row_count(self) -> int:
        return len(self.table)

    @property
    def is_empty(self) -> bool:
        return self.table.empty


@dataclass(frozen=True)
class AggregateResult:
    """Values of an aggregate SELECT, keyed by alias in select-list order.

    Examples:
        >>> AggregateResult({"COUNT(id)": 3, "AVG(age)": 30.0}).values["COUNT(id)"]
        3
    """

    values: Dict[str, Optional[Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of INSERT / UPDATE / DELETE.

    Attributes:
        operation: "INSERT", "UPDATE" or "DELETE".
        rows_affected: Rows inserted, rewritten or removed.
        path: File the table belongs to.
        persisted: True once the rebuilt table was written to ``path``.
        table: The rebuilt table (the original one when nothing matched).
    """

    operation: str
    rows_affected: int
    path: Path
    persisted: bool
    table: Optional[pd.DataFrame] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.operation not in ("INSERT", "UPDATE", "DELETE"):
            raise ValueError(
                f"Invalid operation: {self.operation}. Must be INSERT, UPDATE or DELETE."
            )
        if self.rows_affected < 0:
            raise ValueError("rows_affected cannot be negative")
        if self.persisted and self.rows_affected == 0:
            raise ValueError("persisted=True requires rows_affected > 0")

    @property
    def matched(self) -> bool:
        return self.rows_affected > 0

    def summary(self) -> str:
        """One-line, user-facing description of the outcome.

        Examples:
            >>> MutationResult("UPDATE", 2, Path("people.csv"), True).summary()
            'Successfully updated 2 rows in people.csv'
        """
        if self.operation == "INSERT":
            return f"Successfully inserted {self.rows_affected} row{_plural(self.rows_affected)} into {self.path}"
        if not self.matched:
            noun = "updates" if self.operation == "UPDATE" else "deletions"
            return f"No rows match the WHERE condition. No {noun} performed."
        verb = "updated" if self.operation == "UPDATE" else "deleted"
        preposition = "in" if self.operation == "UPDATE" else "from"
        return f"Successfully {verb} {self.rows_affected} row{_plural(self.rows_affected)} {preposition} {self.path}"


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


__all__ = ["QueryResult", "AggregateResult", "MutationResult"]
