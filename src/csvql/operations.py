"""Query and mutation entry points over one CSV file.

A ``CsvFile`` loads its table once. Reads run
WHERE → ORDER BY → projection → DISTINCT → LIMIT and return a result model.
Writes build a new table, persist it atomically and only then adopt it as
the current table; a failed write leaves both the file and the loaded table
untouched.

Usage:
    >>> csv_file = CsvFile.load(Path("people.csv"))
    >>> result = csv_file.select("name,age", where="age > 30", order_by="age desc", limit=5)
    >>> csv_file.update("status='inactive'", where="age >= 65").summary()
    'Successfully updated 2 rows in people.csv'

The class is not safe for concurrent use; hosts embedding it must serialize
operations per file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from csvql.config import Settings
from csvql.core.aggregate import aggregate, parse_aggregations
from csvql.core.condition import evaluate
from csvql.core.mutation import (
    delete_positions,
    delete_rows,
    insert_from_table,
    insert_rows,
    truncate,
    update_rows,
)
from csvql.core.table import validate_columns
from csvql.core.transform import distinct, limit, parse_select_list, project, sort
from csvql.models import AggregateResult, MutationResult, QueryResult
from csvql.storage.codec import read_table
from csvql.storage.persistence import save_table


logger = logging.getLogger(__name__)


def run_select(
    df: pd.DataFrame,
    select: str = "",
    *,
    where: str = "",
    order_by: str = "",
    limit_rows: int = 0,
) -> Union[QueryResult, AggregateResult]:
    """Run a read query against an in-memory table.

    Args:
        df: Source table.
        select: Comma-separated columns, ``*``/empty for all, optionally led
            by ``DISTINCT``; or aggregate calls such as ``COUNT(*), AVG(age)``.
        where: Single ``<column> <op> <literal>`` condition.
        order_by: ``<column> [asc|desc]``.
        limit_rows: Maximum rows to return; non-positive means no limit.

    Returns:
        AggregateResult when the select list holds aggregates, else QueryResult.
    """
    specs, is_aggregation = parse_aggregations(select, list(df.columns))
    if is_aggregation:
        return AggregateResult(aggregate(df, specs, where))

    columns, want_distinct = parse_select_list(select, df)
    validate_columns(df, columns)

    out = evaluate(df, where)
    out = sort(out, order_by)
    out = project(out, columns)
    if want_distinct:
        out = distinct(out)
    out = limit(out, limit_rows)
    logger.debug("SELECT returned %d of %d rows", len(out), len(df))
    return QueryResult(table=out, source_rows=len(df))


class CsvFile:
    """A CSV file loaded into memory, with SQL-like operations over it."""

    def __init__(self, path: Path, table: pd.DataFrame, settings: Optional[Settings] = None) -> None:
        self.path = Path(path)
        self.table = table
        self.settings = settings or Settings()

    @classmethod
    def load(cls, path: Path, settings: Optional[Settings] = None) -> "CsvFile":
        """Read ``path`` into a CsvFile.

        Raises:
            FileNotFoundError: ``path`` does not exist.
            CodecError: The file is not readable CSV.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"file does not exist: {path}")
        settings = settings or Settings()
        return cls(path, read_table(path, settings), settings)

    @property
    def columns(self) -> List[str]:
        return list(self.table.columns)

    def select(
        self, select: str = "", *, where: str = "", order_by: str = "", limit: int = 0
    ) -> Union[QueryResult, AggregateResult]:
        return run_select(self.table, select, where=where, order_by=order_by, limit_rows=limit)

    def _commit(self, operation: str, new_table: pd.DataFrame, rows_affected: int) -> MutationResult:
        if rows_affected == 0:
            logger.info("%s matched no rows in %s; file left unchanged", operation, self.path)
            return MutationResult(operation, 0, self.path, persisted=False, table=self.table)
        save_table(new_table, self.path, self.settings)
        self.table = new_table
        logger.debug("%s persisted %d affected rows to %s", operation, rows_affected, self.path)
        return MutationResult(operation, rows_affected, self.path, persisted=True, table=new_table)

    def insert(self, assignments: Union[str, Iterable[str]]) -> MutationResult:
        """Append rows from ``col=value`` assignment strings (one per row)."""
        if isinstance(assignments, str):
            assignments = [assignments]
        new_table, count = insert_rows(self.table, assignments)
        return self._commit("INSERT", new_table, count)

    def insert_from(self, source_path: Path) -> MutationResult:
        """Append every row of another CSV whose columns exist in this one."""
        source = CsvFile.load(source_path, self.settings).table
        new_table, count = insert_from_table(self.table, source)
        return self._commit("INSERT", new_table, count)

    def update(self, assignments: str, where: str) -> MutationResult:
        new_table, count = update_rows(
            self.table, assignments, where, self.settings.row_matching
        )
        return self._commit("UPDATE", new_table, count)

    def delete(self, where: str) -> MutationResult:
        new_table, count = delete_rows(self.table, where, self.settings.row_matching)
        return self._commit("DELETE", new_table, count)

    def delete_rows(self, row_numbers: Iterable[int]) -> MutationResult:
        """Delete rows by 1-based row number."""
        new_table, count = delete_positions(self.table, row_numbers)
        return self._commit("DELETE", new_table, count)

    def truncate(self) -> MutationResult:
        """Delete every row, keeping the header."""
        new_table, count = truncate(self.table)
        return self._commit("DELETE", new_table, count)


__all__ = ["run_select", "CsvFile"]
