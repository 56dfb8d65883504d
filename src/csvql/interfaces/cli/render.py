"""Text rendering of query results for the terminal.

Two modes:
- formatted: header row, a ``-+-`` rule, fixed-width columns joined by
  `` | `` and a ``(N rows)`` footer
- raw: bare comma-joined values, no header, footer or empty-result notice
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from csvql.models import QueryResult

NO_ROWS_MESSAGE = "No rows to display."
ALIAS_WIDTH = 20


def format_value(value: Optional[Any], null_display: str = "NULL") -> str:
    """Format an aggregate value.

    Floats with no fractional part print without decimals, other floats with
    two decimals.

    Examples:
        >>> format_value(90.0)
        '90'
        >>> format_value(28.333)
        '28.33'
    """
    if value is None:
        return null_display
    if isinstance(value, float):
        if value.is_integer():
            return f"{value:.0f}"
        return f"{value:.2f}"
    return str(value)


def render_table(df: pd.DataFrame, *, raw: bool = False, column_width: int = 15) -> List[str]:
    """Lines for a table; an empty table yields the no-rows notice (or nothing in raw mode)."""
    if df.empty:
        return [] if raw else [NO_ROWS_MESSAGE]

    rows = [[str(v) for v in row] for row in df.itertuples(index=False, name=None)]
    if raw:
        return [",".join(row) for row in rows]

    def _line(cells: List[str]) -> str:
        return " | ".join(f"{c:<{column_width}}" for c in cells).rstrip()

    lines = [_line([str(c) for c in df.columns])]
    lines.append("-+-".join("-" * column_width for _ in df.columns))
    lines.extend(_line(row) for row in rows)
    return lines


def render_query_result(result: QueryResult, *, raw: bool = False, column_width: int = 15) -> str:
    lines = render_table(result.table, raw=raw, column_width=column_width)
    if not raw:
        lines.extend(["", f"({result.row_count} rows)"])
    return "\n".join(lines)


def render_aggregates(
    values: Dict[str, Optional[Any]], *, raw: bool = False, null_display: str = "NULL"
) -> str:
    if raw:
        return ",".join(format_value(v, null_display) for v in values.values())
    lines = ["Aggregation Results:", "-" * 30]
    for alias, value in values.items():
        lines.append(f"{alias:<{ALIAS_WIDTH}}: {format_value(value, null_display)}")
    return "\n".join(lines)


def aggregates_as_table(values: Dict[str, Optional[Any]], null_display: str = "NULL") -> pd.DataFrame:
    """One-row table of formatted aggregate values, aliases as column names."""
    return pd.DataFrame(
        [[format_value(v, null_display) for v in values.values()]],
        columns=list(values.keys()),
        dtype=object,
    )


def render_columns(columns: List[str]) -> str:
    lines = ["Columns in CSV file:"]
    lines.extend(f"{i}: {name}" for i, name in enumerate(columns, start=1))
    return "\n".join(lines)


__all__ = [
    "NO_ROWS_MESSAGE",
    "format_value",
    "render_table",
    "render_query_result",
    "render_aggregates",
    "aggregates_as_table",
    "render_columns",
]
