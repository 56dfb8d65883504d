"""Aggregation engine: COUNT / SUM / AVG / MIN / MAX over one column.

Aggregates are computed on the table after the WHERE condition is applied.
Whether a column is numeric is decided from its contents: a column is
numeric-typed when every non-blank cell of the full table parses as a number.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from .condition import evaluate
from .enums import AggregateFunction
from .errors import ColumnTypeError, UnknownColumnError
from .table import column_values, is_blank, is_numeric, parse_number, validate_columns


logger = logging.getLogger(__name__)

_AGGREGATE_RE = re.compile(
    r"^(?P<fn>COUNT|SUM|AVG|MIN|MAX)\s*\((?P<arg>.*)\)$",
    flags=re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class AggregateSpec:
    """One aggregate in a select list.

    Attributes:
        function: Aggregate function.
        column: Column the function reads. ``COUNT(*)`` binds to the first column.
        alias: Display label, e.g. ``SUM(salary)``.
    """

    function: AggregateFunction
    column: str
    alias: str


def parse_aggregations(select_text: str, columns: List[str]) -> Tuple[List[AggregateSpec], bool]:
    """Find aggregate calls in a comma-separated select list.

    Returns the parsed specs and whether any aggregate was present. Plain
    column names mixed with aggregates are ignored.
    """
    if not select_text or not select_text.strip():
        return [], False

    specs: List[AggregateSpec] = []
    ignored: List[str] = []
    for part in select_text.split(","):
        item = part.strip()
        match = _AGGREGATE_RE.match(item)
        if not match:
            if item:
                ignored.append(item)
            continue
        fn = AggregateFunction(match.group("fn").upper())
        column = match.group("arg").strip()
        if fn == AggregateFunction.COUNT and column == "*":
            if not columns:
                raise UnknownColumnError("*", columns)
            column = columns[0]
        specs.append(AggregateSpec(function=fn, column=column, alias=f"{fn.value}({column})"))

    if specs and ignored:
        logger.warning("Ignoring non-aggregate columns in aggregate query: %s", ", ".join(ignored))
    return specs, bool(specs)


def is_numeric_column(values: List[str]) -> bool:
    """True when every non-blank value parses as a number."""
    return all(is_numeric(v) for v in values if not is_blank(v))


def _numbers(values: List[str]) -> List[float]:
    out: List[float] = []
    for v in values:
        number = parse_number(v)
        if number is not None:
            out.append(number)
    return out


def _extreme(values: List[str], numeric: bool, *, want_max: bool) -> Optional[Any]:
    if not values:
        return None
    if numeric:
        numbers = _numbers(values)
        if not numbers:
            return None
        best = numbers[0]
        for n in numbers[1:]:
            if (n > best) if want_max else (n < best):
                best = n
        return best
    best_text = values[0]
    for v in values[1:]:
        if (v > best_text) if want_max else (v < best_text):
            best_text = v
    return best_text


def calculate(
    filtered: pd.DataFrame, spec: AggregateSpec, *, numeric: bool
) -> Optional[Any]:
    """Compute one aggregate over an already-filtered table.

    Args:
        filtered: Table after WHERE.
        spec: Aggregate to compute.
        numeric: Whether the column is numeric-typed in the full table.

    Raises:
        ColumnTypeError: SUM/AVG on a column that is not numeric-typed.
    """
    if spec.function == AggregateFunction.COUNT:
        return len(filtered)

    values = column_values(filtered, spec.column)
    if spec.function in (AggregateFunction.SUM, AggregateFunction.AVG):
        if not numeric:
            raise ColumnTypeError(
                f"{spec.function.value} requires numeric column, '{spec.column}' holds text values"
            )
        numbers = _numbers(values)
        if spec.function == AggregateFunction.SUM:
            return float(sum(numbers))
        if not numbers:
            return 0.0
        return sum(numbers) / len(numbers)

    if spec.function == AggregateFunction.MIN:
        return _extreme(values, numeric, want_max=False)
    if spec.function == AggregateFunction.MAX:
        return _extreme(values, numeric, want_max=True)
    raise ValueError(f"Unsupported aggregation function: {spec.function}")


def aggregate(
    df: pd.DataFrame, specs: List[AggregateSpec], where: str = ""
) -> Dict[str, Optional[Any]]:
    """Apply WHERE then compute each aggregate, keyed by alias in select-list order.

    Raises:
        UnknownColumnError: An aggregate names a missing column (first one aborts).
        ColumnTypeError: SUM/AVG over a non-numeric column.
        MalformedConditionError: The WHERE condition cannot be parsed.
    """
    filtered = evaluate(df, where)
    results: Dict[str, Optional[Any]] = {}
    for spec in specs:
        validate_columns(df, [spec.column])
        numeric = is_numeric_column(column_values(df, spec.column))
        results[spec.alias] = calculate(filtered, spec, numeric=numeric)
    logger.debug("Computed %d aggregates over %d rows", len(results), len(filtered))
    return results


__all__ = [
    "AggregateSpec",
    "parse_aggregations",
    "is_numeric_column",
    "calculate",
    "aggregate",
]
