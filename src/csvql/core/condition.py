"""WHERE condition parsing and evaluation.

A condition is a single ``<column> <op> <literal>`` comparison. Parsing scans
the raw text for operators in the fixed order ``>=, <=, !=, =, >, <`` and
splits on the first occurrence of the first operator found.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from .compare import satisfies
from .enums import OPERATOR_SCAN_ORDER, ComparisonOperator
from .errors import MalformedConditionError
from .table import column_values, take_rows, unquote, validate_columns


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Condition:
    """Parsed WHERE condition.

    Attributes:
        column: Column name, whitespace trimmed.
        operator: Comparison operator.
        literal: Right-hand side with one layer of surrounding quotes removed.
    """

    column: str
    operator: ComparisonOperator
    literal: str

    def matches(self, cell: str) -> bool:
        return satisfies(cell, self.operator, self.literal)

    def __str__(self) -> str:
        return f"{self.column} {self.operator.value} {self.literal!r}"


def parse_condition(text: str) -> Condition:
    """Parse a raw condition such as ``"age >= 30"`` or ``"name = 'Ann'"``.

    Raises:
        MalformedConditionError: No operator found, or the column part is empty.

    Examples:
        >>> parse_condition("age>=30")
        Condition(column='age', operator=<ComparisonOperator.GE: '>='>, literal='30')
    """
    raw = (text or "").strip()
    for op in OPERATOR_SCAN_ORDER:
        if op.value in raw:
            column, literal = raw.split(op.value, 1)
            column = column.strip()
            if not column:
                raise MalformedConditionError(f"invalid WHERE condition: {raw}")
            return Condition(column=column, operator=op, literal=unquote(literal.strip()))
    raise MalformedConditionError(f"invalid WHERE condition: {raw}")


def _resolve(df: pd.DataFrame, condition_text: str) -> Optional[Condition]:
    if not condition_text or not condition_text.strip():
        return None
    condition = parse_condition(condition_text)
    validate_columns(df, [condition.column])
    return condition


def matching_positions(df: pd.DataFrame, condition_text: str) -> List[int]:
    """Positions of rows satisfying the condition, in table order.

    An empty condition matches every row.
    """
    condition = _resolve(df, condition_text)
    if condition is None:
        return list(range(len(df)))
    return [i for i, cell in enumerate(column_values(df, condition.column)) if condition.matches(cell)]


def evaluate(df: pd.DataFrame, condition_text: str) -> pd.DataFrame:
    """Filter ``df`` by a WHERE condition, preserving relative row order.

    Returns the input frame itself when the condition is empty.

    Raises:
        MalformedConditionError: The condition cannot be parsed.
        UnknownColumnError: The condition refers to a missing column.
    """
    if not condition_text or not condition_text.strip():
        return df
    positions = matching_positions(df, condition_text)
    logger.debug("WHERE %s matched %d of %d rows", condition_text.strip(), len(positions), len(df))
    return take_rows(df, positions)


__all__ = ["Condition", "parse_condition", "matching_positions", "evaluate"]
