"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ComparisonOperator(str, Enum):
    """Operators allowed in a WHERE condition.

    Values are the literal operator text so a parsed condition can be echoed
    back verbatim.
    """

    GE = ">="
    LE = "<="
    NE = "!="
    EQ = "="
    GT = ">"
    LT = "<"


# Scan order when splitting a condition. Two-character operators come first
# so ">=" is never split as ">" followed by a stray "=".
OPERATOR_SCAN_ORDER = (
    ComparisonOperator.GE,
    ComparisonOperator.LE,
    ComparisonOperator.NE,
    ComparisonOperator.EQ,
    ComparisonOperator.GT,
    ComparisonOperator.LT,
)


class AggregateFunction(str, Enum):
    """Aggregate functions recognised in a select list."""

    COUNT = "COUNT"
    SUM = "SUM"
    AVG = "AVG"
    MIN = "MIN"
    MAX = "MAX"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class RowMatching(str, Enum):
    """How UPDATE/DELETE map WHERE results back onto source rows.

    - SIGNATURE: compare whole-row content signatures (rows with identical
      content are touched together)
    - POSITION: use the row positions found by the condition evaluator
    """

    SIGNATURE = "signature"
    POSITION = "position"


__all__ = [
    "ComparisonOperator",
    "OPERATOR_SCAN_ORDER",
    "AggregateFunction",
    "SortDirection",
    "RowMatching",
]
