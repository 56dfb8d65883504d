"""Dual numeric/text comparison.

There is no schema: whether two cells compare as numbers or as text is
decided per comparison. When both operands parse as numbers they are ordered
numerically (so "9" < "10"); otherwise they are ordered as plain strings.
WHERE, ORDER BY and MIN/MAX all go through ``compare_values``.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, List, Sequence

from .enums import ComparisonOperator
from .table import parse_number


def compare_values(left: str, right: str) -> int:
    """Three-way comparison: negative, zero or positive."""
    left_num = parse_number(left)
    right_num = parse_number(right)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)
    left_text, right_text = str(left), str(right)
    return (left_text > right_text) - (left_text < right_text)


def satisfies(cell: str, operator: ComparisonOperator, literal: str) -> bool:
    """Apply ``cell <operator> literal``.

    Equality operators compare text exactly; ordering operators use
    ``compare_values``.
    """
    if operator == ComparisonOperator.EQ:
        return str(cell) == literal
    if operator == ComparisonOperator.NE:
        return str(cell) != literal

    result = compare_values(cell, literal)
    if operator == ComparisonOperator.GT:
        return result > 0
    if operator == ComparisonOperator.LT:
        return result < 0
    if operator == ComparisonOperator.GE:
        return result >= 0
    if operator == ComparisonOperator.LE:
        return result <= 0
    raise ValueError(f"Unsupported operator: {operator}")


def sort_positions(values: Sequence[str], *, descending: bool = False) -> List[int]:
    """Return row positions ordering ``values``; ties keep their original order."""
    key: Callable = cmp_to_key(lambda i, j: compare_values(values[i], values[j]))
    return sorted(range(len(values)), key=key, reverse=descending)


__all__ = ["compare_values", "satisfies", "sort_positions"]
