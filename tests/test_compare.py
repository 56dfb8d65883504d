"""Tests for numeric/text comparison in csvql.core.compare."""

import pytest

from csvql.core.compare import compare_values, satisfies, sort_positions
from csvql.core.enums import ComparisonOperator


@pytest.mark.parametrize(
    "left,right,expected",
    [
        ("9", "10", -1),
        ("10", "9", 1),
        ("2.0", "2", 0),
        ("abc", "abd", -1),
        ("9", "10x", 1),
        ("", "5", -1),
        ("b", "B", 1),
        ("1_000", "999", -1),
    ],
    ids=[
        "numeric-lt", "numeric-gt", "numeric-eq", "text", "mixed-is-text", "blank-is-text", "case",
        "underscore-is-text",
    ],
)
def test_compare_values(left, right, expected):
    assert compare_values(left, right) == expected


def test_compare_values_is_antisymmetric():
    pairs = [("9", "10"), ("a", "b"), ("1", "x"), ("", "")]
    for a, b in pairs:
        assert compare_values(a, b) == -compare_values(b, a)


@pytest.mark.parametrize(
    "cell,op,literal,expected",
    [
        ("30", ComparisonOperator.GT, "25", True),
        ("20", ComparisonOperator.GT, "25", False),
        ("30", ComparisonOperator.GE, "30", True),
        ("30", ComparisonOperator.LE, "30", True),
        ("9", ComparisonOperator.LT, "10", True),
        ("B", ComparisonOperator.EQ, "B", True),
        ("B", ComparisonOperator.NE, "B", False),
        ("30.0", ComparisonOperator.EQ, "30", False),
    ],
)
def test_satisfies(cell, op, literal, expected):
    assert satisfies(cell, op, literal) is expected


def test_sort_positions_numeric_order():
    assert sort_positions(["10", "9", "100"]) == [1, 0, 2]


def test_sort_positions_descending_is_stable():
    values = ["1", "2", "1", "2"]
    assert sort_positions(values, descending=True) == [1, 3, 0, 2]
    assert sort_positions(values) == [0, 2, 1, 3]
