"""Tests for table helpers in csvql.core.table."""

import pandas as pd
import pytest

from csvql.core.errors import UnknownColumnError
from csvql.core.table import (
    as_text_table,
    empty_like,
    is_blank,
    is_numeric,
    new_table,
    parse_number,
    row_signature,
    row_signatures,
    take_rows,
    unquote,
    validate_columns,
)
from utils.table_helpers import table_rows


@pytest.mark.parametrize(
    "value,expected",
    [
        ("42", 42.0),
        (" 3.5 ", 3.5),
        ("-7", -7.0),
        ("1e3", 1000.0),
        ("", None),
        ("  ", None),
        ("abc", None),
        ("nan", None),
        ("inf", None),
        ("1_000", None),
        (None, None),
    ],
    ids=[
        "int", "padded-float", "negative", "exponent", "empty", "spaces", "text", "nan", "inf",
        "underscore", "none",
    ],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_is_numeric():
    assert is_numeric("12")
    assert is_numeric(" -0.5 ")
    assert not is_numeric("1_000")
    assert not is_numeric("")
    assert not is_numeric("nan")


def test_is_blank():
    assert is_blank("")
    assert is_blank("   ")
    assert is_blank(None)
    assert not is_blank("0")


@pytest.mark.parametrize(
    "text,expected",
    [("'Ann'", "Ann"), ('"Ann"', "Ann"), ("'Ann\"", "'Ann\""), ("''", ""), ("'", "'"), ("Ann", "Ann")],
)
def test_unquote_strips_one_matching_layer(text, expected):
    assert unquote(text) == expected


def test_new_table_keeps_column_order_and_text_cells():
    df = new_table(["b", "a"], [[1, None]])
    assert list(df.columns) == ["b", "a"]
    assert table_rows(df) == [["1", ""]]


def test_new_table_rejects_ragged_rows():
    with pytest.raises(ValueError, match="expected 2"):
        new_table(["a", "b"], [["1"]])


def test_empty_like_keeps_schema(people):
    empty = empty_like(people)
    assert list(empty.columns) == ["id", "name", "age"]
    assert len(empty) == 0


def test_as_text_table_normalizes_missing_and_index():
    raw = pd.DataFrame({"x": [1, None], "y": ["a", float("nan")]}, index=[5, 9])
    df = as_text_table(raw)
    assert list(df.index) == [0, 1]
    assert df["y"].tolist() == ["a", ""]
    assert df["x"].tolist()[1] == ""


def test_take_rows_reindexes(people):
    out = take_rows(people, [2, 0])
    assert list(out.index) == [0, 1]
    assert out["name"].tolist() == ["C", "A"]


def test_take_rows_empty_positions_keep_columns(people):
    out = take_rows(people, [])
    assert len(out) == 0
    assert list(out.columns) == ["id", "name", "age"]


def test_validate_columns_reports_missing_name(people):
    validate_columns(people, ["id", "age"])
    with pytest.raises(UnknownColumnError, match="column 'salary' does not exist") as exc:
        validate_columns(people, ["id", "salary"])
    assert exc.value.column == "salary"
    assert exc.value.available == ["id", "name", "age"]


def test_row_signatures_distinguish_cell_boundaries():
    df = new_table(["a", "b"], [["x,y", "z"], ["x", "y,z"]])
    first, second = row_signatures(df)
    assert first != second
    assert first == row_signature(["x,y", "z"])
