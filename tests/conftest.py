"""Shared pytest fixtures for csvql tests."""

from pathlib import Path

import pandas as pd
import pytest

from csvql.core.table import new_table
from utils.table_helpers import PEOPLE_CSV


@pytest.fixture
def people() -> pd.DataFrame:
    """Three-row table used by most scenarios: (1,A,20), (2,B,30), (3,C,40)."""
    return new_table(["id", "name", "age"], [["1", "A", "20"], ["2", "B", "30"], ["3", "C", "40"]])


@pytest.fixture
def staff() -> pd.DataFrame:
    """Mixed table with blanks, text and duplicate rows."""
    return new_table(
        ["id", "name", "dept", "salary"],
        [
            ["1", "Ann", "eng", "100"],
            ["2", "Bob", "ops", "90"],
            ["3", "Cid", "eng", ""],
            ["4", "Dee", "ops", "9"],
            ["5", "Eve", "eng", "10"],
        ],
    )


@pytest.fixture
def people_csv(tmp_path) -> Path:
    """The people table written to a temporary CSV file."""
    path = tmp_path / "people.csv"
    path.write_text(PEOPLE_CSV, encoding="utf-8")
    return path

