"""Shared test data and table helpers for csvql tests."""

from typing import List

import pandas as pd


PEOPLE_CSV = "id,name,age\n1,A,20\n2,B,30\n3,C,40\n"


def table_rows(df: pd.DataFrame) -> List[List[str]]:
    """Rows of a table as lists of cell strings."""
    return [list(row) for row in df.itertuples(index=False, name=None)]
