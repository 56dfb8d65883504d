"""Core query engine public API.

Tables are pandas DataFrames of text cells. This package holds condition
evaluation, projection/sort/limit/distinct, aggregation and the mutation
engine; file I/O lives in ``csvql.storage``.
"""

from .aggregate import AggregateSpec, aggregate, parse_aggregations
from .condition import Condition, evaluate, matching_positions, parse_condition
from .enums import AggregateFunction, ComparisonOperator, RowMatching, SortDirection
from .mutation import (
    delete_positions,
    delete_rows,
    insert_from_table,
    insert_rows,
    parse_assignments,
    truncate,
    update_rows,
)
from .table import new_table, row_signatures
from .transform import distinct, limit, parse_select_list, project, sort

__all__ = [
    "AggregateSpec",
    "aggregate",
    "parse_aggregations",
    "Condition",
    "evaluate",
    "matching_positions",
    "parse_condition",
    "AggregateFunction",
    "ComparisonOperator",
    "RowMatching",
    "SortDirection",
    "delete_positions",
    "delete_rows",
    "insert_from_table",
    "insert_rows",
    "parse_assignments",
    "truncate",
    "update_rows",
    "new_table",
    "row_signatures",
    "distinct",
    "limit",
    "parse_select_list",
    "project",
    "sort",
]
