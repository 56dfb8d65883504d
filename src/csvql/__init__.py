"""csvql: SQL-like queries and mutations over a single CSV file.

The package loads one delimited-text file into an in-memory table, runs a
small query language over it (WHERE / ORDER BY / LIMIT / DISTINCT and
aggregates) and, for INSERT / UPDATE / DELETE, rewrites the whole file.
"""

__all__ = [
    "__version__",
]

__version__ = "0.3.0"
