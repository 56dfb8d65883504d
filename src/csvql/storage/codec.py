"""Delimited-text codec backed by pandas.

``decode`` reads a CSV into a text table: column order is kept exactly as in
the header and every cell is delivered as ``str`` (empty fields become "").
A header that names the same column twice is rejected.
``encode`` turns a table back into CSV text, with or without the header row.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional, Union

import pandas as pd

from csvql.config import Settings
from csvql.core.errors import CodecError
from csvql.core.table import as_text_table


logger = logging.getLogger(__name__)

Source = Union[str, Path, IO[str]]


def decode(source: Source, settings: Optional[Settings] = None) -> pd.DataFrame:
    """Read CSV from a path or text stream into a text table.

    The header is read as an ordinary row so column names reach the table
    exactly as written; pandas would otherwise rename repeats (``tag.1``).

    Raises:
        FileNotFoundError: ``source`` is a path that does not exist.
        CodecError: The content cannot be parsed or decoded, or the header
            repeats a column name.
    """
    settings = settings or Settings()
    try:
        raw = pd.read_csv(
            source,
            sep=settings.delimiter,
            header=None,
            dtype=str,
            na_filter=False,
            keep_default_na=False,
            index_col=False,
            encoding=settings.read_encoding,
        )
    except pd.errors.EmptyDataError as e:
        raise CodecError(f"failed to read CSV: no columns found in {_describe(source)}") from e
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as e:
        raise CodecError(f"failed to read CSV {_describe(source)}: {e}") from e

    raw = as_text_table(raw)
    header = raw.iloc[0].tolist()
    duplicates = sorted({name for name in header if header.count(name) > 1})
    if duplicates:
        raise CodecError(
            f"duplicate column name in {_describe(source)}: {', '.join(duplicates)}"
        )
    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = header
    return df


def read_table(path: Path, settings: Optional[Settings] = None) -> pd.DataFrame:
    """Load the table stored at ``path``."""
    df = decode(Path(path), settings)
    logger.debug("Loaded %s: %d rows, %d columns", path, len(df), len(df.columns))
    return df


def encode(
    df: pd.DataFrame, include_header: bool = True, settings: Optional[Settings] = None
) -> str:
    """Serialize a table to CSV text.

    Args:
        df: Table to write.
        include_header: Write the column names as the first line.
        settings: Supplies the delimiter.
    """
    settings = settings or Settings()
    return df.to_csv(
        index=False,
        header=include_header,
        sep=settings.delimiter,
        lineterminator="\n",
    )


def _describe(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return "<stream>"


__all__ = ["decode", "read_table", "encode"]
