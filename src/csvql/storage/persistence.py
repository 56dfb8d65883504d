"""Write tables back to disk.

Files are written to a sibling ``.part`` file first and then moved over the
target, so a failed write never leaves a truncated source file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from csvql.config import Settings
from csvql.core.errors import CodecError
from .codec import encode


logger = logging.getLogger(__name__)


def write_text(text: str, path: Path, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``text`` in one step.

    Raises:
        CodecError: The file could not be written or the text not encoded.
    """
    path = Path(path)
    tmp_path = path.with_suffix(path.suffix + ".part")
    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
        tmp_path.replace(path)
    except (OSError, UnicodeEncodeError) as e:
        tmp_path.unlink(missing_ok=True)
        raise CodecError(f"failed to save CSV {path}: {e}") from e


def save_table(
    df: pd.DataFrame,
    path: Path,
    settings: Optional[Settings] = None,
    *,
    include_header: bool = True,
) -> None:
    """Encode ``df`` and write it to ``path``."""
    settings = settings or Settings()
    write_text(encode(df, include_header, settings), path, settings.write_encoding)
    logger.debug("Saved %d rows to %s", len(df), path)


__all__ = ["write_text", "save_table"]
