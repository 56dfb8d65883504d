"""Runtime settings loaded from YAML.

Settings cover the CSV dialect, rendering and the row-matching strategy used
by UPDATE/DELETE. They are read from an explicit file, or from
``./csvql.yaml`` when present; otherwise the defaults below apply.

Example ``csvql.yaml``::

    delimiter: ";"
    read_encoding: utf-8-sig
    write_encoding: utf-8
    column_width: 20
    null_display: "NULL"
    row_matching: position   # or: signature
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from csvql.core.enums import RowMatching


DEFAULT_CONFIG_NAME = "csvql.yaml"

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_DELIMITER = ","
DEFAULT_READ_ENCODING = "utf-8-sig"  # tolerate a BOM written by spreadsheet tools
DEFAULT_WRITE_ENCODING = "utf-8"
DEFAULT_COLUMN_WIDTH = 15
DEFAULT_NULL_DISPLAY = "NULL"


@dataclass(frozen=True)
class Settings:
    """Effective csvql settings.

    Attributes:
        delimiter: Single-character field separator.
        read_encoding: Encoding used to decode the source file.
        write_encoding: Encoding used when the table is written back.
        column_width: Minimum rendered width of each column.
        null_display: Text shown for an aggregate with no value.
        row_matching: How UPDATE/DELETE locate rows matched by WHERE.
    """

    delimiter: str = DEFAULT_DELIMITER
    read_encoding: str = DEFAULT_READ_ENCODING
    write_encoding: str = DEFAULT_WRITE_ENCODING
    column_width: int = DEFAULT_COLUMN_WIDTH
    null_display: str = DEFAULT_NULL_DISPLAY
    row_matching: RowMatching = RowMatching.POSITION

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ValueError(f"Invalid delimiter: {self.delimiter!r}. Must be a single character.")
        if self.delimiter in ("'", '"', "\n", "\r"):
            raise ValueError(f"Invalid delimiter: {self.delimiter!r}")
        for name in ("read_encoding", "write_encoding", "null_display"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if isinstance(self.column_width, bool) or not isinstance(self.column_width, int):
            raise ValueError(f"column_width must be an integer, got {self.column_width!r}")
        if self.column_width < 1:
            raise ValueError(f"column_width must be positive, got {self.column_width}")
        try:
            object.__setattr__(self, "row_matching", RowMatching(self.row_matching))
        except ValueError:
            valid = ", ".join(m.value for m in RowMatching)
            raise ValueError(
                f"Invalid row_matching: {self.row_matching!r}. Valid values: {valid}"
            ) from None


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build Settings from a mapping, rejecting unknown keys."""
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(
            f"Unknown settings: {', '.join(unknown)}. Valid settings: {', '.join(sorted(known))}"
        )
    return replace(Settings(), **data)


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from YAML.

    Args:
        config_path: Explicit settings file. When None, ``./csvql.yaml`` is
            used if it exists.

    Returns:
        Settings with file values applied over the defaults.

    Raises:
        FileNotFoundError: An explicit ``config_path`` does not exist.
        ValueError: The file is not a mapping or holds invalid values.
        yaml.YAMLError: The file is not valid YAML.
    """
    if config_path is None:
        candidate = Path(DEFAULT_CONFIG_NAME)
        if not candidate.exists():
            return Settings()
        config_path = candidate

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping of settings")
    return settings_from_dict(data)


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "Settings",
    "settings_from_dict",
    "load_settings",
]
