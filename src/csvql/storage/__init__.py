"""CSV reading/writing and persistence of tables."""

from .codec import decode, encode, read_table
from .persistence import save_table, write_text

__all__ = ["decode", "encode", "read_table", "save_table", "write_text"]
