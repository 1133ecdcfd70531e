"""SQLite model source."""

from .connection import SQLiteConnection
from .source import SQLiteModelSource

__all__ = [
    "SQLiteConnection",
    "SQLiteModelSource",
]
