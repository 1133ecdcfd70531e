"""SQLite database connection."""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional

from ...exceptions import MetadataUnavailableError

logger = logging.getLogger(__name__)


class SQLiteConnection:
    """Read-only SQLite connection using sqlite3."""

    def __init__(self, database_path: Path):
        self.database_path = Path(database_path)
        self._connection: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """Establish database connection."""
        if not self.database_path.exists():
            raise MetadataUnavailableError(f"Database not found: {self.database_path}")
        try:
            logger.debug(f"Connecting to SQLite: {self.database_path}")
            self._connection = sqlite3.connect(f"{self.database_path.resolve().as_uri()}?mode=ro", uri=True)
            self._connection.row_factory = sqlite3.Row
            logger.info(f"Connected to {self.database_path}")
        except sqlite3.Error as e:
            raise MetadataUnavailableError(f"Failed to connect to database: {e}") from e

    def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from database")

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the active connection."""
        if not self._connection:
            raise MetadataUnavailableError("Not connected to database")
        return self._connection

    def execute_dict(self, query: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and return results as dictionaries."""
        cursor = self.connection.cursor()
        try:
            cursor.execute(query, params)
            columns = [description[0] for description in cursor.description] if cursor.description else []
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise MetadataUnavailableError(f"Query failed: {e}") from e
        finally:
            cursor.close()

    def __enter__(self) -> "SQLiteConnection":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()
