"""Model discovery by introspecting a SQLite database."""

import logging
import re
from typing import Any, Optional

from ... import inflector
from ...base import BaseModelSource
from ...base.models import (
    AssociationDescriptor,
    AssociationKind,
    ColumnDescriptor,
    DataType,
    ModelDescriptor,
)
from .connection import SQLiteConnection

logger = logging.getLogger(__name__)

# Checked in order, first substring match wins
DECLARED_TYPES = [
    ("DATETIME", DataType.DATETIME),
    ("TIMESTAMP", DataType.DATETIME),
    ("DATE", DataType.DATE),
    ("BOOL", DataType.BOOLEAN),
    ("INT", DataType.INTEGER),
    ("CHAR", DataType.STRING),
    ("CLOB", DataType.TEXT),
    ("TEXT", DataType.TEXT),
    ("BLOB", DataType.BINARY),
    ("BINARY", DataType.BINARY),
    ("REAL", DataType.FLOAT),
    ("FLOA", DataType.FLOAT),
    ("DOUB", DataType.FLOAT),
    ("DECIMAL", DataType.DECIMAL),
    ("NUMERIC", DataType.DECIMAL),
]


def parse_declared_type(declared: Optional[str]) -> tuple[str, Optional[int]]:
    """Map a declared column type like ``VARCHAR(255)`` to (data type, max length)."""
    declared = declared.upper() if declared else "TEXT"
    max_length = None

    match = re.match(r"([\w ]+?)\s*\((\d+)(?:,\s*(\d+))?\)", declared)
    if match:
        declared = match.group(1)
        if not match.group(3):
            max_length = int(match.group(2))

    for fragment, data_type in DECLARED_TYPES:
        if fragment in declared:
            return data_type.value, max_length
    return declared.lower(), max_length


def parse_default(raw: Optional[str], data_type: str) -> Any:
    """Convert a SQL default expression into a JSON value."""
    if raw is None or raw.upper() == "NULL":
        return None
    if len(raw) >= 2 and raw[0] == raw[-1] and raw[0] in "'\"":
        return raw[1:-1].replace("''", "'")
    if data_type == DataType.BOOLEAN.value and raw.upper() in ("0", "1", "TRUE", "FALSE"):
        return raw.upper() in ("1", "TRUE")
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


class SQLiteModelSource(BaseModelSource):
    """Derives model descriptors from the tables of a SQLite database."""

    def extract(self) -> list[ModelDescriptor]:
        """Extract one model per table with its columns and associations."""
        with SQLiteConnection(self.config.resolved_database_path) as conn:
            tables = self._get_tables(conn)
            logger.info(f"Found {len(tables)} tables")

            columns = {table: self._get_columns(conn, table) for table in tables}
            foreign_keys = {table: self._get_foreign_keys(conn, table) for table in tables}

        return [
            ModelDescriptor(
                name=inflector.classify(table),
                columns=columns[table],
                associations=self._get_associations(table, foreign_keys),
                table_name=table,
            )
            for table in tables
        ]

    def _get_tables(self, conn: SQLiteConnection) -> list[str]:
        """Get list of all tables."""
        query = """
            SELECT name AS table_name
            FROM sqlite_master
            WHERE type = 'table'
            AND name NOT LIKE 'sqlite_%'
            ORDER BY name
        """
        return [row["table_name"] for row in conn.execute_dict(query)]

    def _get_columns(self, conn: SQLiteConnection, table_name: str) -> list[ColumnDescriptor]:
        """Get columns for a table, in declaration order."""
        rows = conn.execute_dict(f"PRAGMA table_info('{table_name}')")
        columns = []
        for row in sorted(rows, key=lambda r: r["cid"]):
            data_type, max_length = parse_declared_type(row["type"])
            columns.append(
                ColumnDescriptor(
                    name=row["name"],
                    data_type=data_type,
                    is_primary_key=row["pk"] > 0,
                    default_value=parse_default(row["dflt_value"], data_type),
                    max_length=max_length,
                )
            )
        return columns

    def _get_foreign_keys(self, conn: SQLiteConnection, table_name: str) -> list[tuple[str, str]]:
        """Get (column, referenced table) pairs for a table."""
        rows = conn.execute_dict(f"PRAGMA foreign_key_list('{table_name}')")
        return [(row["from"], row["table"]) for row in rows]

    def _get_associations(
        self, table_name: str, foreign_keys: dict[str, list[tuple[str, str]]]
    ) -> list[AssociationDescriptor]:
        """Build belongs-to from outbound and has-many from inbound foreign keys."""
        associations: dict[str, AssociationDescriptor] = {}

        for column, referenced in foreign_keys[table_name]:
            if not column.endswith("_id"):
                logger.debug(f"{table_name}.{column}: foreign key without _id suffix, skipped")
                continue
            name = column[: -len("_id")]
            associations.setdefault(
                name, AssociationDescriptor(name, AssociationKind.BELONGS_TO, referenced)
            )

        for other, keys in foreign_keys.items():
            if any(referenced == table_name for _, referenced in keys):
                associations.setdefault(
                    other, AssociationDescriptor(other, AssociationKind.HAS_MANY, other)
                )

        return list(associations.values())
