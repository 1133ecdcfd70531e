"""Dataclasses for model, route and schema metadata."""

import copy
import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .. import inflector

SCHEMA_DRAFT = "http://json-schema.org/draft-04/schema#"


def schema_template() -> dict[str, Any]:
    """Get the base JSON Schema object every document starts from."""
    return {
        "$schema": SCHEMA_DRAFT,
        "type": "object",
        "title": "",
        "description": "object",
        "properties": {},
        "links": [],
    }


class DataType(str, Enum):
    """Column data types recognized by the schema mapping."""

    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    BINARY = "binary"
    OTHER = "other"


class AssociationKind(str, Enum):
    """Kinds of relationship between two models."""

    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"


@dataclass(frozen=True)
class ColumnDescriptor:
    """Represents a model column."""

    name: str
    data_type: str
    is_primary_key: bool = False
    default_value: Optional[Any] = None
    max_length: Optional[int] = None

    def __post_init__(self) -> None:
        # Accept DataType members as well as raw type names
        raw = self.data_type.value if isinstance(self.data_type, DataType) else str(self.data_type)
        object.__setattr__(self, "data_type", raw.lower())


@dataclass(frozen=True)
class AssociationDescriptor:
    """Represents a declared relationship to another model."""

    name: str
    kind: AssociationKind
    target_plural_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", AssociationKind(self.kind))


@dataclass(frozen=True)
class ModelDescriptor:
    """Represents one data model with its columns and associations."""

    name: str
    columns: tuple[ColumnDescriptor, ...] = ()
    associations: tuple[AssociationDescriptor, ...] = ()
    table_name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "associations", tuple(self.associations))

    @property
    def plural_table_name(self) -> str:
        """Resource name used to look up links, e.g. ``admin/blog_posts``."""
        return self.table_name or inflector.tableize(self.name)

    @property
    def namespace_prefix(self) -> str:
        """Namespace segment with trailing slash, empty for top-level models."""
        table = self.plural_table_name
        return table[: table.rfind("/") + 1]

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        return next((c for c in self.columns if c.name == name), None)

    def association(self, name: str) -> Optional[AssociationDescriptor]:
        return next((a for a in self.associations if a.name == name), None)


@dataclass(frozen=True)
class RouteDescriptor:
    """Represents one entry of the application's route table."""

    controller: Optional[str] = None
    action: Optional[Union[str, tuple[str, ...]]] = None
    verb: Optional[str] = None
    path: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.action, list):
            object.__setattr__(self, "action", tuple(self.action))

    @property
    def requirements(self) -> dict[str, Any]:
        """Controller/action constraints that are actually set."""
        reqs = {"controller": self.controller, "action": self.action}
        return {key: value for key, value in reqs.items() if value}


@dataclass(frozen=True)
class LinkDescriptor:
    """Represents one hypermedia link of a resource."""

    rel: Optional[str]
    method: Optional[str]
    href: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"rel": self.rel, "method": self.method, "href": self.href}


@dataclass(frozen=True)
class SchemaDocument:
    """Represents the JSON Schema generated for one model."""

    title: str
    description: str
    properties: Mapping[str, dict[str, Any]] = field(default_factory=dict)
    links: tuple[LinkDescriptor, ...] = ()

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        properties = copy.deepcopy(dict(self.properties))
        object.__setattr__(self, "properties", MappingProxyType(properties))
        object.__setattr__(self, "links", tuple(self.links))

    def to_dict(self) -> dict[str, Any]:
        """Get the document as a JSON-ready dict with stable key order.

        The result is a copy; changing it leaves the document untouched.
        """
        doc = schema_template()
        doc["title"] = self.title
        doc["description"] = self.description
        doc["properties"] = copy.deepcopy(dict(self.properties))
        if self.links:
            doc["links"] = [link.to_dict() for link in self.links]
        else:
            del doc["links"]
        return doc

    def to_json(self) -> str:
        """Get the document pretty printed."""
        return json.dumps(self.to_dict(), indent=2)
