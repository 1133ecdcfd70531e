"""Base classes and shared interfaces."""

from .models import (
    SCHEMA_DRAFT,
    schema_template,
    AssociationDescriptor,
    AssociationKind,
    ColumnDescriptor,
    DataType,
    LinkDescriptor,
    ModelDescriptor,
    RouteDescriptor,
    SchemaDocument,
)
from .source import BaseModelSource

__all__ = [
    "BaseModelSource",
    "SCHEMA_DRAFT",
    "AssociationDescriptor",
    "AssociationKind",
    "ColumnDescriptor",
    "DataType",
    "LinkDescriptor",
    "ModelDescriptor",
    "RouteDescriptor",
    "SchemaDocument",
    "schema_template",
]
