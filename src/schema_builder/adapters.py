"""Translate column and association metadata into JSON Schema properties."""

import logging
from typing import Any, Optional

from . import inflector
from .base.models import (
    AssociationDescriptor,
    AssociationKind,
    ColumnDescriptor,
    DataType,
    ModelDescriptor,
)
from .config import READONLY_FIELDS

logger = logging.getLogger(__name__)

# DataType -> (JSON Schema type, format)
TYPE_MAP: dict[DataType, tuple[str, Optional[str]]] = {
    DataType.STRING: ("string", None),
    DataType.TEXT: ("string", None),
    DataType.DATE: ("string", "date"),
    DataType.DATETIME: ("string", "date-time"),
    DataType.DECIMAL: ("number", None),
    DataType.INTEGER: ("integer", None),
    DataType.FLOAT: ("float", None),
    DataType.BOOLEAN: ("boolean", None),
    DataType.BINARY: ("binary", None),
    DataType.OTHER: ("other", None),
}


def json_type(data_type: str) -> tuple[str, Optional[str]]:
    """Map a raw column type to its JSON Schema type and format.

    Unrecognized types pass through as their lowercase name without a format.
    """
    try:
        return TYPE_MAP[DataType(data_type)]
    except ValueError:
        return data_type.lower(), None


class ColumnMetadataAdapter:
    """Converts column descriptors into property descriptors."""

    def __init__(self, readonly_fields: tuple[str, ...] = READONLY_FIELDS):
        self.readonly_fields = readonly_fields

    def adapt(self, column: ColumnDescriptor) -> dict[str, Any]:
        prop: dict[str, Any] = {"description": inflector.titleize(column.name)}
        if column.is_primary_key:
            prop["identity"] = True
        if column.name in self.readonly_fields:
            prop["readonly"] = True

        type_name, fmt = json_type(column.data_type)
        prop["type"] = type_name
        if fmt:
            prop["format"] = fmt

        if column.default_value is not None:
            prop["default"] = column.default_value
        if column.data_type == DataType.STRING.value and column.max_length:
            prop["maxlength"] = column.max_length
        return prop


class AssociationMetadataAdapter:
    """Converts association descriptors into reference properties."""

    def reference(self, model: ModelDescriptor, association: AssociationDescriptor) -> str:
        """Get the ``$ref`` pointing at the associated resource's schema."""
        return f"/{model.namespace_prefix}{association.target_plural_name}/new.schema#"

    def foreign_key_association(
        self, model: ModelDescriptor, column: ColumnDescriptor
    ) -> Optional[AssociationDescriptor]:
        """Get the belongs-to association a ``<name>_id`` column stands for."""
        if not column.name.endswith("_id"):
            return None
        assoc = model.association(column.name[: -len("_id")])
        if assoc is None or assoc.kind != AssociationKind.BELONGS_TO:
            return None
        return assoc

    def adapt(
        self, model: ModelDescriptor, association: AssociationDescriptor
    ) -> Optional[dict[str, Any]]:
        ref = {"$ref": self.reference(model, association)}
        if association.kind == AssociationKind.BELONGS_TO:
            return ref
        if association.kind == AssociationKind.HAS_MANY:
            return {
                "type": "array",
                "format": "table",
                "title": inflector.camelize(association.name),
                "uniqueItems": True,
                "items": ref,
            }
        logger.debug(f"Unsupported association kind {association.kind} on {model.name}")
        return None
