"""Schema generators."""

from .json_schema import ModelSchemaGenerator, SchemaAssembler, render_schema
from .writer import PersistReport, SchemaFilePersister

__all__ = [
    "ModelSchemaGenerator",
    "PersistReport",
    "SchemaAssembler",
    "SchemaFilePersister",
    "render_schema",
]
