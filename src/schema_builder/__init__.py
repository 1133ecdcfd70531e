"""Schema Builder - derive JSON Schema documents from model and route metadata."""

from .config import SUPPORTED_SOURCES, BuilderConfig
from .generators import ModelSchemaGenerator, SchemaFilePersister, render_schema

__version__ = "0.1.0"

__all__ = [
    "BuilderConfig",
    "ModelSchemaGenerator",
    "SchemaFilePersister",
    "SUPPORTED_SOURCES",
    "__version__",
    "render_schema",
]
