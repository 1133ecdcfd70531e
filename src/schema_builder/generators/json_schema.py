"""JSON Schema generation from model descriptors."""

import logging
from functools import cached_property
from typing import Any, Iterable, Optional

from .. import inflector
from ..adapters import AssociationMetadataAdapter, ColumnMetadataAdapter
from ..base.models import AssociationKind, ModelDescriptor, RouteDescriptor, SchemaDocument
from ..config import SKIPPED_ASSOCIATIONS
from ..links import LinkIndex, LinkIndexBuilder

logger = logging.getLogger(__name__)


class SchemaAssembler:
    """Assembles the schema document for a single model."""

    def __init__(
        self,
        column_adapter: Optional[ColumnMetadataAdapter] = None,
        association_adapter: Optional[AssociationMetadataAdapter] = None,
    ):
        self.column_adapter = column_adapter or ColumnMetadataAdapter()
        self.association_adapter = association_adapter or AssociationMetadataAdapter()

    def assemble(self, model: ModelDescriptor, link_index: LinkIndex) -> SchemaDocument:
        links = link_index.get(model.plural_table_name)
        return SchemaDocument(
            title=model.name,
            description=inflector.titleize(model.name),
            properties=self._properties(model),
            links=tuple(links or ()),
        )

    def _properties(self, model: ModelDescriptor) -> dict[str, dict[str, Any]]:
        props: dict[str, dict[str, Any]] = {}
        consumed: set[str] = set()

        for column in model.columns:
            assoc = self.association_adapter.foreign_key_association(model, column)
            if assoc is None:
                props[column.name] = self.column_adapter.adapt(column)
                continue
            consumed.add(assoc.name)
            if assoc.name in SKIPPED_ASSOCIATIONS:
                continue
            props[assoc.name] = self.association_adapter.adapt(model, assoc)

        for assoc in model.associations:
            if assoc.name in consumed or assoc.name in SKIPPED_ASSOCIATIONS:
                continue
            # belongs-to only surfaces through its foreign key column
            if assoc.kind == AssociationKind.BELONGS_TO:
                continue
            if assoc.name in props:
                logger.debug(f"{model.name}: association {assoc.name} shadowed by a column")
                continue
            prop = self.association_adapter.adapt(model, assoc)
            if prop is not None:
                props[assoc.name] = prop
        return props


class ModelSchemaGenerator:
    """Generates schema documents for models, sharing one link index per run."""

    def __init__(
        self,
        routes: Iterable[RouteDescriptor] = (),
        assembler: Optional[SchemaAssembler] = None,
        link_builder: Optional[LinkIndexBuilder] = None,
    ):
        self.routes = tuple(routes)
        self.assembler = assembler or SchemaAssembler()
        self.link_builder = link_builder or LinkIndexBuilder()

    @cached_property
    def link_index(self) -> LinkIndex:
        """Link index of the route snapshot, built on first access."""
        return self.link_builder.build(self.routes)

    def generate_one(
        self, model: ModelDescriptor, link_index: Optional[LinkIndex] = None
    ) -> SchemaDocument:
        if link_index is None:
            link_index = self.link_index
        return self.assembler.assemble(model, link_index)

    def generate_all(
        self, models: Iterable[ModelDescriptor], link_index: Optional[LinkIndex] = None
    ) -> list[SchemaDocument]:
        documents = [self.generate_one(model, link_index) for model in models]
        logger.info(f"Generated {len(documents)} schema documents")
        return documents


def render_schema(model: ModelDescriptor, routes: Iterable[RouteDescriptor] = ()) -> str:
    """Render one model's schema as a JSON string."""
    return ModelSchemaGenerator(routes).generate_one(model).to_json()
