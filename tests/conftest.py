"""Shared fixtures."""

import pytest
from schema_builder.base.models import (
    AssociationDescriptor,
    AssociationKind,
    ColumnDescriptor,
    ModelDescriptor,
    RouteDescriptor,
)


@pytest.fixture
def article():
    """Article model with a belongs-to author and has-many comments."""
    return ModelDescriptor(
        name="Article",
        columns=[
            ColumnDescriptor("id", "integer", is_primary_key=True),
            ColumnDescriptor("title", "string", max_length=255),
            ColumnDescriptor("author_id", "integer"),
            ColumnDescriptor("published", "boolean", default_value=False),
            ColumnDescriptor("created_at", "datetime"),
            ColumnDescriptor("updated_at", "datetime"),
        ],
        associations=[
            AssociationDescriptor("author", AssociationKind.BELONGS_TO, "authors"),
            AssociationDescriptor("comments", AssociationKind.HAS_MANY, "comments"),
        ],
    )


@pytest.fixture
def routes():
    """A small route table in declaration order."""
    return [
        RouteDescriptor("articles", "index", "^GET$", "/articles(.:format)"),
        RouteDescriptor("articles", "create", "^POST$", "/articles(.:format)"),
        RouteDescriptor("articles", "show", "^GET$", "/articles/:id(.:format)"),
        RouteDescriptor("articles", "update", "^PATCH$", "/articles/:id(.:format)"),
        RouteDescriptor("articles", "update", "^PUT$", "/articles/:id(.:format)"),
        RouteDescriptor("sessions", "create", "^POST$", "/login(.:format)"),
        RouteDescriptor(verb="^GET$", path="/*path"),
    ]
