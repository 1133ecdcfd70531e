"""Tests for model discovery sources."""

import json
import sqlite3

import pytest
from schema_builder.base.models import AssociationKind
from schema_builder.config import BuilderConfig
from schema_builder.exceptions import ConfigurationError, MetadataUnavailableError
from schema_builder.sources import get_source
from schema_builder.sources.json_file import JsonModelSource, model_from_dict
from schema_builder.sources.sqlite import SQLiteModelSource
from schema_builder.sources.sqlite.source import parse_declared_type, parse_default


@pytest.fixture
def blog_db(tmp_path):
    """A SQLite database with authors, articles and comments."""
    path = tmp_path / "blog.sqlite3"
    conn = sqlite3.connect(path)
    conn.executescript("""
        CREATE TABLE authors (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name VARCHAR(100) NOT NULL
        );
        CREATE TABLE articles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title VARCHAR(255),
            body TEXT,
            price DECIMAL(10, 2),
            published BOOLEAN DEFAULT 0,
            state VARCHAR(20) DEFAULT 'draft',
            author_id INTEGER REFERENCES authors(id),
            created_at DATETIME,
            updated_at DATETIME
        );
        CREATE TABLE comments (
            id INTEGER PRIMARY KEY,
            article_id INTEGER REFERENCES articles(id),
            body TEXT
        );
    """)
    conn.close()
    return path


class TestGetSource:
    """Tests for get_source."""

    def test_known_sources(self):
        assert get_source("json") is JsonModelSource
        assert get_source("sqlite") is SQLiteModelSource

    def test_unknown_source(self):
        with pytest.raises(ConfigurationError, match="Unknown model source"):
            get_source("oracle")


class TestJsonModelSource:
    """Tests for JsonModelSource."""

    def test_model_from_dict(self):
        """Descriptor files should accept the short column keys too."""
        model = model_from_dict({
            "name": "Article",
            "columns": [
                {"name": "id", "type": "integer", "primary": True},
                {"name": "title", "type": "string", "limit": 255, "default": "Untitled"},
            ],
            "associations": [
                {"name": "comments", "kind": "has_many", "target_plural_name": "comments"},
            ],
        })
        assert model.column("id").is_primary_key is True
        assert model.column("title").max_length == 255
        assert model.column("title").default_value == "Untitled"
        assert model.association("comments").kind == AssociationKind.HAS_MANY

    def test_extract(self, tmp_path):
        """All files matching the glob should be loaded in path order."""
        (tmp_path / "models" / "admin").mkdir(parents=True)
        (tmp_path / "models" / "article.json").write_text(json.dumps({"name": "Article"}))
        (tmp_path / "models" / "admin" / "user.json").write_text(
            json.dumps([{"name": "Admin::User"}, {"name": "Admin::Role"}])
        )
        models = JsonModelSource(BuilderConfig(base_path=tmp_path)).extract()
        assert [m.name for m in models] == ["Admin::User", "Admin::Role", "Article"]

    def test_extract_empty(self, tmp_path):
        assert JsonModelSource(BuilderConfig(base_path=tmp_path)).extract() == []

    def test_invalid_file(self, tmp_path):
        """Broken descriptor files are fatal."""
        (tmp_path / "models").mkdir()
        (tmp_path / "models" / "bad.json").write_text(json.dumps({"columns": []}))
        with pytest.raises(MetadataUnavailableError, match="bad.json"):
            JsonModelSource(BuilderConfig(base_path=tmp_path)).extract()

    def test_find(self, tmp_path):
        """Single models are found by class or table name."""
        (tmp_path / "models").mkdir()
        (tmp_path / "models" / "article.json").write_text(json.dumps({"name": "Article"}))
        source = JsonModelSource(BuilderConfig(base_path=tmp_path))
        assert source.find("Article").name == "Article"
        assert source.find("articles").name == "Article"
        with pytest.raises(MetadataUnavailableError, match="Model not found"):
            source.find("Comment")


class TestSQLiteModelSource:
    """Tests for SQLiteModelSource."""

    def make_source(self, path):
        return SQLiteModelSource(BuilderConfig(source="sqlite", database_path=str(path)))

    def test_tables_become_models(self, blog_db):
        models = self.make_source(blog_db).extract()
        assert [m.name for m in models] == ["Article", "Author", "Comment"]
        assert [m.plural_table_name for m in models] == ["articles", "authors", "comments"]

    def test_columns(self, blog_db):
        article = self.make_source(blog_db).extract()[0]
        assert [c.name for c in article.columns][:3] == ["id", "title", "body"]
        assert article.column("id").is_primary_key is True
        assert article.column("title").data_type == "string"
        assert article.column("title").max_length == 255
        assert article.column("body").data_type == "text"
        assert article.column("price").data_type == "decimal"
        assert article.column("price").max_length is None
        assert article.column("published").default_value is False
        assert article.column("state").default_value == "draft"
        assert article.column("created_at").data_type == "datetime"

    def test_associations(self, blog_db):
        """Foreign keys become belongs-to, inbound keys become has-many."""
        article, author, comment = self.make_source(blog_db).extract()
        assert article.association("author").kind == AssociationKind.BELONGS_TO
        assert article.association("author").target_plural_name == "authors"
        assert article.association("comments").kind == AssociationKind.HAS_MANY
        assert author.association("articles").kind == AssociationKind.HAS_MANY
        assert comment.association("article").target_plural_name == "articles"

    def test_missing_database(self, tmp_path):
        with pytest.raises(MetadataUnavailableError, match="Database not found"):
            self.make_source(tmp_path / "missing.sqlite3").extract()

    @pytest.mark.parametrize("declared,expected", [
        ("VARCHAR(255)", ("string", 255)),
        ("varchar", ("string", None)),
        ("INTEGER", ("integer", None)),
        ("BIGINT", ("integer", None)),
        ("DATETIME", ("datetime", None)),
        ("TIMESTAMP", ("datetime", None)),
        ("DATE", ("date", None)),
        ("NUMERIC(10,2)", ("decimal", None)),
        ("REAL", ("float", None)),
        ("BLOB", ("binary", None)),
        (None, ("text", None)),
        ("JSON", ("json", None)),
    ])
    def test_parse_declared_type(self, declared, expected):
        assert parse_declared_type(declared) == expected

    @pytest.mark.parametrize("raw,data_type,expected", [
        (None, "string", None),
        ("NULL", "string", None),
        ("'it''s'", "string", "it's"),
        ("1", "boolean", True),
        ("42", "integer", 42),
        ("1.5", "float", 1.5),
        ("CURRENT_TIMESTAMP", "datetime", "CURRENT_TIMESTAMP"),
    ])
    def test_parse_default(self, raw, data_type, expected):
        assert parse_default(raw, data_type) == expected
