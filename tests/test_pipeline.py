"""Tests for the documentation pipeline."""

import json

import pytest

from schemadoc.core.pipeline import DocumentationPipeline
from schemadoc.errors import CatalogQueryError, EmptySchemaError, UsageError
from schemadoc.utils.config import Config


def test_builds_complete_model(blog_reader):
    document = DocumentationPipeline(blog_reader).run("blog")

    assert document.schema_name == "blog"
    assert document.table_names == ["users", "categories", "posts", "audit_log"]
    assert document.migration == {"migration": "2024_01_02_000000_create_posts", "batch": 2}

    posts = document.tables["posts"]
    assert [c.name for c in posts.columns] == ["id", "user_id", "category_id", "status", "body"]


def test_declared_and_inferred_references(blog_reader):
    document = DocumentationPipeline(blog_reader).run("blog")
    posts = document.tables["posts"]

    user_ref = posts.column("user_id").resolved_foreign_key
    assert str(user_ref) == "users.id"
    assert not user_ref.inferred

    category_ref = posts.column("category_id").resolved_foreign_key
    assert str(category_ref) == "categories.id"
    assert category_ref.inferred

    assert posts.column("user_id").badges == ("FK",)
    assert posts.column("category_id").badges == ("FK",)


def test_column_annotations(blog_reader):
    document = DocumentationPipeline(blog_reader).run("blog")
    users = document.tables["users"]
    posts = document.tables["posts"]

    assert users.column("id").badges == ("PK", "AI")
    assert users.column("id").display_length == "10"
    assert users.column("email").badges == ("UI",)
    assert users.column("email").display_length == "255"
    assert users.column("bio").display_length is None
    assert posts.column("body").display_length is None
    assert posts.column("status").display_type == "enum('draft', 'published')"


def test_summary(blog_reader):
    summary = DocumentationPipeline(blog_reader).run("blog").summary()

    assert summary["num_tables"] == 4
    assert summary["num_columns"] == 12
    assert summary["num_foreign_keys"] == 2
    assert summary["num_inferred_foreign_keys"] == 1
    assert summary["num_indexes"] == 5
    assert summary["num_triggers"] == 2


def test_ignored_table_drops_its_rows(blog_reader):
    config = Config()
    config.set("ignore.tables", ["audit_log"])

    document = DocumentationPipeline(blog_reader, config).run("blog")

    assert document.table_names == ["users", "categories", "posts"]
    assert [t.name for t in document.triggers] == ["posts_audit"]
    assert all(table != "audit_log" for table, _ in document.indexes)
    assert ("list_columns", "audit_log") not in blog_reader.calls


def test_declared_reference_to_ignored_table(blog_reader):
    config = Config()
    config.set("ignore.table_regex", "/^USERS$/i")

    document = DocumentationPipeline(blog_reader, config).run("blog")
    user_id = document.tables["posts"].column("user_id")

    assert user_id.badges == ("FK",)
    assert not user_id.resolved_foreign_key.is_resolved


def test_everything_ignored(blog_reader):
    config = Config()
    config.set("ignore.table_regex", ".*")

    with pytest.raises(EmptySchemaError, match='No tables in "blog"'):
        DocumentationPipeline(blog_reader, config).run("blog")


def test_schema_name_required(blog_reader):
    with pytest.raises(UsageError):
        DocumentationPipeline(blog_reader).run("")
    assert blog_reader.calls == []


def test_catalog_failure_propagates(blog_reader):
    def broken(schema, table_name):
        raise CatalogQueryError("Table 'blog.posts' doesn't exist", stage="columns of posts")

    blog_reader.list_columns = broken

    with pytest.raises(CatalogQueryError) as exc_info:
        DocumentationPipeline(blog_reader).run("blog")
    assert exc_info.value.stage == "columns of posts"


def test_migration_lookup_uses_config(blog_reader):
    config = Config()
    config.set("migrations.table", "schema_migrations")
    config.set("migrations.order_column", "version")

    DocumentationPipeline(blog_reader, config).run("blog")

    assert ("latest_migration", "schema_migrations", "version") in blog_reader.calls


def test_inference_can_be_disabled(blog_reader):
    config = Config()
    config.set("fk_inference.enabled", False)

    document = DocumentationPipeline(blog_reader, config).run("blog")

    assert not document.tables["posts"].column("category_id").resolved_foreign_key.is_resolved


def test_document_saves_as_json(blog_reader, tmp_path):
    document = DocumentationPipeline(blog_reader).run("blog")
    path = document.save(tmp_path / "out" / "blog.json")

    with open(path) as f:
        data = json.load(f)

    assert data["summary"]["num_tables"] == 4
    assert list(data["tables"]) == ["users", "categories", "posts", "audit_log"]
    category = data["tables"]["posts"]["columns"][2]
    assert category["name"] == "category_id"
    assert category["foreign_key"] == {
        "referenced_table_name": "categories",
        "referenced_column_name": "id",
        "inferred": True,
    }
    assert data["tables"]["posts"]["indexes"]["posts_user_status"]["unique"] is False


def test_reference_inferred_without_declared_keys(users_posts_reader):
    document = DocumentationPipeline(users_posts_reader).run("blog")

    assert document.table_names == ["users", "posts"]
    posts = document.tables["posts"]
    user_id = posts.column("user_id")
    assert user_id.badges == ("FK",)
    assert user_id.resolved_foreign_key.referenced_table_name == "users"
    assert user_id.resolved_foreign_key.referenced_column_name == "id"
    assert user_id.resolved_foreign_key.inferred is True
    assert posts.column("id").badges == ("PK", "AI")
    assert posts.column("title").badges == ()
