"""Shared fixtures for schemadoc tests."""

from __future__ import annotations

import copy

import pytest
from sqlalchemy import create_engine, text

from schemadoc.utils.config import CONFIG_ENV_VAR, DATABASE_URL_ENV_VAR, set_config


class FakeCatalogReader:
    """In-memory stand-in for a catalog reader."""

    def __init__(self, tables, columns, foreign_keys=(), indexes=(), triggers=(), migration=None):
        self.tables = list(tables)
        self.columns = columns
        self.foreign_keys = list(foreign_keys)
        self.indexes = list(indexes)
        self.triggers = list(triggers)
        self.migration = migration
        self.calls = []

    def list_tables(self, schema):
        self.calls.append(("list_tables", schema))
        return list(self.tables)

    def list_columns(self, schema, table_name):
        self.calls.append(("list_columns", table_name))
        return copy.deepcopy(self.columns.get(table_name, []))

    def list_foreign_keys(self, schema):
        return list(self.foreign_keys)

    def list_indexes(self, schema):
        return list(self.indexes)

    def list_triggers(self, schema):
        return list(self.triggers)

    def latest_migration(self, schema, table_name, order_column="migration"):
        self.calls.append(("latest_migration", table_name, order_column))
        return self.migration


def column(name, type_="int(11)", data_type="int", **fields):
    row = {
        "name": name,
        "type": type_,
        "data_type": data_type,
        "length": None,
        "character_maximum_length": None,
        "display": None,
        "options": [],
        "key": "",
        "extra": "",
        "nullable": True,
        "default": None,
        "comment": "",
    }
    row.update(fields)
    return row


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep every test away from real config files and environment."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(DATABASE_URL_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def blog_reader():
    """users / categories / posts schema with one declared FK."""
    columns = {
        "users": [
            column("id", "int(10) unsigned", key="PRI", extra="auto_increment", display="10", nullable=False),
            column("email", "varchar(255)", "varchar", key="UNI", length="255", character_maximum_length=255),
            column("bio", "text", "text", character_maximum_length=65535),
        ],
        "categories": [
            column("id", key="PRI", extra="auto_increment", display="11"),
            column("name", "varchar(100)", "varchar", length="100"),
        ],
        "posts": [
            column("id", key="PRI", extra="auto_increment", display="11"),
            column("user_id", key="MUL", display="11"),
            column("category_id", display="11"),
            column(
                "status",
                "enum('draft','published')",
                "enum",
                options=["draft", "published"],
                default="draft",
            ),
            column("body", "longtext", "longtext", character_maximum_length=4294967295),
        ],
        "audit_log": [
            column("id", key="PRI"),
            column("post_id"),
        ],
    }
    return FakeCatalogReader(
        tables=["users", "categories", "posts", "audit_log"],
        columns=columns,
        foreign_keys=[
            {
                "table_name": "posts",
                "column_name": "user_id",
                "referenced_table_name": "users",
                "referenced_column_name": "id",
            },
            {
                "table_name": "audit_log",
                "column_name": "post_id",
                "referenced_table_name": "posts",
                "referenced_column_name": "id",
            },
        ],
        indexes=[
            {"table_name": "users", "index_name": "PRIMARY", "non_unique": 0, "column_name": "id", "comment": "", "seq_in_index": 1},
            {"table_name": "users", "index_name": "users_email_unique", "non_unique": 0, "column_name": "email", "comment": "", "seq_in_index": 1},
            {"table_name": "posts", "index_name": "PRIMARY", "non_unique": 0, "column_name": "id", "comment": "", "seq_in_index": 1},
            {"table_name": "posts", "index_name": "posts_user_status", "non_unique": 1, "column_name": "user_id", "comment": "", "seq_in_index": 1},
            {"table_name": "posts", "index_name": "posts_user_status", "non_unique": 1, "column_name": "status", "comment": "", "seq_in_index": 2},
            {"table_name": "audit_log", "index_name": "PRIMARY", "non_unique": 0, "column_name": "id", "comment": "", "seq_in_index": 1},
        ],
        triggers=[
            {
                "trigger_name": "posts_audit",
                "event_manipulation": "INSERT",
                "event_object_table": "posts",
                "action_statement": "INSERT INTO audit_log (post_id) VALUES (NEW.id)",
                "action_timing": "AFTER",
                "definer": "root@localhost",
            },
            {
                "trigger_name": "audit_guard",
                "event_manipulation": "DELETE",
                "event_object_table": "audit_log",
                "action_statement": "SET @x = 1",
                "action_timing": "BEFORE",
                "definer": "root@localhost",
            },
        ],
        migration={"migration": "2024_01_02_000000_create_posts", "batch": 2},
    )


@pytest.fixture
def users_posts_reader():
    """users / posts schema with no declared FKs."""
    columns = {
        "users": [
            column("id", key="PRI", extra="auto_increment", nullable=False),
            column("name", "varchar(100)", "varchar", length="100"),
        ],
        "posts": [
            column("id", key="PRI", extra="auto_increment", nullable=False),
            column("user_id"),
            column("title", "varchar(200)", "varchar", length="200"),
        ],
    }
    return FakeCatalogReader(tables=["users", "posts"], columns=columns)


SQLITE_SCHEMA = [
    """
    CREATE TABLE users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email VARCHAR(255) NOT NULL UNIQUE,
        name TEXT
    )
    """,
    """
    CREATE TABLE categories (
        id INTEGER PRIMARY KEY,
        name VARCHAR(100)
    )
    """,
    """
    CREATE TABLE posts (
        id INTEGER PRIMARY KEY,
        user_id INTEGER REFERENCES users (id),
        category_id INTEGER,
        title VARCHAR(200) NOT NULL DEFAULT 'untitled',
        body TEXT
    )
    """,
    "CREATE INDEX idx_posts_title ON posts (title)",
    """
    CREATE TRIGGER posts_touch AFTER INSERT ON posts
    BEGIN
        UPDATE users SET name = name WHERE id = NEW.user_id;
    END
    """,
    """
    CREATE TABLE migration (
        migration VARCHAR(100) NOT NULL,
        batch INTEGER NOT NULL
    )
    """,
    "INSERT INTO migration (migration, batch) VALUES ('2024_01_01_create_users', 1)",
    "INSERT INTO migration (migration, batch) VALUES ('2024_03_01_create_posts', 2)",
]


@pytest.fixture
def sqlite_url(tmp_path):
    """URL of a SQLite file holding the blog schema."""
    path = tmp_path / "blog.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for statement in SQLITE_SCHEMA:
            conn.execute(text(statement))
    engine.dispose()
    return f"sqlite:///{path}"
