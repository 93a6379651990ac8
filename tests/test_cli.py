"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from schemadoc import __version__
from schemadoc.cli.cli_main import cli
from schemadoc.utils.config import DATABASE_URL_ENV_VAR


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_html(runner, sqlite_url, tmp_path):
    out_dir = tmp_path / "docs"
    result = runner.invoke(cli, ["html", "main", str(out_dir), "--url", sqlite_url])

    assert result.exit_code == 0, result.output
    target = out_dir / "schemadoc"
    assert (target / "index.html").exists()
    assert (target / "tables.html").exists()
    assert (target / "table_posts.html").exists()
    assert (target / "indexes.html").exists()
    assert (target / "triggers.html").exists()
    assert (target / "assets" / "schemadoc.css").exists()
    assert "Documentation written to" in result.output
    assert "Tables: 4" in result.output


def test_html_replaces_previous_output(runner, sqlite_url, tmp_path):
    stale = tmp_path / "docs" / "schemadoc" / "table_dropped.html"
    stale.parent.mkdir(parents=True)
    stale.write_text("old")

    result = runner.invoke(
        cli, ["html", "main", str(tmp_path / "docs"), "--url", sqlite_url]
    )

    assert result.exit_code == 0, result.output
    assert not stale.exists()


def test_html_default_output_dir(runner, sqlite_url, tmp_path):
    result = runner.invoke(cli, ["html", "main", "--url", sqlite_url])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "tmp" / "schemadoc" / "index.html").exists()


def test_url_from_environment(runner, sqlite_url, tmp_path, monkeypatch):
    monkeypatch.setenv(DATABASE_URL_ENV_VAR, sqlite_url)
    result = runner.invoke(cli, ["html", "main", str(tmp_path / "docs")])

    assert result.exit_code == 0, result.output


def test_ignore_options(runner, sqlite_url, tmp_path):
    result = runner.invoke(
        cli,
        [
            "html", "main", str(tmp_path / "docs"), "--url", sqlite_url,
            "--ignore", "migration", "--ignore-regex", "/^CAT/i",
        ],
    )

    assert result.exit_code == 0, result.output
    target = tmp_path / "docs" / "schemadoc"
    assert (target / "table_users.html").exists()
    assert not (target / "table_migration.html").exists()
    assert not (target / "table_categories.html").exists()


def test_missing_schema_shows_help(runner, sqlite_url):
    result = runner.invoke(cli, ["html", "--url", sqlite_url])

    assert result.exit_code == 2
    assert "Usage:" in result.output
    assert "schema name is required" in result.output


def test_missing_url(runner):
    result = runner.invoke(cli, ["html", "main"])

    assert result.exit_code == 2
    assert "database URL is required" in result.output


def test_everything_ignored(runner, sqlite_url, tmp_path):
    out_dir = tmp_path / "docs"
    result = runner.invoke(
        cli, ["html", "main", str(out_dir), "--url", sqlite_url, "--ignore-regex", ".*"]
    )

    assert result.exit_code == 3
    assert 'No tables in "main"' in result.output
    assert not (out_dir / "schemadoc").exists()


def test_unreachable_database(runner, tmp_path):
    url = f"sqlite:///{tmp_path / 'missing' / 'db.sqlite'}"
    result = runner.invoke(cli, ["html", "main", str(tmp_path / "docs"), "--url", url])

    assert result.exit_code == 4
    assert "❌ connect:" in result.output
    assert not (tmp_path / "docs").exists()


def test_output_target_failure(runner, sqlite_url, tmp_path):
    out_dir = tmp_path / "docs"
    out_dir.mkdir()
    (out_dir / "schemadoc").write_text("a file where the directory should be")

    result = runner.invoke(cli, ["html", "main", str(out_dir), "--url", sqlite_url])

    assert result.exit_code == 5
    assert "❌ output:" in result.output


def test_invalid_config_file(runner, tmp_path):
    config_path = tmp_path / "bad.yml"
    config_path.write_text("ignore: [unclosed\n")

    result = runner.invoke(cli, ["--config", str(config_path), "html", "main"])

    assert result.exit_code == 6
    assert "❌ config:" in result.output


def test_unsupported_dialect(runner, tmp_path):
    result = runner.invoke(
        cli, ["html", "main", str(tmp_path / "docs"), "--url", "postgresql://u@localhost/app"]
    )

    assert result.exit_code == 6


def test_config_file_settings(runner, sqlite_url, tmp_path):
    config_path = tmp_path / "schemadoc.yml"
    config_path.write_text(
        f"database:\n  url: {sqlite_url}\n"
        "ignore:\n  tables: [migration]\n"
        "output:\n  title: Blog Schema\n"
    )

    result = runner.invoke(
        cli, ["--config", str(config_path), "html", "main", str(tmp_path / "docs")]
    )

    assert result.exit_code == 0, result.output
    index = (tmp_path / "docs" / "schemadoc" / "index.html").read_text(encoding="utf-8")
    assert "<h1>Blog Schema</h1>" in index
    assert not (tmp_path / "docs" / "schemadoc" / "table_migration.html").exists()


def test_json_to_file(runner, sqlite_url, tmp_path):
    out_file = tmp_path / "main.json"
    result = runner.invoke(cli, ["json", "main", "--url", sqlite_url, "-o", str(out_file)])

    assert result.exit_code == 0, result.output
    data = json.loads(out_file.read_text(encoding="utf-8"))
    assert data["summary"]["schema_name"] == "main"
    assert data["summary"]["num_inferred_foreign_keys"] == 1
    assert data["summary"]["migration"]["batch"] == 2


def test_json_to_stdout(runner, sqlite_url):
    result = runner.invoke(cli, ["json", "main", "--url", sqlite_url])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert list(data["tables"]) == ["users", "categories", "posts", "migration"]
