"""Common CLI option decorators."""

from __future__ import annotations

import click

from schemadoc.catalog import CatalogReaderFactory


def with_database_options(f):
    """Add --url and --dialect options to command.

    Example:
        @click.command()
        @with_database_options
        def my_command(url, dialect):
            pass
    """
    f = click.option(
        "--dialect",
        type=click.Choice(CatalogReaderFactory.list_readers(), case_sensitive=False),
        help="Catalog reader to use (default: detected from the URL)",
    )(f)
    return click.option(
        "--url",
        "-u",
        type=str,
        help="SQLAlchemy database URL (default: database.url or $SCHEMADOC_DATABASE_URL)",
    )(f)


def with_ignore_options(f):
    """Add --ignore and --ignore-regex options to command.

    Values given on the command line replace the configured ignore rules.

    Example:
        @click.command()
        @with_ignore_options
        def my_command(ignore_tables, ignore_regex):
            pass
    """
    f = click.option(
        "--ignore-regex",
        type=str,
        help="Leave out tables matching this pattern (e.g. '/^tmp_/i')",
    )(f)
    return click.option(
        "--ignore",
        "ignore_tables",
        multiple=True,
        help="Table to leave out (repeatable)",
    )(f)
