"""CLI command handlers containing business logic."""

from schemadoc.cli.handlers.docs_handler import DocsHandler

__all__ = ["DocsHandler"]
