"""Command line interface for schemadoc."""

from schemadoc.cli.cli_main import cli, main

__all__ = ["cli", "main"]
