"""CLI output helpers."""

from schemadoc.cli.output.formatters import OutputFormatter

__all__ = ["OutputFormatter"]
