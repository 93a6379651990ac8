"""Output formatting utilities for CLI."""

from __future__ import annotations

from typing import Any, Dict

import click


class OutputFormatter:
    """Format output for CLI display.

    Example:
        >>> out = OutputFormatter()
        >>> out.success("Documentation written")
        >>> out.stats({"Tables": 12, "Indexes": 30})
    """

    @staticmethod
    def success(message: str) -> None:
        """Display success message with checkmark."""
        click.echo(f"✓ {message}")

    @staticmethod
    def section(title: str) -> None:
        """Display section header.

        Args:
            title: Section title
        """
        click.echo(f"\n{title}")

    @staticmethod
    def stats(stats_dict: Dict[str, Any], indent: str = "   ") -> None:
        """Display statistics dictionary in key: value format.

        Args:
            stats_dict: Dictionary of statistics to display
            indent: Indentation string for each line
        """
        for key, value in stats_dict.items():
            click.echo(f"{indent}{key}: {value}")

    @staticmethod
    def progress_start(message: str) -> None:
        click.echo(f"\n🔍 {message}")
