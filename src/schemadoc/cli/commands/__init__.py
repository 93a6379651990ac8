"""CLI command modules."""

from . import docs

__all__ = ["docs"]
