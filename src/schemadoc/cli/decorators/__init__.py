"""CLI decorators for common options and error handling."""

from schemadoc.cli.decorators.error_handling import handle_errors
from schemadoc.cli.decorators.options import with_database_options, with_ignore_options

__all__ = [
    "handle_errors",
    "with_database_options",
    "with_ignore_options",
]
