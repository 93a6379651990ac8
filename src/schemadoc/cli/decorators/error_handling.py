"""Error handling decorators for CLI commands."""

from __future__ import annotations

import signal
import sys
from functools import wraps

import click

from schemadoc.errors import SchemaDocError, UsageError
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)

# Handle SIGPIPE gracefully (prevent BrokenPipeError when piping to head, etc.)
try:
    signal.signal(signal.SIGPIPE, signal.SIG_DFL)
except AttributeError:
    # Windows doesn't have SIGPIPE
    pass


def handle_errors(f):
    """Decorator mapping failures to a one-line message and an exit status.

    ``SchemaDocError`` subclasses exit with their own ``exit_code``; usage
    errors also print the command help. Anything else exits with status 1.
    Tracebacks only appear in the log at DEBUG level.

    Example:
        @click.command()
        @handle_errors
        def my_command():
            # Your command logic
            pass
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (click.Abort, click.exceptions.Exit):
            raise
        except BrokenPipeError:
            # Close stdout/stderr to avoid further errors
            devnull = open("/dev/null", "w")
            sys.stdout = devnull
            sys.stderr = devnull
            sys.exit(0)
        except SchemaDocError as e:
            if isinstance(e, UsageError):
                ctx = click.get_current_context(silent=True)
                if ctx is not None:
                    click.echo(ctx.get_help(), err=True)
            click.echo(f"❌ {e.stage}: {e.message}", err=True)
            logger.debug(f"{type(e).__name__} details", exc_info=True)
            sys.exit(e.exit_code)
        except Exception as e:
            click.echo(f"❌ Unexpected error: {e}", err=True)
            logger.debug("Unexpected error in command", exc_info=True)
            sys.exit(1)

    return wrapper
