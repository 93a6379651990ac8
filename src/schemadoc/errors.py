"""Exception types raised while building schema documentation."""

from __future__ import annotations

from typing import Optional


class SchemaDocError(Exception):
    """Base class for expected, user-facing failures.

    ``stage`` names the part of the run that failed and ``exit_code`` is the
    process status the CLI reports for it.
    """

    exit_code = 1
    stage = "schemadoc"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    @property
    def message(self) -> str:
        return str(self)


class UsageError(SchemaDocError):
    """A required input (schema name, connection URL) was not supplied."""

    exit_code = 2
    stage = "usage"


class EmptySchemaError(SchemaDocError):
    """No tables are left to document after ignore filtering."""

    exit_code = 3
    stage = "table registry"


class CatalogQueryError(SchemaDocError):
    """Connecting to the database or running a catalog query failed."""

    exit_code = 4
    stage = "catalog"


class OutputTargetError(SchemaDocError):
    """The output directory could not be cleared or created."""

    exit_code = 5
    stage = "output"


class ConfigError(SchemaDocError):
    """Configuration is unreadable or holds an invalid value."""

    exit_code = 6
    stage = "config"
