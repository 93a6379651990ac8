"""Base catalog reader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from schemadoc.errors import CatalogQueryError
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)


def _driver_message(error: Exception) -> str:
    """The database driver's own message, without SQLAlchemy's decoration."""
    orig = getattr(error, "orig", None)
    return str(orig if orig is not None else error)


class BaseCatalogReader(ABC):
    """Read-only access to a database's metadata catalog.

    Every query goes through one connection, opened on first use. Any
    failure is raised as ``CatalogQueryError`` naming the stage that failed.
    """

    dialect: str = ""

    def __init__(
        self,
        connection_string: Optional[str] = None,
        engine: Optional[Engine] = None,
    ):
        """Initialize reader.

        Args:
            connection_string: SQLAlchemy connection string
            engine: Existing engine to use instead of creating one

        Raises:
            CatalogQueryError: If the engine cannot be created or the
                database cannot be reached
        """
        if engine is None and not connection_string:
            raise CatalogQueryError("No connection string given", stage="connect")

        self.connection_string = connection_string
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")
        self._connection: Optional[Connection] = None

        if engine is None:
            self.logger.info("Creating database engine")
            try:
                engine = create_engine(connection_string)
            except (SQLAlchemyError, ImportError) as e:
                raise CatalogQueryError(_driver_message(e), stage="connect") from e
        self.engine: Engine = engine

        # Test connection
        try:
            self._query("connect", "SELECT 1")
        except CatalogQueryError:
            self.engine.dispose()
            raise
        self.logger.info("Database connection successful")

    def _connect(self) -> Connection:
        if self._connection is None:
            self._connection = self.engine.connect()
        return self._connection

    def _query(self, stage: str, sql: str, **params: Any) -> List[Dict[str, Any]]:
        """Run a read-only query and return its rows as dicts.

        Raises:
            CatalogQueryError: If the query fails
        """
        self.logger.debug(f"[{stage}] {' '.join(sql.split())}")
        try:
            result = self._connect().execute(text(sql), params)
            return [dict(row) for row in result.mappings()]
        except SQLAlchemyError as e:
            raise CatalogQueryError(_driver_message(e), stage=stage) from e

    def quote(self, identifier: str) -> str:
        """Quote an identifier for the connected dialect."""
        return self.engine.dialect.identifier_preparer.quote_identifier(identifier)

    @abstractmethod
    def list_tables(self, schema: str) -> List[str]:
        """Names of the tables and views in ``schema``, in catalog order."""

    @abstractmethod
    def list_columns(self, schema: str, table_name: str) -> List[Dict[str, Any]]:
        """Column rows for one table, in ordinal order.

        Each row has ``name``, ``type``, ``data_type``, ``length``,
        ``character_maximum_length``, ``display``, ``options``, ``key``,
        ``extra``, ``nullable``, ``default`` and ``comment``.
        """

    @abstractmethod
    def list_foreign_keys(self, schema: str) -> List[Dict[str, Any]]:
        """Declared FK rows: ``table_name``, ``column_name``,
        ``referenced_table_name``, ``referenced_column_name``."""

    @abstractmethod
    def list_indexes(self, schema: str) -> List[Dict[str, Any]]:
        """Index rows: ``table_name``, ``index_name``, ``non_unique``,
        ``column_name``, ``comment``, ``seq_in_index``."""

    @abstractmethod
    def list_triggers(self, schema: str) -> List[Dict[str, Any]]:
        """Trigger rows: ``trigger_name``, ``event_manipulation``,
        ``event_object_table``, ``action_statement``, ``action_timing``,
        ``definer``."""

    def latest_migration(
        self, schema: str, table_name: str, order_column: str = "migration"
    ) -> Optional[Dict[str, Any]]:
        """Most recent row of the migration tracking table.

        Best effort: returns None when the table is missing or the lookup
        fails for any database reason.
        """
        if not table_name:
            return None
        try:
            if not inspect(self._connect()).has_table(table_name, schema=schema):
                self.logger.debug(f"No migration table {table_name} in {schema}")
                return None
            sql = (
                f"SELECT * FROM {self.quote(schema)}.{self.quote(table_name)} "
                f"ORDER BY {self.quote(order_column)} DESC LIMIT 1"
            )
            result = self._connect().execute(text(sql))
            row = result.mappings().first()
        except SQLAlchemyError as e:
            self.logger.warning(
                f"Could not read migration table {table_name}: {_driver_message(e)}"
            )
            self._reset_connection()
            return None
        return dict(row) if row is not None else None

    def _reset_connection(self) -> None:
        # A failed statement can leave the transaction aborted on some backends
        if self._connection is not None:
            self._connection.rollback()

    def close(self) -> None:
        """Close the connection and dispose of the engine."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self.engine.dispose()
        self.logger.info("Database connection closed")

    def __enter__(self) -> BaseCatalogReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.engine.url!r})"
