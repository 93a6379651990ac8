"""Documentation pipeline: catalog rows in, document model out."""

from __future__ import annotations

from typing import List, Optional

from schemadoc.catalog.base import BaseCatalogReader
from schemadoc.core.annotator import ColumnAnnotator
from schemadoc.core.document import DocumentModel, build_document
from schemadoc.core.fk_inference import NamingConventionFKDetector
from schemadoc.core.registry import build_table_registry
from schemadoc.core.resolver import RelationshipResolver
from schemadoc.core.types import ColumnRecord, Table
from schemadoc.errors import EmptySchemaError, UsageError
from schemadoc.utils.config import Config
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)


class DocumentationPipeline:
    """Build the documentation model for one schema.

    The reader is injected; the pipeline never opens connections itself and
    writes nothing. A run either returns a complete model or raises.

    Example:
        >>> with CatalogReaderFactory.create_reader("sqlite:///app.db") as reader:
        ...     document = DocumentationPipeline(reader, config).run("main")
    """

    def __init__(self, reader: BaseCatalogReader, config: Optional[Config] = None):
        """Initialize pipeline.

        Args:
            reader: Catalog reader bound to the target database
            config: Configuration (defaults when None)
        """
        self.reader = reader
        self.config = config or Config()

        self.resolver = RelationshipResolver()
        self.annotator = ColumnAnnotator(
            sentinel_lengths=self.config.get("annotation.sentinel_lengths"),
            fk_detector=NamingConventionFKDetector(self.config.get("fk_inference") or {}),
        )

    def run(self, schema_name: Optional[str]) -> DocumentModel:
        """Run every stage and return the document model.

        Args:
            schema_name: Schema (database) to document

        Raises:
            UsageError: If no schema name is given
            EmptySchemaError: If every table is ignored or the schema is empty
            CatalogQueryError: If any catalog query fails
        """
        if not schema_name:
            raise UsageError("A schema name is required")

        logger.info(f"Documenting schema '{schema_name}'")

        admitted = self._admit_tables(schema_name)

        tables = self.resolver.resolve(
            admitted,
            self.reader.list_foreign_keys(schema_name),
            self.reader.list_indexes(schema_name),
            self.reader.list_triggers(schema_name),
        )

        admitted_set = frozenset(admitted)
        for table in tables.values():
            table.columns = self._annotate_columns(schema_name, table, admitted_set)

        migration = self.reader.latest_migration(
            schema_name,
            self.config.get("migrations.table"),
            self.config.get("migrations.order_column", "migration"),
        )

        return build_document(schema_name, tables, migration)

    def _admit_tables(self, schema_name: str) -> List[str]:
        all_tables = self.reader.list_tables(schema_name)
        logger.info(f"Catalog reports {len(all_tables)} tables")
        try:
            return build_table_registry(
                all_tables,
                ignore_list=self.config.get("ignore.tables") or [],
                ignore_regex=self.config.get("ignore.table_regex"),
            )
        except EmptySchemaError as e:
            raise EmptySchemaError(f'No tables in "{schema_name}"') from e

    def _annotate_columns(
        self, schema_name: str, table: Table, admitted: frozenset
    ) -> list:
        records = [
            ColumnRecord.from_row(row)
            for row in self.reader.list_columns(schema_name, table.name)
        ]
        logger.debug(f"Table {table.name}: {len(records)} columns")
        return [
            self.annotator.annotate(record, table.foreign_keys, admitted)
            for record in records
        ]
