"""Business logic for documentation commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from schemadoc.catalog import CatalogReaderFactory
from schemadoc.core.document import DocumentModel
from schemadoc.core.pipeline import DocumentationPipeline
from schemadoc.errors import OutputTargetError, UsageError
from schemadoc.render import HTMLRenderer, copy_assets, prepare_output_dir
from schemadoc.utils.config import DATABASE_URL_ENV_VAR, Config
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)

OUTPUT_SUBDIR = "schemadoc"


class DocsHandler:
    """Handler for documentation operations.

    Keeps the click commands thin: connection setup, model building and
    writing output all happen here.

    Example:
        >>> handler = DocsHandler(config)
        >>> document = handler.build_document("app", url="sqlite:///app.db")
        >>> handler.write_html(document, "./tmp")
    """

    def __init__(self, config: Config):
        """Initialize handler.

        Args:
            config: Configuration instance
        """
        self.config = config

    def resolve_url(self, url: Optional[str] = None) -> str:
        """Connection URL from the option, config or environment.

        Raises:
            UsageError: If none of them provides a URL
        """
        resolved = url or self.config.database_url()
        if not resolved:
            raise UsageError(
                f"A database URL is required (--url, database.url or ${DATABASE_URL_ENV_VAR})"
            )
        return resolved

    def build_document(
        self,
        schema_name: Optional[str],
        url: Optional[str] = None,
        dialect: Optional[str] = None,
    ) -> DocumentModel:
        """Read the catalog and build the document model.

        Args:
            schema_name: Schema (database) to document
            url: Connection URL override
            dialect: Catalog reader override

        Returns:
            Complete DocumentModel
        """
        if not schema_name:
            raise UsageError("A schema name is required")

        connection_string = self.resolve_url(url)
        dialect = dialect or self.config.get("database.dialect")

        with CatalogReaderFactory.create_reader(connection_string, dialect) as reader:
            return DocumentationPipeline(reader, self.config).run(schema_name)

    def write_html(
        self, document: DocumentModel, output_dir: Optional[str | Path] = None
    ) -> Path:
        """Write the HTML pages under ``<output_dir>/schemadoc``.

        Any previous contents of that directory are removed first.

        Returns:
            The documentation directory
        """
        base = Path(output_dir or self.config.get("output.dir", "./tmp"))
        target = prepare_output_dir(base / OUTPUT_SUBDIR)
        copy_assets(target)

        renderer = HTMLRenderer(target, title=self.config.get("output.title"))
        pages = renderer.render(document)
        logger.info(f"Wrote {len(pages)} pages for '{document.schema_name}'")
        return target

    def write_json(self, document: DocumentModel, output_file: str | Path) -> Path:
        """Save the document model as JSON.

        Raises:
            OutputTargetError: If the file cannot be written
        """
        try:
            return document.save(output_file)
        except OSError as e:
            raise OutputTargetError(f'Could not write "{output_file}": {e}') from e

    def to_json(self, document: DocumentModel) -> str:
        return json.dumps(document.to_dict(), indent=2, default=str)

    def get_summary(self, document: DocumentModel) -> Dict[str, Any]:
        """Summary statistics for display."""
        summary = document.summary()
        stats = {
            "Schema": summary["schema_name"],
            "Tables": summary["num_tables"],
            "Columns": summary["num_columns"],
            "Foreign Keys": summary["num_foreign_keys"],
            "Inferred References": summary["num_inferred_foreign_keys"],
            "Indexes": summary["num_indexes"],
            "Triggers": summary["num_triggers"],
        }
        migration = summary["migration"]
        if migration:
            stats["Latest Migration"] = migration.get("migration", migration)
        return stats

    def apply_ignore_overrides(
        self, ignore_tables: Optional[List[str]], ignore_regex: Optional[str]
    ) -> None:
        """Replace configured ignore rules with command line values."""
        if ignore_tables:
            self.config.set("ignore.tables", list(ignore_tables))
        if ignore_regex:
            self.config.set("ignore.table_regex", ignore_regex)
