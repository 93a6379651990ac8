"""Document model handed to renderers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from schemadoc.core.types import Index, Table, Trigger
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DocumentModel:
    """Complete documentation model for one schema."""

    schema_name: str
    tables: Dict[str, Table]
    migration: Optional[Dict[str, Any]] = None
    generated_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc).replace(microsecond=0)
    )

    @property
    def table_names(self) -> List[str]:
        return list(self.tables.keys())

    @property
    def indexes(self) -> List[Tuple[str, Index]]:
        """All indexes as (table_name, Index) pairs, table order."""
        return [
            (table.name, index)
            for table in self.tables.values()
            for index in table.indexes.values()
        ]

    @property
    def triggers(self) -> List[Trigger]:
        return [trigger for table in self.tables.values() for trigger in table.triggers]

    def summary(self) -> Dict[str, Any]:
        """Data for the summary (index) page."""
        return {
            "schema_name": self.schema_name,
            "generated_at": self.generated_at.isoformat(),
            "num_tables": len(self.tables),
            "num_columns": sum(len(t.columns) for t in self.tables.values()),
            "num_foreign_keys": sum(len(t.foreign_keys) for t in self.tables.values()),
            "num_inferred_foreign_keys": sum(
                1
                for t in self.tables.values()
                for c in t.columns
                if c.resolved_foreign_key.inferred
            ),
            "num_indexes": len(self.indexes),
            "num_triggers": len(self.triggers),
            "migration": self.migration,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "summary": self.summary(),
            "tables": {
                name: {
                    "columns": [c.to_dict() for c in table.columns],
                    "foreign_keys": {
                        col: {
                            "referenced_table_name": fk.referenced_table_name,
                            "referenced_column_name": fk.referenced_column_name,
                        }
                        for col, fk in table.foreign_keys.items()
                    },
                    "indexes": {
                        index.name: {
                            "unique": index.unique,
                            "columns": [
                                {
                                    "column_name": ic.column_name,
                                    "non_unique": ic.non_unique,
                                    "comment": ic.comment,
                                    "seq_in_index": ic.seq_in_index,
                                }
                                for ic in index.columns.values()
                            ],
                        }
                        for index in table.indexes.values()
                    },
                    "triggers": [
                        {
                            "name": t.name,
                            "event": t.event,
                            "timing": t.timing,
                            "statement": t.statement,
                            "definer": t.definer,
                        }
                        for t in table.triggers
                    ],
                }
                for name, table in self.tables.items()
            },
        }

    def save(self, path: str | Path) -> Path:
        """Save the model to a JSON file.

        Args:
            path: Path to save JSON file

        Returns:
            Path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, default=str)

        logger.info(f"Saved document model to {path}")
        return path


def build_document(
    schema_name: str,
    tables: Mapping[str, Table],
    migration: Optional[Dict[str, Any]] = None,
) -> DocumentModel:
    """Assemble the document model from fully resolved tables.

    Args:
        schema_name: Documented schema (database) name
        tables: Annotated tables in display order
        migration: Latest applied migration row, if known

    Returns:
        DocumentModel
    """
    document = DocumentModel(
        schema_name=schema_name,
        tables=dict(tables),
        migration=dict(migration) if migration else None,
    )
    logger.info(
        f"Built document model for '{schema_name}': {len(document.tables)} tables"
    )
    return document
