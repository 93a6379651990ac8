"""Naming-convention foreign key inference."""

from __future__ import annotations

from typing import Collection, Dict, List, Optional

from schemadoc.core.types import ResolvedForeignKey
from schemadoc.utils.inflector import pluralize, singularize
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)


class NamingConventionFKDetector:
    """Guess a column's parent table from its name.

    ``category_id`` points at ``category`` or ``categories``, whichever is
    an admitted table (singular checked first), referencing column ``id``.
    A guess is never raised as an error; no match simply means no inference.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize the detector.

        Args:
            config: Optional dict with ``enabled``, ``suffix`` and
                ``referenced_column`` keys
        """
        config = config or {}
        self.enabled = bool(config.get("enabled", True))
        self.suffix = config.get("suffix") or "_id"
        self.referenced_column = config.get("referenced_column") or "id"

    def infer(
        self, column_name: str, admitted_tables: Collection[str]
    ) -> Optional[ResolvedForeignKey]:
        """Infer a foreign key for ``column_name``.

        Args:
            column_name: Column name (e.g., 'customer_id')
            admitted_tables: Names of the tables being documented

        Returns:
            Inferred reference, or None when no admitted table matches
        """
        if not self.enabled:
            return None

        for parent_table in self._get_parent_candidates(column_name):
            if parent_table in admitted_tables:
                logger.debug(
                    f"Inferred {column_name} -> {parent_table}.{self.referenced_column}"
                )
                return ResolvedForeignKey(
                    referenced_table_name=parent_table,
                    referenced_column_name=self.referenced_column,
                    inferred=True,
                )

        return None

    def _get_parent_candidates(self, column_name: str) -> List[str]:
        """Get potential parent table names from a column name.

        Args:
            column_name: Column name (e.g., 'category_id')

        Returns:
            Candidate table names in priority order: singular, then plural
        """
        if not column_name or not column_name.endswith(self.suffix):
            return []

        base_name = column_name[: -len(self.suffix)]
        if not base_name:
            return []

        candidates = [singularize(base_name)]
        plural = pluralize(base_name)
        if plural not in candidates:
            candidates.append(plural)
        return candidates
