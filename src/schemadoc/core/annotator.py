"""Derived display fields for catalog columns."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Collection, FrozenSet, Iterable, List, Mapping, Optional

from schemadoc.core.fk_inference import NamingConventionFKDetector
from schemadoc.core.types import (
    UNRESOLVED,
    AnnotatedColumn,
    ColumnRecord,
    ForeignKey,
    ResolvedForeignKey,
)

DEFAULT_SENTINEL_LENGTHS = (65535, 16777215, 4294967295)

# Candidate fields for the displayed length, highest priority first
LENGTH_FIELDS = ("length", "character_maximum_length", "display")

BADGE_PRIMARY_KEY = "PK"
BADGE_UNIQUE = "UI"
BADGE_AUTO_INCREMENT = "AI"
BADGE_FOREIGN_KEY = "FK"


def _numeric_value(value: Any) -> Optional[int]:
    """Return ``value`` as an int when it is a whole number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        return int(value) if value == int(value) else None
    if isinstance(value, (str, bytes)):
        text = value.decode() if isinstance(value, bytes) else value
        text = text.strip()
        if text.isdigit():
            return int(text)
    return None


class ColumnAnnotator:
    """Compute display type, display length, badges and the parent reference."""

    def __init__(
        self,
        sentinel_lengths: Optional[Iterable[Any]] = None,
        fk_detector: Optional[NamingConventionFKDetector] = None,
    ):
        """Initialize the annotator.

        Args:
            sentinel_lengths: Length values meaning "unbounded" that are never
                displayed (default: MySQL text/blob maximums)
            fk_detector: Heuristic used when a column has no declared FK
        """
        if sentinel_lengths is None:
            sentinel_lengths = DEFAULT_SENTINEL_LENGTHS
        self.sentinel_lengths: FrozenSet[int] = frozenset(
            n for n in (_numeric_value(v) for v in sentinel_lengths) if n is not None
        )
        self.fk_detector = fk_detector or NamingConventionFKDetector()

    def annotate(
        self,
        column: ColumnRecord,
        table_foreign_keys: Mapping[str, ForeignKey],
        admitted_tables: Collection[str],
    ) -> AnnotatedColumn:
        """Annotate one column of a table.

        Args:
            column: Column record from the catalog
            table_foreign_keys: The owning table's declared FKs, keyed by column
            admitted_tables: Names of the tables being documented

        Returns:
            AnnotatedColumn
        """
        explicit = table_foreign_keys.get(column.name)
        resolved = self.resolve_foreign_key(column.name, explicit, admitted_tables)

        badges = self.badges(column)
        if explicit is not None or resolved.inferred:
            badges.append(BADGE_FOREIGN_KEY)

        return AnnotatedColumn(
            column=column,
            display_type=self.display_type(column),
            display_length=self.display_length(column),
            badges=tuple(badges),
            resolved_foreign_key=resolved,
        )

    def display_type(self, column: ColumnRecord) -> str:
        """Base type name, with the option list spelled out for enums."""
        data_type = column.data_type or column.type
        if data_type.lower() == "enum":
            options = "', '".join(column.options)
            return f"{data_type}('{options}')"
        return data_type

    def display_length(self, column: ColumnRecord) -> Any:
        """First length-like field that is set and is not a sentinel value."""
        for field_name in LENGTH_FIELDS:
            value = getattr(column, field_name)
            if value is None or value == "":
                continue
            if _numeric_value(value) in self.sentinel_lengths:
                continue
            return value
        return None

    def badges(self, column: ColumnRecord) -> List[str]:
        """Catalog-derived badges (PK, UI, AI), in display order."""
        badges = []
        key = column.key.lower()
        if "pri" in key:
            badges.append(BADGE_PRIMARY_KEY)
        if "uni" in key:
            badges.append(BADGE_UNIQUE)
        if "auto_increment" in column.extra.lower():
            badges.append(BADGE_AUTO_INCREMENT)
        return badges

    def resolve_foreign_key(
        self,
        column_name: str,
        explicit: Optional[ForeignKey],
        admitted_tables: Collection[str],
    ) -> ResolvedForeignKey:
        """Declared FK if any, else the naming heuristic, else unresolved.

        A declared FK to a table outside the admitted set resolves to
        nothing, and the heuristic is not consulted for it.
        """
        if explicit is not None:
            if explicit.referenced_table_name not in admitted_tables:
                return UNRESOLVED
            return ResolvedForeignKey(
                referenced_table_name=explicit.referenced_table_name,
                referenced_column_name=explicit.referenced_column_name,
                inferred=False,
            )

        return self.fk_detector.infer(column_name, admitted_tables) or UNRESOLVED
