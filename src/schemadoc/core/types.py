"""Schema data types and models.

Catalog rows arrive as loosely-typed dicts. The ``*Record.from_row``
constructors turn them into typed records once, at ingestion, so the
resolver and annotator never re-check field presence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

Row = Mapping[str, Any]


def _lower_keys(row: Row) -> Dict[str, Any]:
    # MySQL returns information_schema column names upper-cased
    return {str(k).lower(): v for k, v in row.items()}


def _text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text if text != "" else None


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "yes", "true", "y")
    try:
        return bool(int(value))
    except (TypeError, ValueError):
        return False


def _int_or_none(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class ColumnRecord:
    """A column as reported by the catalog."""

    name: str
    type: str = ""
    data_type: Optional[str] = None
    length: Any = None
    character_maximum_length: Any = None
    display: Any = None
    options: Tuple[str, ...] = ()
    key: str = ""
    extra: str = ""
    nullable: bool = True
    default: Optional[str] = None
    comment: str = ""

    @classmethod
    def from_row(cls, row: Row) -> ColumnRecord:
        """Build a record from a catalog row, treating bad fields as absent."""
        data = _lower_keys(row)

        options = data.get("options") or ()
        if isinstance(options, str):
            options = (options,)
        try:
            options = tuple(_text(o) for o in options)
        except TypeError:
            options = ()

        nullable = data.get("nullable")
        if nullable is None:
            nullable = True
        elif not isinstance(nullable, bool):
            nullable = _flag(nullable)

        return cls(
            name=_text(data.get("name")),
            type=_text(data.get("type")),
            data_type=_optional_text(data.get("data_type")),
            length=data.get("length"),
            character_maximum_length=data.get("character_maximum_length"),
            display=data.get("display"),
            options=options,
            key=_text(data.get("key")),
            extra=_text(data.get("extra")),
            nullable=nullable,
            default=_optional_text(data.get("default")),
            comment=_text(data.get("comment")),
        )


@dataclass(frozen=True)
class ForeignKeyRecord:
    """A row of declared foreign-key constraint metadata."""

    table_name: str
    column_name: str
    referenced_table_name: Optional[str]
    referenced_column_name: Optional[str]

    @classmethod
    def from_row(cls, row: Row) -> ForeignKeyRecord:
        data = _lower_keys(row)
        return cls(
            table_name=_text(data.get("table_name")),
            column_name=_text(data.get("column_name")),
            referenced_table_name=_optional_text(data.get("referenced_table_name")),
            referenced_column_name=_optional_text(data.get("referenced_column_name")),
        )


@dataclass(frozen=True)
class IndexRecord:
    """One (index, column) row of index metadata."""

    table_name: str
    index_name: str
    column_name: str
    non_unique: bool = True
    comment: str = ""
    seq_in_index: Optional[int] = None

    @classmethod
    def from_row(cls, row: Row) -> IndexRecord:
        data = _lower_keys(row)
        return cls(
            table_name=_text(data.get("table_name")),
            index_name=_text(data.get("index_name")),
            column_name=_text(data.get("column_name")),
            non_unique=_flag(data.get("non_unique", 1)),
            comment=_text(data.get("comment")),
            seq_in_index=_int_or_none(data.get("seq_in_index")),
        )


@dataclass(frozen=True)
class TriggerRecord:
    """A trigger definition row."""

    trigger_name: str
    event_manipulation: str
    event_object_table: str
    action_statement: str = ""
    action_timing: str = ""
    definer: str = ""

    @classmethod
    def from_row(cls, row: Row) -> TriggerRecord:
        data = _lower_keys(row)
        return cls(
            trigger_name=_text(data.get("trigger_name")),
            event_manipulation=_text(data.get("event_manipulation")),
            event_object_table=_text(data.get("event_object_table")),
            action_statement=_text(data.get("action_statement")),
            action_timing=_text(data.get("action_timing")),
            definer=_text(data.get("definer")),
        )


@dataclass(frozen=True)
class ForeignKey:
    """Declared foreign key relationship."""

    table_name: str
    column_name: str
    referenced_table_name: str
    referenced_column_name: str

    def __repr__(self) -> str:
        return (
            f"FK({self.table_name}.{self.column_name} -> "
            f"{self.referenced_table_name}.{self.referenced_column_name})"
        )


@dataclass(frozen=True)
class ResolvedForeignKey:
    """Parent reference shown for a column, declared or inferred.

    Both referenced fields are None when nothing was resolved.
    """

    referenced_table_name: Optional[str] = None
    referenced_column_name: Optional[str] = None
    inferred: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.referenced_table_name is not None

    def __str__(self) -> str:
        if not self.is_resolved:
            return ""
        return f"{self.referenced_table_name}.{self.referenced_column_name}"


UNRESOLVED = ResolvedForeignKey()


@dataclass(frozen=True)
class IndexColumn:
    """Per-column metadata inside an index."""

    column_name: str
    non_unique: bool = True
    comment: str = ""
    seq_in_index: Optional[int] = None


@dataclass
class Index:
    """An index and its participating columns, in catalog row order."""

    name: str
    columns: Dict[str, IndexColumn] = field(default_factory=dict)

    @property
    def unique(self) -> bool:
        return bool(self.columns) and not any(
            c.non_unique for c in self.columns.values()
        )


@dataclass(frozen=True)
class Trigger:
    """A trigger attached to a table."""

    name: str
    event: str
    table_name: str
    statement: str = ""
    timing: str = ""
    definer: str = ""


@dataclass(frozen=True)
class AnnotatedColumn:
    """A catalog column plus the display fields derived from it."""

    column: ColumnRecord
    display_type: str
    display_length: Any
    badges: Tuple[str, ...]
    resolved_foreign_key: ResolvedForeignKey = UNRESOLVED

    @property
    def name(self) -> str:
        return self.column.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.column.name,
            "type": self.column.type,
            "display_type": self.display_type,
            "display_length": self.display_length,
            "nullable": self.column.nullable,
            "default": self.column.default,
            "comment": self.column.comment,
            "badges": list(self.badges),
            "foreign_key": (
                {
                    "referenced_table_name": self.resolved_foreign_key.referenced_table_name,
                    "referenced_column_name": self.resolved_foreign_key.referenced_column_name,
                    "inferred": self.resolved_foreign_key.inferred,
                }
                if self.resolved_foreign_key.is_resolved
                else None
            ),
        }


@dataclass
class Table:
    """Metadata for a single documented table."""

    name: str
    columns: List[AnnotatedColumn] = field(default_factory=list)
    indexes: Dict[str, Index] = field(default_factory=dict)
    foreign_keys: Dict[str, ForeignKey] = field(default_factory=dict)
    triggers: List[Trigger] = field(default_factory=list)

    def column(self, name: str) -> Optional[AnnotatedColumn]:
        for col in self.columns:
            if col.name == name:
                return col
        return None

    def __repr__(self) -> str:
        return (
            f"Table({self.name}, columns={len(self.columns)}, "
            f"indexes={len(self.indexes)}, fks={len(self.foreign_keys)}, "
            f"triggers={len(self.triggers)})"
        )
