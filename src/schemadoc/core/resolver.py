"""Merging of foreign keys, indexes and triggers into table records."""

from __future__ import annotations

from typing import Dict, Iterable, List, Union

from schemadoc.core.types import (
    ForeignKey,
    ForeignKeyRecord,
    Index,
    IndexColumn,
    IndexRecord,
    Row,
    Table,
    Trigger,
    TriggerRecord,
)
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)


def _records(rows: Iterable[Union[Row, object]], record_type) -> List:
    return [r if isinstance(r, record_type) else record_type.from_row(r) for r in rows]


class RelationshipResolver:
    """Attach catalog relationship rows to the admitted tables.

    Rows that belong to a table outside the admitted set reference an
    out-of-scope dependency and are dropped without error.

    Example:
        >>> resolver = RelationshipResolver()
        >>> tables = resolver.resolve(["users", "posts"], fk_rows, index_rows, trigger_rows)
        >>> tables["posts"].foreign_keys
    """

    def resolve(
        self,
        admitted_tables: Iterable[str],
        fk_rows: Iterable[Row],
        index_rows: Iterable[Row],
        trigger_rows: Iterable[Row],
    ) -> Dict[str, Table]:
        """Build tables with their foreign key, index and trigger maps populated.

        Args:
            admitted_tables: Table names to document, in display order
            fk_rows: Declared foreign key rows
            index_rows: Index rows, one per (index, column)
            trigger_rows: Trigger rows in catalog order

        Returns:
            Dict mapping table_name -> Table, in admitted order
        """
        tables = {name: Table(name=name) for name in admitted_tables}

        self._attach_foreign_keys(tables, _records(fk_rows, ForeignKeyRecord))
        self._attach_indexes(tables, _records(index_rows, IndexRecord))
        self._attach_triggers(tables, _records(trigger_rows, TriggerRecord))

        logger.info(
            f"Resolved {sum(len(t.foreign_keys) for t in tables.values())} foreign keys, "
            f"{sum(len(t.indexes) for t in tables.values())} indexes, "
            f"{sum(len(t.triggers) for t in tables.values())} triggers"
        )

        return tables

    def _attach_foreign_keys(
        self, tables: Dict[str, Table], records: List[ForeignKeyRecord]
    ) -> None:
        for record in records:
            if record.referenced_table_name is None or record.referenced_column_name is None:
                continue
            table = tables.get(record.table_name)
            if table is None:
                logger.debug(f"Dropping FK on out-of-scope table {record.table_name}")
                continue
            table.foreign_keys[record.column_name] = ForeignKey(
                table_name=record.table_name,
                column_name=record.column_name,
                referenced_table_name=record.referenced_table_name,
                referenced_column_name=record.referenced_column_name,
            )

    def _attach_indexes(
        self, tables: Dict[str, Table], records: List[IndexRecord]
    ) -> None:
        for record in records:
            table = tables.get(record.table_name)
            if table is None:
                continue
            index = table.indexes.get(record.index_name)
            if index is None:
                index = table.indexes[record.index_name] = Index(name=record.index_name)
            index.columns[record.column_name] = IndexColumn(
                column_name=record.column_name,
                non_unique=record.non_unique,
                comment=record.comment,
                seq_in_index=record.seq_in_index,
            )

    def _attach_triggers(
        self, tables: Dict[str, Table], records: List[TriggerRecord]
    ) -> None:
        for record in records:
            table = tables.get(record.event_object_table)
            if table is None:
                logger.debug(
                    f"Dropping trigger {record.trigger_name} on out-of-scope table "
                    f"{record.event_object_table}"
                )
                continue
            table.triggers.append(
                Trigger(
                    name=record.trigger_name,
                    event=record.event_manipulation,
                    table_name=record.event_object_table,
                    statement=record.action_statement,
                    timing=record.action_timing,
                    definer=record.definer,
                )
            )
