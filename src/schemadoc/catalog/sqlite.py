"""Catalog reader for SQLite (sqlite_master and PRAGMA)."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from schemadoc.catalog.base import BaseCatalogReader

PRIMARY_INDEX_NAME = "PRIMARY"

_DECLARED_TYPE = re.compile(r"^\s*([a-zA-Z_][\w ]*?)\s*(?:\((.*)\))?\s*$", re.DOTALL)
_IDENTIFIER = r'(?:"(?:[^"]|"")*"|`[^`]*`|\[[^\]]*\]|\w+)'
_TRIGGER_HEADER = re.compile(
    r"\bTRIGGER\s+(?:IF\s+NOT\s+EXISTS\s+)?"
    rf"(?:{_IDENTIFIER}\s*\.\s*)?{_IDENTIFIER}"
    r"(?P<header>.*?)\bON\b",
    re.IGNORECASE | re.DOTALL,
)
_TRIGGER_TIMING = re.compile(r"\b(BEFORE|AFTER|INSTEAD\s+OF)\b", re.IGNORECASE)
_TRIGGER_EVENT = re.compile(r"\b(DELETE|INSERT|UPDATE)\b", re.IGNORECASE)
_TRIGGER_BODY = re.compile(r"\bBEGIN\b.*$", re.IGNORECASE | re.DOTALL)
_AUTOINCREMENT = re.compile(r"\bAUTOINCREMENT\b", re.IGNORECASE)


def parse_trigger_sql(sql: str) -> Dict[str, str]:
    """Extract timing, event and body from a ``CREATE TRIGGER`` statement.

    SQLite defaults to BEFORE when no timing is written.
    """
    sql = sql or ""
    header_match = _TRIGGER_HEADER.search(sql)
    header = header_match.group("header") if header_match else ""

    timing_match = _TRIGGER_TIMING.search(header)
    event_match = _TRIGGER_EVENT.search(header)
    body_match = _TRIGGER_BODY.search(sql)

    return {
        "action_timing": (
            " ".join(timing_match.group(1).upper().split()) if timing_match else "BEFORE"
        ),
        "event_manipulation": event_match.group(1).upper() if event_match else "",
        "action_statement": body_match.group(0).strip() if body_match else sql.strip(),
    }


class SQLiteCatalogReader(BaseCatalogReader):
    """Read SQLite catalog metadata.

    The schema name is the attached database name, ``main`` for the file
    the engine was opened on.

    Example:
        >>> reader = SQLiteCatalogReader("sqlite:///app.db")
        >>> reader.list_tables("main")
    """

    dialect = "sqlite"

    def _master(self, schema: str) -> str:
        return f"{self.quote(schema)}.sqlite_master"

    def _pragma(self, stage: str, schema: str, pragma: str, argument: str) -> List[Dict[str, Any]]:
        return self._query(
            stage, f"PRAGMA {self.quote(schema)}.{pragma}({self.quote(argument)})"
        )

    def list_tables(self, schema: str) -> List[str]:
        """Tables and views in creation order, internal tables excluded."""
        rows = self._query(
            "list tables",
            f"""
            select name
            from {self._master(schema)}
            where type in ('table', 'view')
            and name not like 'sqlite\\_%' escape '\\'
            order by rowid
            """,
        )
        return [row["name"] for row in rows]

    def _table_sql(self, schema: str, table_name: str) -> str:
        rows = self._query(
            f"definition of {table_name}",
            f"select sql from {self._master(schema)} where type = 'table' and name = :name",
            name=table_name,
        )
        return (rows[0]["sql"] or "") if rows else ""

    def _primary_key_columns(self, schema: str, table_name: str) -> List[str]:
        info = self._pragma(f"columns of {table_name}", schema, "table_info", table_name)
        pk = sorted((row for row in info if row["pk"]), key=lambda row: row["pk"])
        return [row["name"] for row in pk]

    def _unique_columns(self, schema: str, table_name: str) -> set:
        """Columns covered on their own by a unique, non-primary index."""
        unique = set()
        for index in self._pragma(f"indexes of {table_name}", schema, "index_list", table_name):
            if not index["unique"] or index.get("origin") == "pk":
                continue
            columns = self._pragma(
                f"index {index['name']}", schema, "index_info", index["name"]
            )
            if len(columns) == 1 and columns[0]["name"] is not None:
                unique.add(columns[0]["name"])
        return unique

    def list_columns(self, schema: str, table_name: str) -> List[Dict[str, Any]]:
        info = self._pragma(f"columns of {table_name}", schema, "table_info", table_name)
        pk_columns = [row for row in info if row["pk"]]
        unique_columns = self._unique_columns(schema, table_name)
        has_autoincrement = bool(_AUTOINCREMENT.search(self._table_sql(schema, table_name)))

        columns = []
        for row in info:
            declared = row["type"] or ""
            data_type, length = self._split_declared_type(declared)

            key = ""
            if row["pk"]:
                key = "PRI"
            elif row["name"] in unique_columns:
                key = "UNI"

            # A lone INTEGER PRIMARY KEY aliases the rowid and is assigned automatically
            extra = ""
            if row["pk"] and len(pk_columns) == 1 and declared.upper() == "INTEGER":
                extra = "auto_increment"
            elif row["pk"] and has_autoincrement:
                extra = "auto_increment"

            columns.append(
                {
                    "name": row["name"],
                    "type": declared,
                    "data_type": data_type,
                    "length": length,
                    "character_maximum_length": None,
                    "display": None,
                    "options": [],
                    "key": key,
                    "extra": extra,
                    "nullable": not row["notnull"] and not row["pk"],
                    "default": row["dflt_value"],
                    "comment": "",
                }
            )
        return columns

    @staticmethod
    def _split_declared_type(declared: str):
        match = _DECLARED_TYPE.match(declared)
        if not match:
            return (declared.lower() or None), None
        length = match.group(2).strip() if match.group(2) is not None else None
        return match.group(1).strip().lower(), length

    def list_foreign_keys(self, schema: str) -> List[Dict[str, Any]]:
        rows = []
        for table_name in self.list_tables(schema):
            for fk in self._pragma(
                f"foreign keys of {table_name}", schema, "foreign_key_list", table_name
            ):
                referenced_column = fk["to"]
                if referenced_column is None:
                    referenced_column = self._implicit_parent_column(schema, fk["table"])
                rows.append(
                    {
                        "table_name": table_name,
                        "column_name": fk["from"],
                        "referenced_table_name": fk["table"],
                        "referenced_column_name": referenced_column,
                    }
                )
        return rows

    def _implicit_parent_column(self, schema: str, parent_table: str) -> Optional[str]:
        # REFERENCES parent without a column list targets the parent's primary key
        pk = self._primary_key_columns(schema, parent_table)
        return pk[0] if len(pk) == 1 else None

    def list_indexes(self, schema: str) -> List[Dict[str, Any]]:
        rows = []
        for table_name in self.list_tables(schema):
            indexes = self._pragma(
                f"indexes of {table_name}", schema, "index_list", table_name
            )
            if not any(index.get("origin") == "pk" for index in indexes):
                for seq, column in enumerate(self._primary_key_columns(schema, table_name), 1):
                    rows.append(
                        {
                            "table_name": table_name,
                            "index_name": PRIMARY_INDEX_NAME,
                            "non_unique": 0,
                            "column_name": column,
                            "comment": "",
                            "seq_in_index": seq,
                        }
                    )

            for index in indexes:
                index_name = (
                    PRIMARY_INDEX_NAME if index.get("origin") == "pk" else index["name"]
                )
                columns = self._pragma(
                    f"index {index['name']}", schema, "index_info", index["name"]
                )
                for column in sorted(columns, key=lambda c: c["seqno"]):
                    if column["name"] is None:
                        # expression index column
                        continue
                    rows.append(
                        {
                            "table_name": table_name,
                            "index_name": index_name,
                            "non_unique": 0 if index["unique"] else 1,
                            "column_name": column["name"],
                            "comment": "",
                            "seq_in_index": column["seqno"] + 1,
                        }
                    )
        return rows

    def list_triggers(self, schema: str) -> List[Dict[str, Any]]:
        rows = self._query(
            "triggers",
            f"""
            select name, tbl_name, sql
            from {self._master(schema)}
            where type = 'trigger'
            order by rowid
            """,
        )
        triggers = []
        for row in rows:
            parsed = parse_trigger_sql(row["sql"])
            triggers.append(
                {
                    "trigger_name": row["name"],
                    "event_manipulation": parsed["event_manipulation"],
                    "event_object_table": row["tbl_name"],
                    "action_statement": parsed["action_statement"],
                    "action_timing": parsed["action_timing"],
                    "definer": "",
                }
            )
        return triggers
