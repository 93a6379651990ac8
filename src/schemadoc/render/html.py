"""Static HTML rendering of a document model."""

from __future__ import annotations

import re
from html import escape
from pathlib import Path
from typing import Any, List, Optional

from schemadoc.core.document import DocumentModel
from schemadoc.core.types import AnnotatedColumn, Table
from schemadoc.errors import OutputTargetError
from schemadoc.utils.logging import get_logger

logger = get_logger(__name__)

NAV_PAGES = [
    ("index.html", "Summary"),
    ("tables.html", "Tables"),
    ("indexes.html", "Indexes"),
    ("triggers.html", "Triggers"),
]


def table_filename(table_name: str) -> str:
    """Page file name for a table (``table_<name>.html``)."""
    safe = re.sub(r"[^\w\-.]", "_", table_name)
    return f"table_{safe}.html"


def _e(value: Any) -> str:
    if value is None:
        return ""
    return escape(str(value), quote=True)


class HTMLRenderer:
    """Write the documentation pages for a document model.

    Pages link to ``assets/schemadoc.css``; the caller is expected to have
    prepared the directory and copied the assets.
    """

    def __init__(self, output_dir: str | Path, title: Optional[str] = None):
        self.output_dir = Path(output_dir)
        self.title = title or "Database Documentation"

    def render(self, document: DocumentModel) -> List[Path]:
        """Render every page.

        Args:
            document: Fully built document model

        Returns:
            Paths of the written pages, in write order

        Raises:
            OutputTargetError: If a page cannot be written
        """
        pages = [
            ("index.html", "Summary", self._summary_body(document)),
            ("tables.html", "Tables", self._tables_body(document)),
        ]
        for table in document.tables.values():
            pages.append(
                (table_filename(table.name), table.name, self._table_body(table))
            )
        pages.append(("indexes.html", "Indexes", self._indexes_body(document)))
        pages.append(("triggers.html", "Triggers", self._triggers_body(document)))

        written = []
        for filename, heading, body in pages:
            written.append(
                self._write(filename, self._layout(document, filename, heading, body))
            )

        logger.info(f"Rendered {len(written)} pages to {self.output_dir}")
        return written

    def _write(self, filename: str, content: str) -> Path:
        path = self.output_dir / filename
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise OutputTargetError(f'Could not write "{path}": {e}') from e
        logger.debug(f"Wrote {path}")
        return path

    def _layout(
        self, document: DocumentModel, filename: str, heading: str, body: str
    ) -> str:
        links = []
        for href, label in NAV_PAGES:
            active = ' class="active"' if href == filename else ""
            links.append(f'<a href="{href}"{active}>{label}</a>')
        nav = "\n".join(links)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{_e(heading)} - {_e(document.schema_name)} - {_e(self.title)}</title>
    <link rel="stylesheet" href="assets/schemadoc.css">
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{_e(self.title)}</h1>
            <div class="subtitle">{_e(document.schema_name)} &middot; generated {_e(document.generated_at.isoformat())}</div>
        </div>
        <div class="nav">
            {nav}
        </div>
        <div class="content">
            <h2>{_e(heading)}</h2>
{body}
        </div>
    </div>
</body>
</html>"""

    def _summary_body(self, document: DocumentModel) -> str:
        summary = document.summary()
        stats = [
            ("Schema", summary["schema_name"]),
            ("Tables", summary["num_tables"]),
            ("Columns", summary["num_columns"]),
            ("Foreign Keys", summary["num_foreign_keys"]),
            ("Inferred References", summary["num_inferred_foreign_keys"]),
            ("Indexes", summary["num_indexes"]),
            ("Triggers", summary["num_triggers"]),
        ]
        stats_html = "\n".join(
            f'<div class="stat"><div class="stat-label">{_e(label)}</div>'
            f'<div class="stat-value">{_e(value)}</div></div>'
            for label, value in stats
        )

        migration = summary["migration"]
        if migration:
            rows = "\n".join(
                f"<tr><th>{_e(key)}</th><td>{_e(value)}</td></tr>"
                for key, value in migration.items()
            )
            migration_html = f'<table class="grid">\n{rows}\n</table>'
        else:
            migration_html = '<p class="empty">No migration information</p>'

        return f"""<div class="stats">
{stats_html}
</div>
<h2>Latest Migration</h2>
{migration_html}"""

    def _tables_body(self, document: DocumentModel) -> str:
        rows = []
        for table in document.tables.values():
            rows.append(
                f'<tr><td><a href="{_e(table_filename(table.name))}">{_e(table.name)}</a></td>'
                f"<td>{len(table.columns)}</td>"
                f"<td>{len(table.indexes)}</td>"
                f"<td>{len(table.foreign_keys)}</td>"
                f"<td>{len(table.triggers)}</td></tr>"
            )
        return (
            '<table class="grid">\n'
            "<tr><th>Table</th><th>Columns</th><th>Indexes</th>"
            "<th>Foreign Keys</th><th>Triggers</th></tr>\n"
            + "\n".join(rows)
            + "\n</table>"
        )

    def _table_body(self, table: Table) -> str:
        column_rows = "\n".join(self._column_row(col) for col in table.columns)
        columns_html = (
            '<table class="grid">\n'
            "<tr><th>Column</th><th>Type</th><th>Length</th><th>Null</th>"
            "<th>Default</th><th>Attributes</th><th>References</th>"
            "<th>Comment</th></tr>\n"
            f"{column_rows}\n</table>"
        )

        if table.indexes:
            index_rows = "\n".join(
                f"<tr><td>{_e(index.name)}</td>"
                f"<td>{'yes' if index.unique else 'no'}</td>"
                f"<td>{_e(', '.join(index.columns))}</td></tr>"
                for index in table.indexes.values()
            )
            indexes_html = (
                '<table class="grid">\n'
                "<tr><th>Index</th><th>Unique</th><th>Columns</th></tr>\n"
                f"{index_rows}\n</table>"
            )
        else:
            indexes_html = '<p class="empty">No indexes</p>'

        if table.triggers:
            trigger_rows = "\n".join(
                f"<tr><td>{_e(t.name)}</td><td>{_e(t.timing)} {_e(t.event)}</td>"
                f"<td><pre>{_e(t.statement)}</pre></td></tr>"
                for t in table.triggers
            )
            triggers_html = (
                '<table class="grid">\n'
                "<tr><th>Trigger</th><th>Event</th><th>Statement</th></tr>\n"
                f"{trigger_rows}\n</table>"
            )
        else:
            triggers_html = '<p class="empty">No triggers</p>'

        return f"""{columns_html}
<h2>Indexes</h2>
{indexes_html}
<h2>Triggers</h2>
{triggers_html}"""

    def _column_row(self, col: AnnotatedColumn) -> str:
        badges = "".join(
            f'<span class="badge badge-{_e(b)}">{_e(b)}</span>' for b in col.badges
        )

        ref = col.resolved_foreign_key
        if ref.is_resolved:
            link = (
                f'<a href="{_e(table_filename(ref.referenced_table_name))}">'
                f"{_e(str(ref))}</a>"
            )
            if ref.inferred:
                reference = f'<span class="inferred" title="Inferred from column name">{link} (inferred)</span>'
            else:
                reference = link
        else:
            reference = ""

        return (
            f"<tr><td>{_e(col.name)}</td>"
            f"<td>{_e(col.display_type)}</td>"
            f"<td>{_e(col.display_length)}</td>"
            f"<td>{'YES' if col.column.nullable else 'NO'}</td>"
            f"<td>{_e(col.column.default)}</td>"
            f"<td>{badges}</td>"
            f"<td>{reference}</td>"
            f"<td>{_e(col.column.comment)}</td></tr>"
        )

    def _indexes_body(self, document: DocumentModel) -> str:
        if not document.indexes:
            return '<p class="empty">No indexes</p>'

        rows = []
        for table_name, index in document.indexes:
            for column in index.columns.values():
                rows.append(
                    f'<tr><td><a href="{_e(table_filename(table_name))}">{_e(table_name)}</a></td>'
                    f"<td>{_e(index.name)}</td>"
                    f"<td>{_e(column.column_name)}</td>"
                    f"<td>{_e(column.seq_in_index)}</td>"
                    f"<td>{'no' if column.non_unique else 'yes'}</td>"
                    f"<td>{_e(column.comment)}</td></tr>"
                )
        return (
            '<table class="grid">\n'
            "<tr><th>Table</th><th>Index</th><th>Column</th><th>Seq</th>"
            "<th>Unique</th><th>Comment</th></tr>\n"
            + "\n".join(rows)
            + "\n</table>"
        )

    def _triggers_body(self, document: DocumentModel) -> str:
        if not document.triggers:
            return '<p class="empty">No triggers</p>'

        rows = "\n".join(
            f"<tr><td>{_e(t.name)}</td>"
            f'<td><a href="{_e(table_filename(t.table_name))}">{_e(t.table_name)}</a></td>'
            f"<td>{_e(t.timing)}</td><td>{_e(t.event)}</td>"
            f"<td>{_e(t.definer)}</td>"
            f"<td><pre>{_e(t.statement)}</pre></td></tr>"
            for t in document.triggers
        )
        return (
            '<table class="grid">\n'
            "<tr><th>Trigger</th><th>Table</th><th>Timing</th><th>Event</th>"
            "<th>Definer</th><th>Statement</th></tr>\n"
            f"{rows}\n</table>"
        )
