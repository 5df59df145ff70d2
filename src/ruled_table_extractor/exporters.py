# src/ruled_table_extractor/exporters.py
from __future__ import annotations
from typing import List, Optional
import csv
import html

from .config import DEFAULT_TABLE_ATTRIBUTES
from .spatial import CellSpan, TableGrid

LINE_BREAK = "<br/>"


def _span_attrs(span: CellSpan) -> str:
    attrs = ""
    if span.colspan > 1:
        attrs += f' colspan="{span.colspan}"'
    if span.rowspan > 1:
        attrs += f' rowspan="{span.rowspan}"'
    return attrs


def _cell_markup(span: CellSpan) -> str:
    if span.is_gap:
        return f"<td{_span_attrs(span)} />"
    body = LINE_BREAK.join(html.escape(line, quote=False) for line in span.text.split("\n")) if span.text else ""
    return f"<td{_span_attrs(span)}>{body}</td>"


def render_table_html(table: TableGrid, attributes: Optional[str] = DEFAULT_TABLE_ATTRIBUTES) -> str:
    """Serializa la tabla: un <tr> por fila de la rejilla, colspan/rowspan solo si > 1."""
    open_tag = f"<table {attributes}>" if attributes else "<table>"
    parts = [open_tag]
    for row in table.rows():
        parts.append("<tr>")
        parts.extend(_cell_markup(span) for span in row)
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


def table_to_rows(table: TableGrid) -> List[List[str]]:
    """Expande la tabla a una matriz rectangular; el texto va en la esquina superior izquierda del span."""
    rows = [["" for _ in range(table.n_cols)] for _ in range(table.n_rows)]
    for span in table.spans:
        if span.text and not rows[span.row][span.col]:
            rows[span.row][span.col] = span.text
    return rows


def rows_to_csv(rows: List[List[str]], header: List[str], csv_path: str) -> None:
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        if header:
            w.writerow(header)
        w.writerows(rows)
