# src/ruled_table_extractor/postprocess.py
from __future__ import annotations
from typing import TYPE_CHECKING, List
import re

if TYPE_CHECKING:
    from .rows import TextRow

FOLIO_RE = re.compile(r"^[+-]?\d+$")  # número de página suelto, p.ej. "12"


def is_folio_number(text: str) -> bool:
    return bool(FOLIO_RE.match((text or "").strip()))


def is_section_terminator(row: "TextRow") -> bool:
    """Fila con un único fragmento que es exactamente un carácter de espacio."""
    if len(row.runs) != 1:
        return False
    text = row.runs[0].text
    return len(text) == 1 and text.isspace()


def drop_trailing_folio(rows: List["TextRow"]) -> List["TextRow"]:
    """Quita la última fila si es un número suelto (heurística: folio de página).

    No hay garantía: una última línea numérica legítima también se descarta.
    """
    if rows and len(rows[-1].runs) == 1 and is_folio_number(rows[-1].runs[0].text):
        return rows[:-1]
    return rows
