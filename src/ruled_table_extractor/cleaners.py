# src/ruled_table_extractor/cleaners.py
from __future__ import annotations
import logging
from typing import List, Sequence

from .structures import DEFAULT_TOLERANCE, Point, Rect, TextRun

log = logging.getLogger(__name__)


def normalize_rect(rect: Rect, content_height: float) -> Rect:
    """Pasa un rect del sistema nativo (origen abajo) al sistema de arriba hacia abajo.

    Solo se invierte el eje y: min=(x0, H-y1), max=(x1, H-y0). Las esquinas se
    ordenan antes, así que min <= max se cumple aunque la fuente las dé al revés.
    """
    x0, x1 = sorted((rect.min.x, rect.max.x))
    y0, y1 = sorted((rect.min.y, rect.max.y))
    return Rect(Point(x0, content_height - y1), Point(x1, content_height - y0))


def normalize_text_run(run: TextRun, content_height: float) -> TextRun:
    return TextRun(x=run.x, y=content_height - run.y, text=run.text)


def filter_minimal_rects(rects: Sequence[Rect],
                         tolerance: float = DEFAULT_TOLERANCE,
                         mode: str = "forward") -> List[Rect]:
    """Descarta rects contenidos en otro (trazos de borde duplicados).

    mode="forward": R se descarta si algún R' POSTERIOR en la secuencia lo
    contiene. Depende del orden de dibujo.
    mode="bidirectional": R se descarta si cualquier otro R' lo contiene; en
    parejas mutuamente contenidas (duplicados) se conserva la última.
    """
    kept: List[Rect] = []
    n = len(rects)
    for i, rect in enumerate(rects):
        if mode == "forward":
            others = range(i + 1, n)
        else:
            others = (j for j in range(n) if j != i)
        discard = False
        for j in others:
            outer = rects[j]
            if not outer.contains(rect, tolerance):
                continue
            if j < i and rect.contains(outer, tolerance):
                # duplicado anterior: ya se descartó el otro
                continue
            discard = True
            break
        if not discard:
            kept.append(rect)
    if len(kept) != n:
        log.debug("Filtrado de rects mínimos: %d -> %d", n, len(kept))
    return kept


def normalize_page_rects(rects: Sequence[Rect],
                         content_height: float,
                         tolerance: float = DEFAULT_TOLERANCE,
                         mode: str = "forward") -> List[Rect]:
    """Inversión de eje + filtrado de rects mínimos, en ese orden."""
    flipped = [normalize_rect(r, content_height) for r in rects]
    return filter_minimal_rects(flipped, tolerance=tolerance, mode=mode)


def clean_cell_text(text: str) -> str:
    """Limpia el texto de un fragmento dentro de una celda."""
    return (text or "").strip()
