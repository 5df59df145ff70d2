# src/ruled_table_extractor/rows.py
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
import logging

from .axes import canonical_axis
from .postprocess import drop_trailing_folio, is_section_terminator
from .structures import DEFAULT_TOLERANCE, TextRun

log = logging.getLogger(__name__)


@dataclass
class TextRow:
    """Fila visual de prosa: fragmentos con la misma línea base, de izquierda a derecha."""
    y: float
    runs: List[TextRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


def group_runs_into_rows(runs: Sequence[TextRun],
                         tolerance: float = DEFAULT_TOLERANCE,
                         top: Optional[float] = None,
                         bottom: Optional[float] = None) -> List[TextRow]:
    """Agrupa fragmentos por línea base dentro de la ventana vertical [top, bottom].

    Las líneas base se canonizan con la misma tolerancia que los ejes de tabla.
    """
    window = [r for r in runs
              if (top is None or r.y >= top) and (bottom is None or r.y <= bottom)]
    if not window:
        return []

    baselines = canonical_axis((r.y for r in window), tolerance)
    buckets: Dict[float, List[TextRun]] = defaultdict(list)
    for run in window:
        buckets[baselines.snap(run.y)].append(run)

    # sorted es estable: a igual x se respeta el orden del documento
    return [TextRow(y=y, runs=sorted(bucket, key=lambda r: r.x))
            for y, bucket in sorted(buckets.items())]


class SectionAccumulator:
    """Acumula filas de prosa y corta secciones en cada fila terminadora.

    El búfer sobrevive entre llamadas a `feed`, así una sección puede
    continuar en la página siguiente.
    """

    def __init__(self) -> None:
        self._buffer: List[str] = []

    @property
    def pending(self) -> str:
        return "".join(self._buffer)

    def feed(self, rows: Sequence[TextRow]) -> List[str]:
        sections: List[str] = []
        for row in rows:
            if is_section_terminator(row):
                section = self.flush()
                if section is not None:
                    sections.append(section)
                continue
            self._buffer.append(row.text)
        return sections

    def flush(self) -> Optional[str]:
        text = self.pending
        self._buffer = []
        return text if text else None


def page_rows(runs: Sequence[TextRun],
              tolerance: float = DEFAULT_TOLERANCE,
              top: Optional[float] = None,
              bottom: Optional[float] = None,
              drop_folio: bool = True) -> List[TextRow]:
    rows = group_runs_into_rows(runs, tolerance=tolerance, top=top, bottom=bottom)
    if drop_folio:
        kept = drop_trailing_folio(rows)
        if len(kept) != len(rows):
            log.debug("Se descartó la última fila como número de página: %r", rows[-1].text)
        rows = kept
    return rows


def extract_sections(runs: Sequence[TextRun],
                     tolerance: float = DEFAULT_TOLERANCE,
                     top: Optional[float] = None,
                     bottom: Optional[float] = None,
                     drop_folio: bool = True) -> List[str]:
    """Secciones de prosa de una sola página (el resto sin terminar se emite al final)."""
    acc = SectionAccumulator()
    sections = acc.feed(page_rows(runs, tolerance, top, bottom, drop_folio))
    tail = acc.flush()
    if tail is not None:
        sections.append(tail)
    return sections
