# src/ruled_table_extractor/spatial.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .structures import Rect, TextRun

NO_OWNER = -1


class CellState(IntEnum):
    """Estado de una celda de la rejilla."""
    EMPTY = 0
    OCCUPIED = 1
    EMITTED_GAP = 2


@dataclass
class CellGrid:
    """Rejilla efímera de un bloque: dueño (id de rect) y estado por celda."""
    x_bounds: np.ndarray
    y_bounds: np.ndarray
    rects: List[Rect]
    owner: np.ndarray
    state: np.ndarray

    @classmethod
    def allocate(cls, x_bounds: np.ndarray, y_bounds: np.ndarray, rects: List[Rect]) -> "CellGrid":
        shape = (max(len(y_bounds) - 1, 0), max(len(x_bounds) - 1, 0))
        return cls(
            x_bounds=x_bounds,
            y_bounds=y_bounds,
            rects=list(rects),
            owner=np.full(shape, NO_OWNER, dtype=np.int32),
            state=np.full(shape, CellState.EMPTY, dtype=np.uint8),
        )

    @property
    def n_rows(self) -> int:
        return int(self.owner.shape[0])

    @property
    def n_cols(self) -> int:
        return int(self.owner.shape[1])

    def is_empty(self) -> bool:
        return self.n_rows == 0 or self.n_cols == 0

    def owner_at(self, row: int, col: int) -> Optional[int]:
        if self.state[row, col] != CellState.OCCUPIED:
            return None
        return int(self.owner[row, col])

    def stamp(self, rect_id: int, rows: Tuple[int, int], cols: Tuple[int, int]) -> List[Tuple[int, int, int]]:
        """Marca el rect en [r0, r1) x [c0, c1). Devuelve las celdas que ya tenían dueño."""
        r0, r1 = rows
        c0, c1 = cols
        region = self.owner[r0:r1, c0:c1]
        taken = np.argwhere((region != NO_OWNER) & (region != rect_id))
        overwritten = [(r0 + int(r), c0 + int(c), int(region[r, c])) for r, c in taken]
        region[...] = rect_id
        self.state[r0:r1, c0:c1] = CellState.OCCUPIED
        return overwritten

    def to_ascii(self) -> str:
        """Mapa O/X de ocupación, útil en logs de depuración."""
        lines = []
        for row in range(self.n_rows):
            lines.append(" ".join("O" if self.state[row, col] == CellState.OCCUPIED else "X"
                                  for col in range(self.n_cols)))
        return "\n".join(lines)


@dataclass
class CellSpan:
    """Una celda emitida: región rowspan x colspan de la rejilla."""
    row: int
    col: int
    rowspan: int = 1
    colspan: int = 1
    rect_id: Optional[int] = None
    runs: List[TextRun] = field(default_factory=list)
    text: str = ""

    @property
    def is_gap(self) -> bool:
        return self.rect_id is None


@dataclass
class TableGrid:
    """Tabla reconstruida de un bloque."""
    n_rows: int
    n_cols: int
    spans: List[CellSpan]
    rects: List[Rect] = field(default_factory=list)
    block_index: int = 0

    def rows(self) -> List[List[CellSpan]]:
        """Spans agrupados por su fila de inicio, uno por fila de la rejilla."""
        by_row: Dict[int, List[CellSpan]] = {i: [] for i in range(self.n_rows)}
        for span in self.spans:
            by_row[span.row].append(span)
        return [by_row[i] for i in range(self.n_rows)]

    def bound_runs(self) -> List[TextRun]:
        return [run for span in self.spans for run in span.runs]


@dataclass
class PageResult:
    """Salida de una página: tablas, su HTML, secciones de prosa y bloques fallidos."""
    page_number: int
    tables: List[TableGrid] = field(default_factory=list)
    html: List[str] = field(default_factory=list)
    sections: List[str] = field(default_factory=list)
    failures: List[Tuple[int, str]] = field(default_factory=list)
