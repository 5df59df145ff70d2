# src/ruled_table_extractor/spans.py
from __future__ import annotations
import logging
from typing import List

import numpy as np

from .spatial import CellGrid, CellSpan, CellState

log = logging.getLogger(__name__)


def _gap_span(grid: CellGrid, row: int, col: int) -> CellSpan:
    """Hueco vacío: crece a la derecha y luego hacia abajo mientras todo siga vacío."""
    end_col = col + 1
    while end_col < grid.n_cols and grid.state[row, end_col] == CellState.EMPTY:
        end_col += 1
    end_row = row + 1
    while end_row < grid.n_rows and np.all(grid.state[end_row, col:end_col] == CellState.EMPTY):
        end_row += 1
    grid.state[row:end_row, col:end_col] = CellState.EMITTED_GAP
    return CellSpan(row=row, col=col, rowspan=end_row - row, colspan=end_col - col)


def _rect_span(grid: CellGrid, row: int, col: int, rect_id: int) -> CellSpan:
    """Longitud de racha del mismo id hacia la derecha (fila) y hacia abajo (columna)."""
    end_col = col + 1
    while end_col < grid.n_cols and grid.owner_at(row, end_col) == rect_id:
        end_col += 1
    end_row = row + 1
    while end_row < grid.n_rows and grid.owner_at(end_row, col) == rect_id:
        end_row += 1
    return CellSpan(row=row, col=col, rowspan=end_row - row, colspan=end_col - col, rect_id=rect_id)


def resolve_spans(grid: CellGrid) -> List[CellSpan]:
    """Recorre la rejilla por filas y emite cada región una sola vez.

    - celda vacía: hueco con colspan/rowspan, marcado como EMITTED_GAP;
    - celda ocupada por un rect no procesado: span del rect;
    - celda de un rect ya procesado o hueco ya emitido: se salta.
    """
    processed = np.zeros(len(grid.rects), dtype=bool)
    spans: List[CellSpan] = []
    for row in range(grid.n_rows):
        for col in range(grid.n_cols):
            state = grid.state[row, col]
            if state == CellState.EMPTY:
                spans.append(_gap_span(grid, row, col))
            elif state == CellState.OCCUPIED:
                rect_id = int(grid.owner[row, col])
                if processed[rect_id]:
                    continue
                processed[rect_id] = True
                spans.append(_rect_span(grid, row, col, rect_id))
    log.debug("Se resolvieron %d spans (%d huecos).", len(spans), sum(1 for s in spans if s.is_gap))
    return spans
