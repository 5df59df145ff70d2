# src/ruled_table_extractor/grid_builder.py
from __future__ import annotations
import logging
from typing import Sequence, Tuple

from .axes import AxisCoordinateSet
from .errors import DegenerateBlock, GeometryInconsistency, OverlapDetected
from .spatial import CellGrid
from .structures import Point, Rect

log = logging.getLogger(__name__)


def _resolve_span(axis: AxisCoordinateSet, lo: float, hi: float, name: str, rect_id: int) -> Tuple[int, int]:
    start = axis.index_of(lo)
    if start < 0:
        raise GeometryInconsistency(f"min.{name}", lo, rect_id)
    end = axis.index_of(hi)
    if end < 0:
        raise GeometryInconsistency(f"max.{name}", hi, rect_id)
    # ambas esquinas en la misma frontera: el rect no cubriría ninguna celda
    if end <= start:
        raise GeometryInconsistency(f"max.{name}", hi, rect_id)
    return start, end


def build_grid(block: Sequence[Rect],
               xs: AxisCoordinateSet,
               ys: AxisCoordinateSet,
               strict: bool = False) -> CellGrid:
    """Estampa la huella de cada rect sobre la rejilla (filas = |ys|-1, columnas = |xs|-1).

    Los ids de rect son su posición en `block`; `grid.rects` guarda cada rect
    ajustado a las fronteras. Se estampa en orden de entrada;
    si dos rects se solapan gana el último. Con `strict=True` el solape lanza
    OverlapDetected.
    """
    grid = CellGrid.allocate(xs.as_array(), ys.as_array(), list(block))
    if grid.is_empty():
        raise DegenerateBlock(f"rejilla vacía ({grid.n_rows}x{grid.n_cols})")

    for rect_id, rect in enumerate(block):
        rows = _resolve_span(ys, rect.min.y, rect.max.y, "y", rect_id)
        cols = _resolve_span(xs, rect.min.x, rect.max.x, "x", rect_id)
        # la celda usa las fronteras del eje, no los floats crudos
        grid.rects[rect_id] = Rect(Point(xs[cols[0]], ys[rows[0]]), Point(xs[cols[1]], ys[rows[1]]))
        overwritten = grid.stamp(rect_id, rows, cols)
        if overwritten:
            row, col, previous_id = overwritten[0]
            if strict:
                raise OverlapDetected(row, col, previous_id, rect_id)
            log.debug("Rect #%d sobrescribe %d celdas (primera: (%d, %d) de #%d).",
                      rect_id, len(overwritten), row, col, previous_id)

    if log.isEnabledFor(logging.DEBUG):
        log.debug("Rejilla %dx%d:\n%s", grid.n_rows, grid.n_cols, grid.to_ascii())
    return grid
