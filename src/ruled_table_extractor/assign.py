from __future__ import annotations
from typing import List, Optional, Sequence, Set

from .cleaners import clean_cell_text
from .spatial import CellSpan
from .structures import BOUNDARY_EPSILON, DEFAULT_TOLERANCE, Rect, TextRun, is_close


def point_in_cell(rect: Rect, x: float, y: float, epsilon: float = BOUNDARY_EPSILON) -> bool:
    """Test semiabierto [min, max) en ambos ejes, desplazado por `epsilon`.

    Un ancla justo sobre una frontera compartida cae siempre en la celda de la
    derecha / de abajo, nunca en las dos ni en ninguna.
    """
    return (rect.min.x - epsilon <= x < rect.max.x - epsilon
            and rect.min.y - epsilon <= y < rect.max.y - epsilon)


def format_cell_text(runs: Sequence[TextRun], tolerance: float = DEFAULT_TOLERANCE) -> List[str]:
    """Junta los fragmentos de una celda en líneas visuales.

    Cada cambio de línea base respecto al fragmento anterior abre una línea
    nueva; el primer fragmento nunca produce un salto inicial.
    """
    lines: List[str] = []
    last_y: Optional[float] = None
    for run in runs:
        text = clean_cell_text(run.text)
        if not text:
            continue
        if last_y is None:
            lines.append(text)
        elif is_close(run.y, last_y, tolerance):
            lines[-1] += text
        else:
            lines.append(text)
        last_y = run.y
    return lines


def bind_text_runs(spans: Sequence[CellSpan],
                   rects: Sequence[Rect],
                   runs: Sequence[TextRun],
                   tolerance: float = DEFAULT_TOLERANCE,
                   consumed: Optional[Set[int]] = None) -> Set[int]:
    """Asigna cada fragmento (en orden del documento) a la celda que contiene su ancla.

    Se recorren los spans en orden de emisión; un fragmento ya asignado no se
    vuelve a considerar. Los que no caen en ninguna celda se ignoran. Devuelve
    los índices de `runs` consumidos (incluye los de `consumed`).
    """
    taken: Set[int] = set() if consumed is None else consumed
    for span in spans:
        if span.is_gap:
            continue
        rect = rects[span.rect_id]
        for idx, run in enumerate(runs):
            if idx in taken:
                continue
            if point_in_cell(rect, run.x, run.y):
                span.runs.append(run)
                taken.add(idx)
        span.text = "\n".join(format_cell_text(span.runs, tolerance))
    return taken
