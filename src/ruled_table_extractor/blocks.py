# src/ruled_table_extractor/blocks.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .axes import canonical_axis
from .structures import DEFAULT_TOLERANCE, Rect

log = logging.getLogger(__name__)

SortKey = Tuple[float, float, float, float]


def canonical_keys(rects: Sequence[Rect], tolerance: float = DEFAULT_TOLERANCE) -> List[SortKey]:
    """Clave (min.y, max.y, min.x, max.x) con cada coordenada ajustada a su valor canónico de página.

    Comparar claves canónicas es un orden total real; comparar floats crudos
    con tolerancia no lo es.
    """
    xs = canonical_axis((v for r in rects for v in (r.min.x, r.max.x)), tolerance)
    ys = canonical_axis((v for r in rects for v in (r.min.y, r.max.y)), tolerance)
    return [(ys.snap(r.min.y), ys.snap(r.max.y), xs.snap(r.min.x), xs.snap(r.max.x)) for r in rects]


def sort_rects(rects: Sequence[Rect], tolerance: float = DEFAULT_TOLERANCE) -> List[Tuple[SortKey, Rect]]:
    keyed = list(zip(canonical_keys(rects, tolerance), rects))
    keyed.sort(key=lambda kr: kr[0])
    return keyed


def _outside_media(rect: Rect, media_box: Optional[Rect], tolerance: float) -> bool:
    if media_box is None:
        return False
    return rect.min.y < media_box.min.y - tolerance or rect.max.y > media_box.max.y + tolerance


def segment_blocks(rects: Sequence[Rect],
                   tolerance: float = DEFAULT_TOLERANCE,
                   gap_threshold: Optional[float] = None,
                   media_box: Optional[Rect] = None) -> List[List[Rect]]:
    """Parte los rects de una página en bloques separados por un hueco vertical.

    Una sola pasada en orden canónico: el bloque acumulado se cierra cuando
    current.min.y - last_accepted.max.y >= gap_threshold. `last_accepted` se
    actualiza con cada rect aceptado, también a través de los cortes.
    """
    gap = tolerance if gap_threshold is None else gap_threshold
    blocks: List[List[Rect]] = []
    current: List[Rect] = []
    last_accepted: Optional[Rect] = None
    previous_key: Optional[SortKey] = None

    for key, rect in sort_rects(rects, tolerance):
        if key == previous_key:
            continue
        previous_key = key
        if _outside_media(rect, media_box, tolerance):
            continue
        # las reglas finas no son celdas
        if rect.is_degenerate(tolerance):
            continue
        if last_accepted is not None and rect.min.y - last_accepted.max.y >= gap:
            if current:
                blocks.append(current)
            current = []
        current.append(rect)
        last_accepted = rect

    if current:
        blocks.append(current)
    log.debug("Se segmentaron %d rects en %d bloques.", len(rects), len(blocks))
    return blocks
