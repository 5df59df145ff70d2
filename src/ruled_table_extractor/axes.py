# src/ruled_table_extractor/axes.py
from __future__ import annotations
import bisect
import logging
from typing import Iterable, List, Sequence, Tuple

import numpy as np

from .errors import DegenerateBlock
from .structures import DEFAULT_TOLERANCE, Rect

log = logging.getLogger(__name__)


class AxisCoordinateSet:
    """Fronteras de un eje: secuencia estrictamente creciente, fusionada con tolerancia.

    Un valor nuevo a distancia <= tolerancia de una entrada existente se descarta.
    """

    def __init__(self, values: Iterable[float] = (), tolerance: float = DEFAULT_TOLERANCE) -> None:
        self.tolerance = tolerance
        self._values: List[float] = []
        for v in values:
            self.insert(v)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, idx: int) -> float:
        return self._values[idx]

    def __repr__(self) -> str:
        return f"AxisCoordinateSet({self._values!r}, tolerance={self.tolerance})"

    @property
    def values(self) -> List[float]:
        return list(self._values)

    def as_array(self) -> np.ndarray:
        return np.asarray(self._values, dtype=float)

    def _nearest(self, value: float) -> int:
        """Índice de la entrada más cercana a `value`, o -1 si el conjunto está vacío."""
        if not self._values:
            return -1
        pos = bisect.bisect_left(self._values, value)
        candidates = [i for i in (pos - 1, pos) if 0 <= i < len(self._values)]
        return min(candidates, key=lambda i: abs(self._values[i] - value))

    def insert(self, value: float) -> bool:
        """Inserta `value` ordenadamente. False si ya había uno equivalente."""
        idx = self._nearest(value)
        if idx >= 0 and abs(self._values[idx] - value) <= self.tolerance:
            return False
        bisect.insort(self._values, float(value))
        return True

    def index_of(self, value: float) -> int:
        """Índice de la frontera que coincide con `value`, o -1."""
        idx = self._nearest(value)
        if idx >= 0 and abs(self._values[idx] - value) <= self.tolerance:
            return idx
        return -1

    def snap(self, value: float) -> float:
        """Valor canónico de `value`; sin coincidencia se devuelve tal cual."""
        idx = self.index_of(value)
        return self._values[idx] if idx >= 0 else value


def canonical_axis(values: Iterable[float], tolerance: float = DEFAULT_TOLERANCE) -> AxisCoordinateSet:
    """Conjunto canónico insertando en orden ascendente (resultado independiente del orden de entrada)."""
    return AxisCoordinateSet(sorted(values), tolerance=tolerance)


def index_block_axes(block: Sequence[Rect],
                     tolerance: float = DEFAULT_TOLERANCE,
                     min_columns: int = 3) -> Tuple[AxisCoordinateSet, AxisCoordinateSet]:
    """Recoge las fronteras x e y de un bloque.

    Lanza DegenerateBlock si hay menos de `min_columns` fronteras x: sin
    estructura de columnas es decoración suelta, no una tabla.
    """
    xs = AxisCoordinateSet(tolerance=tolerance)
    ys = AxisCoordinateSet(tolerance=tolerance)
    for rect in block:
        xs.insert(rect.min.x)
        xs.insert(rect.max.x)
        ys.insert(rect.min.y)
        ys.insert(rect.max.y)
    if len(xs) < min_columns:
        raise DegenerateBlock(f"solo {len(xs)} fronteras x (mínimo {min_columns})")
    log.debug("Fronteras del bloque: x=%s y=%s", xs.values, ys.values)
    return xs, ys
