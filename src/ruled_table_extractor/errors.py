from __future__ import annotations
from typing import Optional


class TableExtractionError(RuntimeError):
    """Base de los errores de reconstrucción de tablas."""


class GeometryInconsistency(TableExtractionError):
    """Una esquina de rectángulo no coincide con ninguna frontera del eje."""

    def __init__(self, axis: str, value: float, rect_id: Optional[int] = None) -> None:
        self.axis = axis
        self.value = value
        self.rect_id = rect_id
        where = f" (rect #{rect_id})" if rect_id is not None else ""
        super().__init__(f"coordenada {axis}={value:g}{where} no coincide con ninguna frontera")


class OverlapDetected(TableExtractionError):
    """Dos rectángulos estampan la misma celda (solo en modo estricto)."""

    def __init__(self, row: int, col: int, previous_id: int, rect_id: int) -> None:
        self.row = row
        self.col = col
        self.previous_id = previous_id
        self.rect_id = rect_id
        super().__init__(
            f"celda ({row}, {col}) de rect #{previous_id} sobrescrita por rect #{rect_id}"
        )


class DegenerateBlock(TableExtractionError):
    """El bloque no tiene estructura de tabla; no es un fallo."""


class ContentModelMismatch(TableExtractionError):
    """Los datos de la página no se pueden interpretar como rectángulos/textos."""
