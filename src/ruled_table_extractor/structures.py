from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

DEFAULT_TOLERANCE = 3.0

# Desplazamiento para el test semiabierto de anclas de texto.
BOUNDARY_EPSILON = 1e-6


def is_close(a: float, b: float, tolerance: float = DEFAULT_TOLERANCE) -> bool:
    return abs(a - b) <= tolerance


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Rectángulo alineado a los ejes, en coordenadas de página."""
    min: Point
    max: Point

    @classmethod
    def from_bbox(cls, bbox: Sequence[float]) -> "Rect":
        x0, y0, x1, y1 = (float(v) for v in bbox)
        return cls(Point(x0, y0), Point(x1, y1))

    @property
    def x0(self) -> float:
        return self.min.x

    @property
    def y0(self) -> float:
        return self.min.y

    @property
    def x1(self) -> float:
        return self.max.x

    @property
    def y1(self) -> float:
        return self.max.y

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y

    def as_tuple(self) -> tuple:
        return (self.min.x, self.min.y, self.max.x, self.max.y)

    def contains(self, other: "Rect", tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """True si `other` cabe dentro de este rectángulo (con tolerancia)."""
        return (self.min.x <= other.min.x + tolerance
                and self.min.y <= other.min.y + tolerance
                and self.max.x >= other.max.x - tolerance
                and self.max.y >= other.max.y - tolerance)

    def is_degenerate(self, tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return self.width <= tolerance or self.height <= tolerance


@dataclass(frozen=True)
class TextRun:
    """Texto posicionado; (x, y) es el ancla izquierda sobre la línea base."""
    x: float
    y: float
    text: str


@dataclass
class PageContent:
    """Lo que entrega la capa de contenido por página (coordenadas nativas, origen abajo)."""
    rects: List[Rect]
    texts: List[TextRun]
    content_height: float
    media_box: Optional[Rect] = None
    page_number: int = 1
