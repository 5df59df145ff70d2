from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Sequence, Tuple

from PIL import Image, ImageDraw

from .structures import Rect

log = logging.getLogger(__name__)

DEFAULT_CANVAS = (1000, 1000)


def next_debug_path(directory: Path, counter: Iterator[int]) -> Path:
    """Ruta `rect_<n>.png`; el contador lo pasa quien llama, no hay estado global."""
    return Path(directory) / f"rect_{next(counter)}.png"


def draw_rects(
    rects: Sequence[Rect],
    output_path: Path,
    *,
    size: Tuple[int, int] = DEFAULT_CANVAS,
) -> Path:
    """Dibuja el contorno de cada rect (coordenadas de arriba hacia abajo) en un PNG."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    image = Image.new("RGB", size, (255, 255, 255))
    draw = ImageDraw.Draw(image)
    for rect in rects:
        draw.rectangle(
            [rect.min.x, rect.min.y, rect.max.x, rect.max.y],
            outline=(0x44, 0x44, 0x44),
            width=1,
        )
    image.save(str(output_path))
    log.debug("Rects de depuración guardados en %s (%d rects)", output_path, len(rects))
    return output_path
