from __future__ import annotations

import logging
from typing import Any, Iterator, List, Optional, Sequence

from .errors import ContentModelMismatch
from .structures import PageContent, Point, Rect, TextRun

log = logging.getLogger(__name__)


def _native_rect(x0: float, y0: float, x1: float, y1: float, height: float) -> Rect:
    # PyMuPDF entrega coordenadas con origen arriba; el contrato usa origen abajo
    return Rect(Point(x0, height - y1), Point(x1, height - y0))


def _page_rects(page: Any, height: float) -> List[Rect]:
    rects: List[Rect] = []
    for path in page.get_drawings():
        for item in path.get("items", []):
            if not item or item[0] != "re":
                continue
            try:
                r = item[1]
                rects.append(_native_rect(float(r.x0), float(r.y0), float(r.x1), float(r.y1), height))
            except (AttributeError, IndexError, TypeError, ValueError) as exc:
                raise ContentModelMismatch(f"elemento 're' inesperado en el dibujo: {item!r}") from exc
    return rects


def _page_texts(page: Any, height: float) -> List[TextRun]:
    texts: List[TextRun] = []
    data = page.get_text("dict")
    if not isinstance(data, dict) or "blocks" not in data:
        raise ContentModelMismatch("get_text('dict') no devolvió bloques")
    for block in data["blocks"]:
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                text = span.get("text", "")
                origin = span.get("origin")
                if not text or origin is None:
                    continue
                x, y = origin
                texts.append(TextRun(x=float(x), y=height - float(y), text=text))
    return texts


def page_content_from_pymupdf(page: Any, page_number: int) -> PageContent:
    """Rects ('re') y fragmentos de texto de una página PyMuPDF, en coordenadas nativas."""
    bounds = page.rect
    height = float(bounds.height)
    return PageContent(
        rects=_page_rects(page, height),
        texts=_page_texts(page, height),
        content_height=height,
        media_box=Rect(Point(float(bounds.x0), 0.0), Point(float(bounds.x1), height)),
        page_number=page_number,
    )


def iter_pdf_page_contents(pdf_path: str, pages: Optional[Sequence[int]] = None) -> Iterator[PageContent]:
    """Itera el contenido de las páginas (índices base 0) de un PDF."""
    try:
        import pymupdf
    except ImportError as exc:
        raise RuntimeError("PyMuPDF es requerido para leer PDFs (pip install '.[pdf]').") from exc

    with pymupdf.open(pdf_path) as doc:
        selected = range(doc.page_count) if pages is None else pages
        for pno in selected:
            if not 0 <= pno < doc.page_count:
                log.warning("Página %d fuera de rango (el documento tiene %d).", pno, doc.page_count)
                continue
            yield page_content_from_pymupdf(doc[pno], page_number=pno + 1)
