# src/ruled_table_extractor/reconstruct.py
from __future__ import annotations
import itertools
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Set

from .assign import bind_text_runs
from .axes import index_block_axes
from .blocks import segment_blocks
from .cleaners import normalize_page_rects, normalize_rect, normalize_text_run
from .config import ExtractionConfig
from .debug import draw_rects, next_debug_path
from .errors import DegenerateBlock, GeometryInconsistency, OverlapDetected
from .exporters import render_table_html
from .grid_builder import build_grid
from .rows import SectionAccumulator, page_rows
from .spans import resolve_spans
from .spatial import PageResult, TableGrid
from .structures import PageContent, Rect, TextRun

log = logging.getLogger(__name__)


def reconstruct_block(
    block: Sequence[Rect],
    texts: Sequence[TextRun],
    config: Optional[ExtractionConfig] = None,
    *,
    consumed: Optional[Set[int]] = None,
    block_index: int = 0,
) -> Optional[TableGrid]:
    """Ejes -> rejilla -> spans -> texto para un bloque ya normalizado.

    Devuelve None si el bloque no es una tabla. GeometryInconsistency y
    OverlapDetected se propagan: quien llama decide si sigue con otros bloques.
    """
    config = config or ExtractionConfig()
    try:
        xs, ys = index_block_axes(block, tolerance=config.tolerance, min_columns=config.min_columns)
        grid = build_grid(block, xs, ys, strict=config.strict)
    except DegenerateBlock as exc:
        log.debug("Bloque %d descartado: %s", block_index, exc)
        return None

    spans = resolve_spans(grid)
    bind_text_runs(spans, grid.rects, texts, tolerance=config.tolerance, consumed=consumed)
    return TableGrid(
        n_rows=grid.n_rows,
        n_cols=grid.n_cols,
        spans=spans,
        rects=list(grid.rects),
        block_index=block_index,
    )


def extract_page(
    content: PageContent,
    config: Optional[ExtractionConfig] = None,
    *,
    debug_counter: Optional[Iterator[int]] = None,
    accumulator: Optional[SectionAccumulator] = None,
) -> PageResult:
    """Tablas y secciones de prosa de una página.

    Cada bloque se reconstruye por separado; un bloque con geometría
    inconsistente se registra en `failures` y no afecta al resto. Los
    fragmentos de texto que no quedan en ninguna tabla pasan al flujo de filas.
    Con `accumulator` la sección sin terminar queda pendiente para la página
    siguiente; sin él se emite al final de esta página.
    """
    config = config or ExtractionConfig()
    height = content.content_height
    result = PageResult(page_number=content.page_number)

    rects = normalize_page_rects(content.rects, height, tolerance=config.tolerance, mode=config.containment)
    texts = [normalize_text_run(t, height) for t in content.texts]
    media_box = None
    if config.use_media_box and content.media_box is not None:
        media_box = normalize_rect(content.media_box, height)

    blocks = segment_blocks(
        rects,
        tolerance=config.tolerance,
        gap_threshold=config.effective_gap_threshold(),
        media_box=media_box,
    )
    log.info("Página %d: %d rects, %d fragmentos de texto, %d bloques.",
             content.page_number, len(rects), len(texts), len(blocks))

    if config.debug_dir is not None and debug_counter is None:
        debug_counter = itertools.count()

    consumed: Set[int] = set()
    for index, block in enumerate(blocks):
        if config.debug_dir is not None:
            draw_rects(block, next_debug_path(config.debug_dir, debug_counter))
        try:
            table = reconstruct_block(block, texts, config, consumed=consumed, block_index=index)
        except (GeometryInconsistency, OverlapDetected) as exc:
            log.warning("Página %d, bloque %d omitido: %s", content.page_number, index, exc)
            result.failures.append((index, str(exc)))
            continue
        if table is None:
            continue
        result.tables.append(table)
        result.html.append(render_table_html(table, config.table_attributes))

    leftover = [t for i, t in enumerate(texts) if i not in consumed]
    rows = page_rows(
        leftover,
        tolerance=config.tolerance,
        top=config.body_top,
        bottom=config.body_bottom,
        drop_folio=config.drop_folio,
    )
    if accumulator is None:
        acc = SectionAccumulator()
        result.sections = acc.feed(rows)
        tail = acc.flush()
        if tail is not None:
            result.sections.append(tail)
    else:
        result.sections = accumulator.feed(rows)

    log.info("Página %d: %d tablas, %d secciones, %d bloques fallidos.",
             content.page_number, len(result.tables), len(result.sections), len(result.failures))
    return result


def extract_document(
    pages: Iterable[PageContent],
    config: Optional[ExtractionConfig] = None,
) -> List[PageResult]:
    """Procesa las páginas en orden; las secciones pueden cruzar páginas."""
    config = config or ExtractionConfig()
    counter = itertools.count()
    accumulator = SectionAccumulator()
    results: List[PageResult] = []
    for page in pages:
        results.append(extract_page(page, config, debug_counter=counter, accumulator=accumulator))
    tail = accumulator.flush()
    if tail is not None and results:
        results[-1].sections.append(tail)
    return results
