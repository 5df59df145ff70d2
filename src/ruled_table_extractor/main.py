from __future__ import annotations

import html
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .config import ExtractionConfig
from .exporters import rows_to_csv, table_to_rows
from .parser import load_page_contents
from .reconstruct import extract_document
from .spatial import PageResult
from .structures import PageContent

log = logging.getLogger(__name__)

SOURCES = ("json", "pdf")


def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def _load_pages(input_path: str, source: str, pages: Optional[Sequence[int]]) -> Iterable[PageContent]:
    if source == "json":
        contents = load_page_contents(input_path)
        if pages is None:
            return contents
        wanted = set(pages)
        return [c for c in contents if c.page_number - 1 in wanted]
    if source == "pdf":
        from .pymupdf_source import iter_pdf_page_contents
        return iter_pdf_page_contents(input_path, pages=pages)
    raise ValueError(f"Fuente desconocida: {source!r}")


def render_document_html(results: Sequence[PageResult]) -> str:
    """Documento HTML con las tablas y las secciones de prosa de cada página."""
    parts: List[str] = ["<!DOCTYPE html>", "<html><head><meta charset=\"utf-8\"></head><body>"]
    for result in results:
        parts.append(f"<div class=\"page\" data-page=\"{result.page_number}\">")
        parts.extend(result.html)
        parts.extend(f"<p>{html.escape(section)}</p>" for section in result.sections)
        parts.append("</div>")
    parts.append("</body></html>")
    return "\n".join(parts)


def write_tables_csv(results: Sequence[PageResult], csv_dir: str) -> List[Path]:
    written: List[Path] = []
    Path(csv_dir).mkdir(parents=True, exist_ok=True)
    for result in results:
        for table in result.tables:
            path = Path(csv_dir) / f"page_{result.page_number:03d}_table_{table.block_index:02d}.csv"
            rows_to_csv(table_to_rows(table), [], str(path))
            written.append(path)
    return written


def content_to_html(
    input_path: str,
    output_path: str,
    *,
    source: str = "json",
    pages: Optional[Sequence[int]] = None,
    csv_dir: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> List[PageResult]:
    """
    Orquesta la reconstrucción para un archivo de entrada y escribe el HTML.
    Con `csv_dir` escribe además un CSV por tabla.
    """
    source = (source or "json").lower()
    log.info("Fuente seleccionada: %s", source)
    log.info("Leyendo contenido de página desde: %s", input_path)

    results = extract_document(_load_pages(input_path, source, pages), config)
    if not results:
        log.warning("No se encontraron páginas. Se generará un HTML vacío.")

    _ensure_parent_dir(output_path)
    Path(output_path).write_text(render_document_html(results), encoding="utf-8")
    n_tables = sum(len(r.tables) for r in results)
    log.info("HTML escrito en %s (%d páginas, %d tablas).", output_path, len(results), n_tables)

    if csv_dir:
        written = write_tables_csv(results, csv_dir)
        log.info("%d CSV escritos en %s", len(written), csv_dir)
    return results
