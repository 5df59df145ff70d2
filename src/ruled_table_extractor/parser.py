# src/ruled_table_extractor/parser.py
from __future__ import annotations
import json
from numbers import Real
from typing import Any, List, Mapping

from .errors import ContentModelMismatch
from .structures import PageContent, Rect, TextRun


def _number(value: Any, where: str) -> float:
    # bool es subclase de int: no es una coordenada
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ContentModelMismatch(f"{where}: se esperaba un número, llegó {value!r}")
    return float(value)


def _rect(value: Any, where: str) -> Rect:
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        raise ContentModelMismatch(f"{where}: se esperaba [x0, y0, x1, y1], llegó {value!r}")
    return Rect.from_bbox([_number(v, where) for v in value])


def _text_run(value: Any, where: str) -> TextRun:
    if isinstance(value, Mapping):
        missing = [k for k in ("x", "y", "text") if k not in value]
        if missing:
            raise ContentModelMismatch(f"{where}: faltan campos {missing}")
        x, y, text = value["x"], value["y"], value["text"]
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        x, y, text = value
    else:
        raise ContentModelMismatch(f"{where}: se esperaba {{x, y, text}}, llegó {value!r}")
    if not isinstance(text, str):
        raise ContentModelMismatch(f"{where}: el texto debe ser una cadena")
    return TextRun(x=_number(x, where), y=_number(y, where), text=text)


def page_from_mapping(data: Any, page_number: int = 1) -> PageContent:
    """Convierte el volcado de una página en PageContent (coordenadas nativas)."""
    where = f"página {page_number}"
    if not isinstance(data, Mapping):
        raise ContentModelMismatch(f"{where}: se esperaba un objeto, llegó {type(data).__name__}")
    if "content_height" not in data:
        raise ContentModelMismatch(f"{where}: falta content_height")

    rects_raw = data.get("rects", [])
    texts_raw = data.get("texts", [])
    if not isinstance(rects_raw, list) or not isinstance(texts_raw, list):
        raise ContentModelMismatch(f"{where}: rects y texts deben ser listas")

    media_raw = data.get("media_box")
    return PageContent(
        rects=[_rect(r, f"{where}, rect {i}") for i, r in enumerate(rects_raw)],
        texts=[_text_run(t, f"{where}, texto {i}") for i, t in enumerate(texts_raw)],
        content_height=_number(data["content_height"], f"{where}, content_height"),
        media_box=_rect(media_raw, f"{where}, media_box") if media_raw is not None else None,
        page_number=page_number,
    )


def load_page_contents(path: str) -> List[PageContent]:
    """Lee un volcado JSON: {"pages": [...]} o directamente una lista de páginas."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ContentModelMismatch(f"{path}: JSON inválido ({exc})") from exc

    pages = raw.get("pages") if isinstance(raw, Mapping) else raw
    if not isinstance(pages, list):
        raise ContentModelMismatch(f"{path}: se esperaba una lista de páginas")
    return [page_from_mapping(p, page_number=i) for i, p in enumerate(pages, start=1)]
