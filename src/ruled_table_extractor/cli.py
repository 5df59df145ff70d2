from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .config import ExtractionConfig
from .errors import ContentModelMismatch
from .main import SOURCES, content_to_html

log = logging.getLogger(__name__)


def _parse_pages(value: str) -> List[int]:
    """"1,3-5" -> [0, 2, 3, 4] (el usuario numera desde 1)."""
    pages: List[int] = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start, end = (int(p) for p in part.split("-", 1))
            if end < start:
                raise argparse.ArgumentTypeError(f"Rango inválido: {part}")
            pages.extend(range(start - 1, end))
        else:
            pages.append(int(part) - 1)
    if any(p < 0 for p in pages):
        raise argparse.ArgumentTypeError("Las páginas se numeran desde 1")
    return pages


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reconstruye tablas a partir de los rectángulos y textos de cada página y las exporta a HTML."
    )
    parser.add_argument("input", type=str, help="Volcado JSON del contenido de página o PDF (--source pdf)")
    parser.add_argument("output", type=str, help="Ruta al archivo .html de salida")
    parser.add_argument("--source", default="json", choices=SOURCES, help="Tipo de entrada (default: json)")
    parser.add_argument("--pages", type=_parse_pages, help="Páginas a procesar, p.ej. 1,3-5")
    parser.add_argument("--csv-dir", type=str, help="Directorio opcional para un CSV por tabla")
    parser.add_argument("--tolerance", type=float, help="Tolerancia de coordenadas (default: 3)")
    parser.add_argument("--gap", type=float, help="Hueco vertical que separa tablas (default: tolerancia)")
    parser.add_argument("--strict", action="store_true", help="Falla el bloque si dos rects se solapan")
    parser.add_argument("--bidirectional", action="store_true",
                        help="Filtrado de rects contenidos en ambos sentidos del orden de dibujo")
    parser.add_argument("--debug-dir", type=str, help="Directorio para PNGs de depuración de los bloques")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def config_from_args(args: argparse.Namespace) -> ExtractionConfig:
    values = {
        "strict": args.strict,
        "containment": "bidirectional" if args.bidirectional else "forward",
        "debug_dir": args.debug_dir,
    }
    if args.tolerance is not None:
        values["tolerance"] = args.tolerance
    if args.gap is not None:
        values["gap_threshold"] = args.gap
    return ExtractionConfig.from_mapping(values)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")

    log.info("ENTRADA: %s", args.input)
    log.info("HTML : %s", args.output)
    try:
        content_to_html(
            args.input,
            args.output,
            source=args.source,
            pages=args.pages,
            csv_dir=args.csv_dir,
            config=config_from_args(args),
        )
    except FileNotFoundError:
        log.error("Error: No se encontró el archivo de entrada: %s", args.input)
        return 1
    except ContentModelMismatch as exc:
        log.error("El contenido no tiene el formato esperado: %s", exc)
        return 1
    except Exception as exc:
        log.error("Ocurrió un error inesperado: %s", exc, exc_info=True)
        return 1
    log.info("✔ Proceso completado.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
