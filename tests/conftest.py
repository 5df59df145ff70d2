"""Shared fixtures for the reconstruction tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from ruled_table_extractor.structures import Rect


def box(x0: float, y0: float, x1: float, y1: float) -> Rect:
    return Rect.from_bbox((x0, y0, x1, y1))


@pytest.fixture
def quadrant():
    """Four equal cells tiling a 2x2 arrangement (top-down coordinates)."""
    return [box(0, 0, 10, 10), box(10, 0, 20, 10), box(0, 10, 10, 20), box(10, 10, 20, 20)]


@pytest.fixture
def page_dump(tmp_path: Path):
    """Write a page-content JSON dump and return its path."""

    def _write(pages, name: str = "content.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"pages": pages}), encoding="utf-8")
        return path

    return _write
