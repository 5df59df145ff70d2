"""End-to-end tests for page and document extraction."""

from __future__ import annotations

import itertools

import pytest
from bs4 import BeautifulSoup

from ruled_table_extractor.config import ExtractionConfig
from ruled_table_extractor.errors import GeometryInconsistency
from ruled_table_extractor.reconstruct import extract_document, extract_page
from ruled_table_extractor.structures import PageContent, Rect, TextRun

HEIGHT = 842.0


def native_rect(x0, y0, x1, y1) -> Rect:
    """Top-down page box expressed in the source's bottom-up convention."""
    return Rect.from_bbox((x0, HEIGHT - y1, x1, HEIGHT - y0))


def native_run(x, y, text) -> TextRun:
    return TextRun(x, HEIGHT - y, text)


def quadrant_at(x, y, size=10):
    return [
        native_rect(x, y, x + size, y + size),
        native_rect(x + size, y, x + 2 * size, y + size),
        native_rect(x, y + size, x + size, y + 2 * size),
        native_rect(x + size, y + size, x + 2 * size, y + 2 * size),
    ]


def _texts(markup):
    soup = BeautifulSoup(markup, "lxml")
    return [[td.get_text() for td in tr.find_all("td")] for tr in soup.find_all("tr")]


@pytest.fixture
def mixed_page():
    texts = [
        native_run(52, 108, "a"),
        native_run(62, 108, "b"),
        native_run(52, 118, "c"),
        native_run(62, 118, "d"),
        native_run(50, 200, "Para one"),
        native_run(50, 210, " "),
        native_run(50, 220, "Para two"),
        native_run(300, 780, "7"),
    ]
    return PageContent(rects=quadrant_at(50, 100), texts=texts, content_height=HEIGHT)


def test_page_with_table_and_prose(mixed_page):
    result = extract_page(mixed_page)
    assert len(result.tables) == 1
    assert _texts(result.html[0]) == [["a", "b"], ["c", "d"]]
    assert result.sections == ["Para one", "Para two"]
    assert result.failures == []


def test_table_text_is_not_repeated_as_prose(mixed_page):
    result = extract_page(mixed_page)
    assert not any(letter in result.sections for letter in "abcd")
    assert {run.text for run in result.tables[0].bound_runs()} == {"a", "b", "c", "d"}


def test_two_blocks_two_tables():
    content = PageContent(rects=quadrant_at(0, 100) + quadrant_at(0, 300), texts=[], content_height=HEIGHT)
    result = extract_page(content)
    assert len(result.tables) == 2
    assert [t.block_index for t in result.tables] == [0, 1]


def test_failing_block_does_not_abort_the_page():
    overlapping = [native_rect(0, 100, 20, 120)] + quadrant_at(0, 100)
    content = PageContent(rects=overlapping + quadrant_at(0, 300), texts=[], content_height=HEIGHT)
    result = extract_page(content, ExtractionConfig(strict=True))
    assert len(result.tables) == 1
    assert result.tables[0].block_index == 1
    assert [index for index, _ in result.failures] == [0]


def test_geometry_inconsistency_is_local_to_block(monkeypatch):
    import ruled_table_extractor.reconstruct as reconstruct

    real_build = reconstruct.build_grid
    calls = itertools.count()

    def flaky_build(block, xs, ys, strict=False):
        if next(calls) == 0:
            raise GeometryInconsistency("max.x", 15.0, 0)
        return real_build(block, xs, ys, strict=strict)

    monkeypatch.setattr(reconstruct, "build_grid", flaky_build)
    content = PageContent(rects=quadrant_at(0, 100) + quadrant_at(0, 300), texts=[], content_height=HEIGHT)
    result = extract_page(content)
    assert len(result.tables) == 1
    assert result.failures[0][0] == 0
    assert "max.x" in result.failures[0][1]


def test_degenerate_block_text_falls_back_to_prose():
    content = PageContent(
        rects=[native_rect(50, 100, 150, 120)],
        texts=[native_run(60, 115, "boxed note")],
        content_height=HEIGHT,
    )
    result = extract_page(content)
    assert result.tables == []
    assert result.sections == ["boxed note"]


def test_media_box_limits_rectangles():
    content = PageContent(
        rects=quadrant_at(0, 100),
        texts=[],
        content_height=HEIGHT,
        media_box=Rect.from_bbox((0, HEIGHT - 50, 600, HEIGHT)),
    )
    assert extract_page(content).tables == []
    assert len(extract_page(content, ExtractionConfig(use_media_box=False)).tables) == 1


def test_sections_continue_across_pages():
    first = PageContent(rects=[], texts=[native_run(10, 100, "Hello ")], content_height=HEIGHT, page_number=1)
    second = PageContent(
        rects=[],
        texts=[native_run(10, 100, "world"), native_run(10, 110, " "), native_run(10, 120, "Rest")],
        content_height=HEIGHT,
        page_number=2,
    )
    results = extract_document([first, second])
    assert results[0].sections == []
    assert results[1].sections == ["Hello world", "Rest"]


def test_debug_images_use_one_counter_per_document(tmp_path):
    pages = [
        PageContent(rects=quadrant_at(0, 100), texts=[], content_height=HEIGHT, page_number=1),
        PageContent(rects=quadrant_at(0, 100), texts=[], content_height=HEIGHT, page_number=2),
    ]
    extract_document(pages, ExtractionConfig(debug_dir=tmp_path / "dbg"))
    assert sorted(p.name for p in (tmp_path / "dbg").iterdir()) == ["rect_0.png", "rect_1.png"]


def test_caller_supplied_debug_counter(tmp_path):
    page = PageContent(rects=quadrant_at(0, 100), texts=[], content_height=HEIGHT)
    extract_page(page, ExtractionConfig(debug_dir=tmp_path), debug_counter=itertools.count(7))
    assert (tmp_path / "rect_7.png").exists()


def test_collapsed_rect_marks_block_as_failed():
    content = PageContent(
        rects=[native_rect(20, 100, 30, 105), native_rect(10, 102.9, 20, 108)],
        texts=[native_run(15, 106, "B")],
        content_height=HEIGHT,
    )
    result = extract_page(content)
    assert result.tables == []
    assert [index for index, _ in result.failures] == [0]
    assert "max.y" in result.failures[0][1]
