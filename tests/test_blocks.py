"""Tests for page segmentation into independent table blocks."""

from __future__ import annotations

import pytest

from conftest import box
from ruled_table_extractor.blocks import canonical_keys, segment_blocks, sort_rects


def _two_tables(gap: float):
    top = [box(0, 0, 10, 10), box(10, 0, 20, 10)]
    bottom = [box(0, 10 + gap, 10, 20 + gap), box(10, 10 + gap, 20, 20 + gap)]
    return top + bottom


def test_sort_orders_rows_then_columns(quadrant):
    shuffled = [quadrant[3], quadrant[1], quadrant[2], quadrant[0]]
    ordered = [rect for _, rect in sort_rects(shuffled)]
    assert ordered == quadrant


def test_sort_treats_near_coordinates_as_equal():
    # min.y 0 vs 1.5 are the same row; the x order decides
    right = box(10, 0, 20, 10)
    left = box(0, 1.5, 10, 10)
    ordered = [rect for _, rect in sort_rects([right, left])]
    assert ordered == [left, right]


def test_canonical_keys_snap_coordinates():
    keys = canonical_keys([box(0, 0, 10, 10), box(10.5, 1, 20, 11)])
    assert keys[1] == (0, 10, 10, 20)


@pytest.mark.parametrize("gap, expected", [(0, 1), (2, 1), (2.9, 1), (3, 2), (25, 2)])
def test_clustering_threshold(gap, expected):
    assert len(segment_blocks(_two_tables(gap))) == expected


def test_custom_gap_threshold():
    assert len(segment_blocks(_two_tables(5), gap_threshold=10)) == 1


def test_duplicates_and_degenerate_rects_are_dropped():
    rects = [
        box(0, 0, 10, 10),
        box(0.5, 0, 10, 10),
        box(10, 0, 20, 10),
        box(0, 10, 20, 11),  # horizontal rule
        box(20, 0, 21, 10),  # vertical rule
    ]
    blocks = segment_blocks(rects)
    assert blocks == [[box(0, 0, 10, 10), box(10, 0, 20, 10)]]


def test_media_box_clips_vertically():
    inside = box(0, 100, 10, 110)
    above = box(0, -50, 10, -40)
    below = box(0, 900, 10, 910)
    blocks = segment_blocks([inside, above, below], media_box=box(0, 0, 600, 800))
    assert blocks == [[inside]]


def test_gap_is_measured_from_last_accepted_rect():
    # gap is taken from the most recent rect, not the lowest edge seen so far
    tall = box(0, 0, 10, 100)
    short = box(10, 5, 20, 10)
    low = box(10, 50, 20, 60)
    blocks = segment_blocks([low, short, tall])
    assert blocks == [[tall, short], [low]]


def test_empty_input():
    assert segment_blocks([]) == []
