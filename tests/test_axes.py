"""Tests for tolerance-merged axis boundaries."""

from __future__ import annotations

import pytest

from conftest import box
from ruled_table_extractor.axes import AxisCoordinateSet, canonical_axis, index_block_axes
from ruled_table_extractor.errors import DegenerateBlock


def test_insert_keeps_strictly_ascending_values():
    axis = AxisCoordinateSet([30, 0, 10, 20])
    assert axis.values == [0, 10, 20, 30]


def test_insert_discards_value_within_tolerance():
    axis = AxisCoordinateSet([0, 10], tolerance=3)
    assert axis.insert(12) is False
    assert axis.insert(8) is False
    assert axis.insert(14) is True
    assert axis.values == [0, 10, 14]


def test_index_of_and_snap():
    axis = AxisCoordinateSet([0, 10, 20], tolerance=3)
    assert axis.index_of(11.5) == 1
    assert axis.index_of(15) == -1
    assert axis.snap(18.2) == 20
    assert axis.snap(15) == 15


def test_canonical_axis_is_order_independent():
    values = [10.0, 12.5, 7.9, 30.0, 0.0]
    assert canonical_axis(values).values == canonical_axis(reversed(values)).values


def test_index_block_axes_collects_boundaries(quadrant):
    xs, ys = index_block_axes(quadrant)
    assert xs.values == [0, 10, 20]
    assert ys.values == [0, 10, 20]


def test_index_block_axes_rejects_too_few_columns():
    with pytest.raises(DegenerateBlock):
        index_block_axes([box(0, 0, 10, 5), box(0, 5, 10, 10)])


def test_index_block_axes_min_columns_is_configurable():
    xs, ys = index_block_axes([box(0, 0, 10, 5)], min_columns=2)
    assert len(xs) == 2
    assert len(ys) == 2
