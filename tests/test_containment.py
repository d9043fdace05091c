# tests/test_containment.py
"""
ContainmentTester: point lookup with bounds, and the 7-probe rectangle test.
"""

from __future__ import annotations

import numpy as np
import pytest

from textshape.core.containment import ContainmentTester
from textshape.core.geometry import BoundingRect
from textshape.core.types import OccupancyMask


def _single_cell_mask() -> OccupancyMask:
    cells = np.zeros((10, 10), dtype=bool)
    cells[2, 3] = True  # row y=2, column x=3
    return OccupancyMask(cells)


def test_point_inside_floors_coordinates() -> None:
    t = ContainmentTester(_single_cell_mask())
    assert t.point_inside(3, 2)
    assert t.point_inside(3.99, 2.5)
    assert not t.point_inside(4.0, 2.0)
    assert not t.point_inside(2, 3)


@pytest.mark.parametrize("x,y", [(-0.5, 5), (5, -0.01), (10, 5), (5, 10), (100, 100)])
def test_point_outside_canvas_is_false(x: float, y: float) -> None:
    t = ContainmentTester(OccupancyMask.full(10, 10))
    assert t.point_inside(x, y) is False


def test_rect_inside_full_mask() -> None:
    t = ContainmentTester(OccupancyMask.full(10, 10))
    assert t.rect_inside(BoundingRect(0, 0, 5, 5))
    assert t.rect_inside(BoundingRect(2.5, 2.5, 6, 6))


def test_rect_touching_far_edge_is_rejected() -> None:
    # Right/bottom probes land on x == width, which is outside [0, width).
    t = ContainmentTester(OccupancyMask.full(10, 10))
    assert not t.rect_inside(BoundingRect(5, 5, 5, 5))


def test_rect_outside_canvas_is_rejected() -> None:
    t = ContainmentTester(OccupancyMask.full(10, 10))
    assert not t.rect_inside(BoundingRect(-1, 0, 4, 4))
    assert not t.rect_inside(BoundingRect(8, 8, 4, 4))


def test_rect_with_hole_under_center_is_rejected() -> None:
    cells = np.ones((20, 20), dtype=bool)
    cells[8:12, 8:12] = False
    t = ContainmentTester(OccupancyMask(cells))
    assert not t.rect_inside(BoundingRect(2, 2, 16, 16))


def test_mid_edge_probe_catches_notch() -> None:
    # Corners and center are inside; only the top edge midpoint hits the notch.
    cells = np.ones((20, 20), dtype=bool)
    cells[0:4, 9:12] = False
    t = ContainmentTester(OccupancyMask(cells))
    rect = BoundingRect(2, 2, 16, 10)
    for px, py in [(2, 2), (18, 2), (2, 12), (18, 12), (10, 7)]:
        assert t.point_inside(px, py)
    assert not t.rect_inside(rect)


def test_rect_inside_empty_mask_is_false() -> None:
    t = ContainmentTester(OccupancyMask.empty(10, 10))
    assert not t.rect_inside(BoundingRect(1, 1, 2, 2))
