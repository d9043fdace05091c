# textshape/core/containment.py
"""
Point and rectangle containment against an OccupancyMask.
Rectangle test is the 7-probe approximation: O(1) lookups instead of an O(area) overlap.
"""

from __future__ import annotations

import math

from textshape.core.geometry import BoundingRect
from textshape.core.types import OccupancyMask


class ContainmentTester:
    """Answers inside/outside queries for one mask."""

    def __init__(self, mask: OccupancyMask) -> None:
        self._cells = mask.cells
        self.width = mask.width
        self.height = mask.height

    def point_inside(self, x: float, y: float) -> bool:
        """False outside [0, width) x [0, height); else the cell at the floored coordinate."""
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return False
        return bool(self._cells[math.floor(y), math.floor(x)])

    def rect_inside(self, rect: BoundingRect) -> bool:
        """Canvas bounds check, then all seven probes of the rect must be inside."""
        if not rect.within(self.width, self.height):
            return False
        return all(self.point_inside(px, py) for px, py in rect.probe_points())
