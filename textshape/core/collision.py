# textshape/core/collision.py
"""
Collision index over accepted placement rectangles.
Linear scan; fine for a few thousand items. A grid or quad-tree would replace
the scan if item counts grow by an order of magnitude.
"""

from __future__ import annotations

from collections.abc import Iterator

from textshape.core.geometry import BoundingRect


class CollisionIndex:
    """Accepted rectangles in insertion order."""

    def __init__(self) -> None:
        self._rects: list[BoundingRect] = []

    def collides(self, rect: BoundingRect) -> bool:
        """True if rect strictly overlaps any inserted rectangle."""
        # Newest first.
        for other in reversed(self._rects):
            if rect.intersects(other):
                return True
        return False

    def insert(self, rect: BoundingRect) -> None:
        self._rects.append(rect)

    def clear(self) -> None:
        self._rects.clear()

    def __len__(self) -> int:
        return len(self._rects)

    def __iter__(self) -> Iterator[BoundingRect]:
        return iter(self._rects)
