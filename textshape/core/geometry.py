# textshape/core/geometry.py
"""
Axis-aligned rectangle helpers used for containment, collision and reporting.
Canvas coordinates: origin top-left, x right, y down, units px.
"""

from __future__ import annotations

from dataclasses import dataclass

from shapely.geometry import Polygon, box


@dataclass(frozen=True)
class BoundingRect:
    """AABB with top-left (x, y)."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def around_center(
        cls,
        cx: float,
        cy: float,
        width: float,
        height: float,
        spacing: float = 0.0,
    ) -> BoundingRect:
        """
        Rectangle of width x height centered on (cx, cy), inflated by spacing on every side.
        Negative spacing shrinks it.
        """
        return cls(
            x=cx - width / 2.0 - spacing,
            y=cy - height / 2.0 - spacing,
            width=width + spacing * 2.0,
            height=height + spacing * 2.0,
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def intersects(self, other: BoundingRect) -> bool:
        """Strict overlap on both axes; shared edges do not intersect."""
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def within(self, width: float, height: float) -> bool:
        """True if the rectangle fits inside a width x height canvas."""
        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height

    def probe_points(self) -> list[tuple[float, float]]:
        """
        Seven containment probes: four corners, center, top-mid, bottom-mid.
        The mid-edge probes catch thin diagonal shapes whose corners fall inside
        while the rectangle body crosses the background.
        """
        mid_x = self.x + self.width / 2.0
        return [
            (self.x, self.y),
            (self.right, self.y),
            (self.x, self.bottom),
            (self.right, self.bottom),
            (mid_x, self.y + self.height / 2.0),
            (mid_x, self.y),
            (mid_x, self.bottom),
        ]

    def to_polygon(self) -> Polygon:
        """Shapely box for area and union computations."""
        return box(self.x, self.y, self.right, self.bottom)


def effective_size(width: float, height: float, rotation_deg: float) -> tuple[float, float]:
    """Swap width/height for quarter-turn rotations; other angles keep the unrotated box."""
    if abs(rotation_deg) == 90:
        return (height, width)
    return (width, height)
