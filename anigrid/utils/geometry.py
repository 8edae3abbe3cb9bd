"""Leaf-node geometry types. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from anigrid.utils.math_helpers import round_half_away


@dataclass(frozen=True)
class Point:
    """Immutable 2-D point. Hashable, so it can sit in the ring frontier set."""

    x: float
    y: float

    def value(self) -> tuple[float, float]:
        return (self.x, self.y)

    def rotate(self, base: Point, angle: float) -> Point:
        """Rotate around ``base`` by ``angle`` radians (CCW for positive angles).

        Both coordinates of the result are snapped to the nearest integer so
        repeated rotations and grid lookups stay stable against float drift.
        """
        cos_t = math.cos(angle)
        sin_t = math.sin(angle)
        dx = self.x - base.x
        dy = self.y - base.y

        new_x = cos_t * dx - sin_t * dy + base.x
        new_y = sin_t * dx + cos_t * dy + base.y
        return Point(float(round_half_away(new_x)), float(round_half_away(new_y)))

    def distance(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


def rotate(p: Point, base: Point, angle: float) -> Point:
    """Functional form of :meth:`Point.rotate`."""
    return p.rotate(base, angle)


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return a.distance(b)


def points_to_array(points: list[Point] | tuple[Point, ...]) -> NDArray[np.float64]:
    """Nx2 array of (x, y) coordinates."""
    if len(points) == 0:
        return np.empty((0, 2))
    return np.array([p.value() for p in points], dtype=np.float64)


@dataclass(frozen=True)
class Box:
    """Axis-aligned box. Stored as floats, read back through rounding accessors."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_points(cls, start: Point, end: Point) -> Box:
        return cls(start.x, start.y, end.x - start.x, end.y - start.y)

    @classmethod
    def from_array(cls, points: NDArray[np.float64]) -> Box:
        """Bounds of an Nx2 point array (min/max over x and y independently)."""
        if len(points) == 0:
            return cls(0.0, 0.0, 0.0, 0.0)
        start = Point(float(np.min(points[:, 0])), float(np.min(points[:, 1])))
        end = Point(float(np.max(points[:, 0])), float(np.max(points[:, 1])))
        return cls.from_points(start, end)

    def values(self) -> tuple[int, int, int, int]:
        return (
            round_half_away(self.x),
            round_half_away(self.y),
            round_half_away(self.w),
            round_half_away(self.h),
        )

    def start(self) -> tuple[int, int]:
        x, y, _, _ = self.values()
        return (x, y)

    def end(self) -> tuple[int, int]:
        x, y, w, h = self.values()
        return (x + w, y + h)

    def size(self) -> tuple[int, int]:
        _, _, w, h = self.values()
        return (w, h)

    def rect(self) -> tuple[int, int, int, int]:
        """Pillow-style ``(x0, y0, x1, y1)`` rectangle."""
        x, y, w, h = self.values()
        return (x, y, x + w, y + h)
