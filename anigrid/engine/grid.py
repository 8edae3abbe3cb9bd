"""Occupancy grid: spatial hash over quantized coordinates.

Two points share a key iff ``round(x/r), round(y/r)`` agree. This is bucket
equality, not point equality: it tolerates the pixel jitter of repeated
rotations. The grid only grows.
"""

from __future__ import annotations

from collections import defaultdict

from anigrid.utils.geometry import Point
from anigrid.utils.math_helpers import round_half_away

GridKey = tuple[int, int]


class OccupancyGrid:
    def __init__(self, radius: float) -> None:
        if radius <= 0:
            raise ValueError(f"Grid radius must be positive, got {radius}")
        self.radius = radius
        self._occupied: dict[GridKey, list[Point]] = defaultdict(list)

    def key(self, p: Point) -> GridKey:
        return (round_half_away(p.x / self.radius), round_half_away(p.y / self.radius))

    def is_occupied(self, p: Point) -> bool:
        return self.key(p) in self._occupied

    def mark_occupied(self, p: Point) -> None:
        self._occupied[self.key(p)].append(p)

    def is_near(self, p: Point, tolerance: float) -> bool:
        """True if any marked point lies within ``tolerance`` of ``p``.

        Scans the 3×3 bucket neighborhood, so ``tolerance`` must not exceed
        the bucket size.
        """
        kx, ky = self.key(p)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                # .get so that probing never creates empty buckets
                for q in self._occupied.get((kx + dx, ky + dy), ()):
                    if p.distance(q) < tolerance:
                        return True
        return False

    def __len__(self) -> int:
        return len(self._occupied)
