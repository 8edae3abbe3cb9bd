"""Regular hexagon cell: vertices, bounds, tiling neighbors, drawable path.

Vertex i sits at ``center + radius·(cos θᵢ, sin θᵢ)`` rotated by the cell
angle, θᵢ = i·60°. Neighbor centers sit at ``radius·√3`` on the edge normals
(angle + 30° + i·60°), which is the adjacency the ring packer walks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from anigrid.utils.geometry import Box, Point, points_to_array
from anigrid.utils.math_helpers import NEIGHBOR_RATIO, SIXTY_DEG, THIRTY_DEG

if TYPE_CHECKING:
    from collections.abc import Sequence


class PolygonSink(Protocol):
    """Anything that accepts a closed polygon path (raster surface, recorder)."""

    def clip_to_polygon(self, points: Sequence[tuple[float, float]]) -> None: ...


@dataclass(frozen=True)
class Hexagon:
    center: Point
    radius: float
    angle: float
    vertices: tuple[Point, ...]

    @classmethod
    def create(cls, x: float, y: float, radius: float, angle: float = 0.0) -> Hexagon:
        center = Point(x, y)
        start = Point(x + radius, y)
        vertices = tuple(start.rotate(center, angle + i * SIXTY_DEG) for i in range(6))
        return cls(center=center, radius=radius, angle=angle, vertices=vertices)

    def side(self) -> float:
        """Edge length; equals the radius for a regular hexagon (up to pixel snapping)."""
        return self.vertices[0].distance(self.vertices[1])

    def vertex_array(self) -> NDArray[np.float64]:
        return points_to_array(self.vertices)

    def box(self) -> Box:
        return Box.from_array(self.vertex_array())

    def neighbors(self) -> list[Point]:
        ring_radius = self.radius * NEIGHBOR_RATIO
        start = Point(self.center.x + ring_radius, self.center.y)
        return [
            start.rotate(self.center, self.angle + THIRTY_DEG + i * SIXTY_DEG)
            for i in range(6)
        ]

    def path(self) -> list[tuple[float, float]]:
        """Closed polygon path: the 6 vertices in order, first vertex repeated."""
        pts = [v.value() for v in self.vertices]
        return pts + [pts[0]]

    @property
    def polygon(self) -> Polygon:
        return Polygon([v.value() for v in self.vertices])

    def draw(self, sink: PolygonSink) -> None:
        sink.clip_to_polygon(self.path())
