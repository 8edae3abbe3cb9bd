"""Ring generator: packs N hexagons around a center, nearest-first.

Greedy frontier expansion: seed at the center, then repeatedly place a cell on
the frontier point closest to the seed, push that cell's free neighbors onto
the frontier and prune frontier points that have become occupied.
"""

from __future__ import annotations

import logging

from shapely.strtree import STRtree

from anigrid.engine.grid import OccupancyGrid
from anigrid.engine.hexagon import Hexagon
from anigrid.utils.geometry import Point

logger = logging.getLogger(__name__)

# Overlap above this fraction of a cell's area counts as a collision.
# Edge-adjacent cells touch along a shared edge; pixel snapping can leave a
# sliver of roughly side × 1px, well under 5% of the cell area.
_OVERLAP_AREA_FRACTION = 0.05


def generate_ring(n: int, x: float, y: float, radius: float) -> list[Hexagon]:
    """Return ``n`` non-overlapping hexagons ordered by distance from (x, y).

    ``n <= 1`` yields an empty list. Equidistant candidates are taken in
    (y, x) order, so the layout is reproducible.
    """
    if n <= 1:
        return []

    grid = OccupancyGrid(radius)
    frontier: set[Point] = set()

    seed = Hexagon.create(x, y, radius, 0)
    center = seed.center
    grid.mark_occupied(center)
    hexagons = [seed]

    def _taken(p: Point) -> bool:
        # Same lattice site reached along two rotation paths can differ by a
        # pixel or two; anything closer than a radius is the same cell.
        return grid.is_occupied(p) or grid.is_near(p, radius)

    frontier.update(seed.neighbors())

    for _ in range(n - 1):
        if not frontier:
            logger.warning("Ring frontier exhausted after %d cells", len(hexagons))
            break

        hex_center = min(frontier, key=lambda p: (p.distance(center), p.y, p.x))

        hexagon = Hexagon.create(hex_center.x, hex_center.y, radius, 0)
        hexagons.append(hexagon)
        grid.mark_occupied(hex_center)

        for p in hexagon.neighbors():
            if _taken(p):
                continue
            # Keep the first representative of a lattice site already on the frontier
            if any(p.distance(q) < radius for q in frontier):
                continue
            frontier.add(p)

        frontier = {p for p in frontier if not _taken(p)}

    hexagons.sort(key=lambda h: (h.center.distance(center), h.center.y, h.center.x))

    logger.debug(
        "Ring: %d cells, radius %.1f, outermost at %.1f",
        len(hexagons),
        radius,
        hexagons[-1].center.distance(center),
    )
    return hexagons


def find_overlaps(hexagons: list[Hexagon]) -> list[tuple[int, int]]:
    """Index pairs whose cells overlap by more than a pixel-scale sliver."""
    if len(hexagons) < 2:
        return []

    polygons = [h.polygon for h in hexagons]
    tree = STRtree(polygons)
    overlaps: list[tuple[int, int]] = []

    for i, poly in enumerate(polygons):
        limit = poly.area * _OVERLAP_AREA_FRACTION
        for j in tree.query(poly):
            j = int(j)
            if j <= i:
                continue
            if poly.intersection(polygons[j]).area > limit:
                overlaps.append((i, j))
    return sorted(overlaps)
