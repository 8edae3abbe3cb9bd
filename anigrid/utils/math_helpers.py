"""Math helpers: rounding and hexagon angle constants. No engine imports."""

from __future__ import annotations

import math

# 60° step between hexagon vertices, 30° offset to the edge midpoints.
SIXTY_DEG = math.pi / 3
THIRTY_DEG = math.pi / 6

# Center-to-center distance of edge-adjacent hexagons per unit radius: 2·cos(30°) = √3.
NEIGHBOR_RATIO = 2 * math.cos(THIRTY_DEG)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (0.5 → 1, -0.5 → -1).

    Python's ``round`` uses banker's rounding, which would put 1.5 and 2.5 in
    the same bucket.
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))
