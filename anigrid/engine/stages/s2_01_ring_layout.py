"""S2.01: Ring Layout.

One hexagon per ranked entity, packed around the canvas center, nearest first.
"""

from __future__ import annotations

import logging

from anigrid.engine.context import MosaicContext
from anigrid.engine.hexagon import Hexagon
from anigrid.engine.registry import Phase, stage
from anigrid.engine.ring import generate_ring

logger = logging.getLogger(__name__)


@stage(
    id="S2.01",
    phase=Phase.LAYOUT,
    dependencies=["S1.01"],
    description="Pack one hexagon per entity around the canvas center",
)
def ring_layout(ctx: MosaicContext) -> None:
    cx, cy = ctx.config.center
    radius = ctx.config.cell_radius

    # The ring is empty for a single entity; it still gets the center cell
    if len(ctx.ranked) == 1:
        ctx.hexagons = [Hexagon.create(cx, cy, radius, 0)]
    else:
        ctx.hexagons = generate_ring(len(ctx.ranked), cx, cy, radius)

    outside = 0
    for h in ctx.hexagons:
        x0, y0, x1, y1 = h.box().rect()
        if x0 < 0 or y0 < 0 or x1 > ctx.config.canvas_width or y1 > ctx.config.canvas_height:
            outside += 1
    if outside:
        logger.warning("%d cells fall outside the canvas; raise the size or lower the radius", outside)
