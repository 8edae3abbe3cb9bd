"""S2.02: Overlap Check.

Sanity pass over the layout: no two cells may overlap beyond a pixel sliver.
"""

from __future__ import annotations

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import Phase, stage
from anigrid.engine.ring import find_overlaps


@stage(
    id="S2.02",
    phase=Phase.LAYOUT,
    dependencies=["S2.01"],
    fatal=False,
    description="Verify no two cells overlap",
)
def overlap_check(ctx: MosaicContext) -> None:
    ctx.overlaps = find_overlaps(ctx.hexagons)
    if ctx.overlaps:
        raise ValueError(f"{len(ctx.overlaps)} overlapping cell pairs: {ctx.overlaps[:5]}")
