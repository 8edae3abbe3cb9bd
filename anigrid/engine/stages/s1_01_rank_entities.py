"""S1.01: Rank Entities.

Score both media lists concurrently and merge with the primary entity and
favourite characters, best first.
"""

from __future__ import annotations

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import Phase, stage
from anigrid.engine.scoring import rank_bundle


@stage(
    id="S1.01",
    phase=Phase.RANKING,
    dependencies=["S0.01"],
    description="Score and merge entities into one rank order",
)
def rank_entities(ctx: MosaicContext) -> None:
    if ctx.bundle is None:
        raise ValueError("No entity bundle loaded")
    ctx.ranked = rank_bundle(ctx.bundle, include_adult=ctx.config.include_adult)
