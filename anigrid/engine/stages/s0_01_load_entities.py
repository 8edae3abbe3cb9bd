"""S0.01: Load Entities.

Pull the entity bundle from the configured source. Any source failure is
fatal: no placements are generated without data.
"""

from __future__ import annotations

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import Phase, stage


@stage(
    id="S0.01",
    phase=Phase.SOURCE,
    description="Load the primary entity, favourite characters and both media lists",
)
def load_entities(ctx: MosaicContext) -> None:
    if ctx.bundle is not None:
        return
    if ctx.entity_source is None:
        raise ValueError("No entity source configured")
    ctx.bundle = ctx.entity_source.load()
