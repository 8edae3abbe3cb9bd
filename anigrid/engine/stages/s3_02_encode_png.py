"""S3.02: Encode PNG."""

from __future__ import annotations

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import Phase, stage


@stage(
    id="S3.02",
    phase=Phase.RENDER,
    dependencies=["S3.01"],
    description="Encode the finished canvas as PNG",
)
def encode_png(ctx: MosaicContext) -> None:
    if ctx.surface is None:
        raise ValueError("Nothing rendered")
    ctx.png = ctx.surface.to_png_bytes()
