"""S3.01: Render Cells.

Paint rank i into cell i on a fresh canvas. Per-cell failures are contained
by the render pipeline and show up in ``ctx.report``.
"""

from __future__ import annotations

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import Phase, stage
from anigrid.engine.render import RenderPipeline
from anigrid.raster.surface import RasterSurface


@stage(
    id="S3.01",
    phase=Phase.RENDER,
    dependencies=["S2.01"],
    description="Fetch, crop and composite every entity image into its cell",
)
def render_cells(ctx: MosaicContext) -> None:
    if ctx.image_source is None:
        raise ValueError("No image source configured")

    cfg = ctx.config
    ctx.surface = RasterSurface(cfg.canvas_width, cfg.canvas_height, cfg.background)
    renderer = RenderPipeline(
        ctx.surface,
        ctx.image_source,
        cfg,
        progress_callback=ctx.progress_callback,
    )
    ctx.report = renderer.render(ctx.hexagons, ctx.ranked)
