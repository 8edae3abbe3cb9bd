"""POST /api/mosaic: full pipeline, PNG out."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from anigrid.dependencies import get_image_source
from anigrid.engine.context import MosaicContext
from anigrid.engine.pipeline import MosaicError, create_pipeline
from anigrid.models.requests import MosaicRequest
from anigrid.sources.images import ImageSource

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/mosaic", response_class=Response)
def mosaic(req: MosaicRequest, images: ImageSource = Depends(get_image_source)) -> Response:
    ctx = MosaicContext(
        config=req.options.to_config(),
        bundle=req.entities,
        image_source=images,
    )

    try:
        create_pipeline().run(ctx)
    except MosaicError as e:
        logger.warning("Mosaic aborted: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    report = ctx.report
    return Response(
        content=ctx.png,
        media_type="image/png",
        headers={
            "X-Cells-Total": str(len(ctx.hexagons)),
            "X-Cells-Painted": str(report.painted if report else 0),
            "X-Cells-Failed": str(report.failed if report else 0),
        },
    )
