"""POST /api/layout: ring layout only, no images."""

from __future__ import annotations

from fastapi import APIRouter

from anigrid.engine.ring import find_overlaps, generate_ring
from anigrid.models.requests import LayoutRequest
from anigrid.models.responses import CellResponse, LayoutResponse
from anigrid.utils.geometry import Point

router = APIRouter()


@router.post("/layout", response_model=LayoutResponse)
def layout(req: LayoutRequest) -> LayoutResponse:
    hexagons = generate_ring(req.n, req.x, req.y, req.radius)
    origin = Point(req.x, req.y)
    cells = [
        CellResponse(
            index=i,
            center=h.center.value(),
            distance=round(h.center.distance(origin), 3),
            vertices=[v.value() for v in h.vertices],
            box=h.box().rect(),
        )
        for i, h in enumerate(hexagons)
    ]
    return LayoutResponse(cells=cells, overlaps=find_overlaps(hexagons))
