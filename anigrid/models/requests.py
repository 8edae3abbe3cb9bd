"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from anigrid.engine.config import MosaicConfig
from anigrid.sources.base import EntityBundle


class MosaicOptions(BaseModel):
    canvas_width: int = Field(default=2000, gt=0, le=10000)
    canvas_height: int = Field(default=2000, gt=0, le=10000)
    cell_radius: float = Field(default=100.0, gt=0, description="Hexagon circumradius in pixels")
    stroke_width: int = Field(default=10, ge=0)
    stroke_color: str = "black"
    background: str = "white"
    include_adult: bool = False

    def to_config(self, max_workers: int | None = None) -> MosaicConfig:
        return MosaicConfig(
            canvas_width=self.canvas_width,
            canvas_height=self.canvas_height,
            cell_radius=self.cell_radius,
            stroke_width=self.stroke_width,
            stroke_color=self.stroke_color,
            background=self.background,
            include_adult=self.include_adult,
            max_workers=max_workers,
        )


class MosaicRequest(BaseModel):
    entities: EntityBundle = Field(..., description="Primary entity, characters and media lists")
    options: MosaicOptions = Field(default_factory=MosaicOptions)


class LayoutRequest(BaseModel):
    n: int = Field(..., ge=0, le=5000, description="Number of cells")
    x: float = Field(default=0.0, description="Center x")
    y: float = Field(default=0.0, description="Center y")
    radius: float = Field(default=100.0, gt=0, description="Hexagon circumradius")
