"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class CellResponse(BaseModel):
    index: int
    center: tuple[float, float]
    distance: float
    vertices: list[tuple[float, float]]
    box: tuple[int, int, int, int]


class LayoutResponse(BaseModel):
    cells: list[CellResponse] = Field(default_factory=list)
    overlaps: list[tuple[int, int]] = Field(default_factory=list)
