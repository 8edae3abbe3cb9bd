"""MosaicContext: the single mutable state object flowing through all stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from anigrid.engine.config import MosaicConfig

if TYPE_CHECKING:
    from anigrid.engine.hexagon import Hexagon
    from anigrid.engine.render import RenderReport
    from anigrid.engine.scoring import RankedEntity
    from anigrid.raster.surface import RasterSurface
    from anigrid.sources.base import EntityBundle, EntitySource
    from anigrid.sources.images import ImageSource


@dataclass(frozen=True)
class Placement:
    """One cell paired with the entity painted into it."""

    index: int
    hexagon: Hexagon
    entity: RankedEntity


@dataclass
class MosaicContext:
    """Shared state for one mosaic run."""

    config: MosaicConfig = field(default_factory=MosaicConfig)

    # --- Collaborators ---
    entity_source: EntitySource | None = None
    image_source: ImageSource | None = None

    # --- Stage outputs ---
    bundle: EntityBundle | None = None
    ranked: list[RankedEntity] = field(default_factory=list)
    hexagons: list[Hexagon] = field(default_factory=list)
    overlaps: list[tuple[int, int]] = field(default_factory=list)
    surface: RasterSurface | None = None
    report: RenderReport | None = None
    png: bytes = b""

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    progress_callback: Callable[[float], None] | None = None

    @property
    def placements(self) -> list[Placement]:
        """Rank i joined to cell i, purely by position."""
        if len(self.ranked) != len(self.hexagons):
            raise ValueError(
                f"{len(self.ranked)} ranked entities vs {len(self.hexagons)} cells"
            )
        return [
            Placement(index=i, hexagon=h, entity=e)
            for i, (h, e) in enumerate(zip(self.hexagons, self.ranked))
        ]

    def summary(self) -> dict[str, Any]:
        return {
            "entities": len(self.ranked),
            "cells": len(self.hexagons),
            "painted": self.report.painted if self.report else 0,
            "failed": self.report.failed if self.report else 0,
            "stages_completed": len(self.completed_stages),
            "errors": dict(self.errors),
        }
