"""Render pipeline: parallel prepare, serialized composite.

Prepare (fetch, decode, center-crop to the cell box) runs on a bounded worker
pool with no lock held. Composite (clip → blit → unclip → stroke) mutates the
one shared surface and runs under a single lock. A failed prepare leaves its
cell unpainted; it never aborts the run.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from anigrid.engine.config import MosaicConfig
from anigrid.raster.imaging import prepare_image

if TYPE_CHECKING:
    from collections.abc import Callable

    from PIL import Image

    from anigrid.engine.hexagon import Hexagon
    from anigrid.engine.scoring import RankedEntity
    from anigrid.raster.surface import RasterSurface
    from anigrid.sources.images import ImageSource

logger = logging.getLogger(__name__)


@dataclass
class RenderReport:
    total: int = 0
    painted: int = 0
    failed: int = 0
    # cell index → error message
    errors: dict[int, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0


class RenderPipeline:
    def __init__(
        self,
        surface: RasterSurface,
        image_source: ImageSource,
        config: MosaicConfig | None = None,
        progress_callback: Callable[[float], None] | None = None,
    ) -> None:
        self.surface = surface
        self.image_source = image_source
        self.config = config or MosaicConfig()
        self.progress_callback = progress_callback
        self.max_workers = self.config.max_workers or os.cpu_count() or 1

        self._canvas_lock = threading.Lock()
        self._report_lock = threading.Lock()

    def render(self, hexagons: list[Hexagon], entities: list[RankedEntity]) -> RenderReport:
        """Paint entity i into cell i; return once every cell has been attempted."""
        if len(hexagons) != len(entities):
            raise ValueError(
                f"Cell/entity count mismatch: {len(hexagons)} cells, {len(entities)} entities"
            )

        start = time.perf_counter()
        total = len(hexagons)
        report = RenderReport(total=total)
        gate = threading.BoundedSemaphore(self.max_workers)

        logger.info("Render: %d cells on %d workers", total, self.max_workers)

        def _unit(index: int, hexagon: Hexagon, entity: RankedEntity) -> None:
            try:
                self._render_cell(index, hexagon, entity, report)
            finally:
                gate.release()

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="anigrid-render"
        ) as pool:
            futures = []
            for index, (hexagon, entity) in enumerate(zip(hexagons, entities)):
                # Admission: block until a slot frees
                gate.acquire()
                futures.append(pool.submit(_unit, index, hexagon, entity))
        # Leaving the with-block joins every worker

        # Prepare failures are contained per cell; anything left is a defect
        for future in futures:
            future.result()

        report.elapsed_ms = round((time.perf_counter() - start) * 1000, 1)
        logger.info(
            "Render complete: %d/%d cells painted in %.0fms (%d failed)",
            report.painted,
            total,
            report.elapsed_ms,
            report.failed,
        )
        return report

    def _render_cell(
        self,
        index: int,
        hexagon: Hexagon,
        entity: RankedEntity,
        report: RenderReport,
    ) -> None:
        box = hexagon.box()
        image: Image.Image | None = None
        try:
            data = self.image_source.fetch(entity.image)
            image = prepare_image(data, box.size())
        except Exception as e:
            logger.warning("  cell %d (%s) FAILED: %s", index, entity.image, e)
            with self._report_lock:
                report.failed += 1
                report.errors[index] = str(e)

        self._composite(hexagon, image)

        with self._report_lock:
            if image is not None:
                report.painted += 1
            done = report.painted + report.failed
        if self.progress_callback is not None:
            self.progress_callback(done / report.total)

    def _composite(self, hexagon: Hexagon, image: Image.Image | None) -> None:
        path = hexagon.path()
        with self._canvas_lock:
            if image is not None:
                hexagon.draw(self.surface)
                x, y = hexagon.box().start()
                self.surface.blit(image, x, y)
                self.surface.reset_clip()
            self.surface.stroke_polygon(path, self.config.stroke_width, self.config.stroke_color)
