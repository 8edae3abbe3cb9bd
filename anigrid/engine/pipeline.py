"""Pipeline orchestrator: runs mosaic stages in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time
from collections.abc import Generator
from typing import Any

from anigrid.engine.context import MosaicContext
from anigrid.engine.registry import StageRegistry, get_registry

logger = logging.getLogger(__name__)

_STAGE_PACKAGE = "anigrid.engine.stages"


class MosaicError(RuntimeError):
    """A fatal stage failed; the run produced no image."""

    def __init__(self, stage_id: str, message: str) -> None:
        super().__init__(f"{stage_id}: {message}")
        self.stage_id = stage_id


def load_stages() -> None:
    """Import all stage modules so @stage decorators fire."""
    package = importlib.import_module(_STAGE_PACKAGE)
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{_STAGE_PACKAGE}.{module_name}")


class Pipeline:
    """Orchestrates the stage pipeline."""

    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: MosaicContext) -> MosaicContext:
        """Run every stage on ``ctx``. Raises :class:`MosaicError` on a fatal failure."""
        for _ in self.run_streaming(ctx):
            pass
        return ctx

    def run_streaming(self, ctx: MosaicContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict after each stage.

        The caller's ``ctx`` is mutated in-place, so after the generator is
        exhausted the context holds all results (same as ``run()``).
        """
        start = time.perf_counter()
        ordered = self.registry.resolve_order()
        total = len(ordered)

        logger.info("Pipeline: %d stages queued", total)

        for i, spec in enumerate(ordered):
            t0 = time.perf_counter()
            status = "ok"
            error = ""
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                status = "error"
                error = str(e)
                if spec.fatal:
                    logger.error("  %s FAILED (fatal): %s", spec.id, e)
                    raise MosaicError(spec.id, str(e)) from e
                logger.warning("  %s FAILED: %s", spec.id, e)

            elapsed_ms = round((time.perf_counter() - t0) * 1000, 1)
            logger.debug("  %s %s in %.1fms", spec.id, status, elapsed_ms)

            yield {
                "stage_id": spec.id,
                "description": spec.description,
                "phase": spec.phase.name,
                "index": i,
                "total": total,
                "elapsed_ms": elapsed_ms,
                "status": status,
                "error": error,
            }

        logger.info(
            "Pipeline complete: %d/%d stages in %.0fms",
            len(ctx.completed_stages),
            total,
            (time.perf_counter() - start) * 1000,
        )


def create_pipeline() -> Pipeline:
    """Factory: load the built-in stages and return a pipeline over them."""
    load_stages()
    return Pipeline()
