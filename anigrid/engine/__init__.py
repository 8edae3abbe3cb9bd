"""anigrid mosaic engine: ring packing, ranking and rendering."""

from anigrid.engine.registry import stage, Phase, get_registry
from anigrid.engine.context import MosaicContext, Placement
from anigrid.engine.pipeline import MosaicError, Pipeline, create_pipeline
from anigrid.engine.ring import generate_ring

__all__ = [
    "stage",
    "Phase",
    "get_registry",
    "MosaicContext",
    "Placement",
    "MosaicError",
    "Pipeline",
    "create_pipeline",
    "generate_ring",
]
