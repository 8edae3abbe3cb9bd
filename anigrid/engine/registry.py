"""Stage registry: every stage is a standalone function registered via decorator.

Usage:
    @stage(id="S2.01", phase=Phase.LAYOUT, dependencies=["S1.01"], fatal=True)
    def ring_layout(ctx: MosaicContext) -> None:
        ctx.hexagons = generate_ring(len(ctx.ranked), ...)

Adding a new stage = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from anigrid.engine.context import MosaicContext

logger = logging.getLogger(__name__)


class Phase(enum.IntEnum):
    SOURCE = 0
    RANKING = 1
    LAYOUT = 2
    RENDER = 3


@dataclass
class StageSpec:
    id: str
    phase: Phase
    fn: Callable[["MosaicContext"], None]
    dependencies: list[str] = field(default_factory=list)
    # A fatal stage aborts the run when it raises
    fatal: bool = True
    description: str = ""


class StageRegistry:
    """Singleton registry of all stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.phase.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def get_phase(self, phase: Phase) -> list[StageSpec]:
        specs = [s for s in self._stages.values() if s.phase == phase]
        return sorted(specs, key=lambda s: s.id)

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.phase, s.id))

    def resolve_order(self) -> list[StageSpec]:
        """Stages in dependency order; ties broken by stage ID (Kahn's algorithm)."""
        stages = self._stages
        for spec in stages.values():
            unknown = [d for d in spec.dependencies if d not in stages]
            if unknown:
                raise ValueError(f"Stage {spec.id} depends on unknown stages: {unknown}")

        pending = {sid: len(spec.dependencies) for sid, spec in stages.items()}
        ready = sorted(sid for sid, n in pending.items() if n == 0)
        ordered: list[StageSpec] = []

        while ready:
            sid = ready.pop(0)
            ordered.append(stages[sid])
            for other in stages.values():
                if sid in other.dependencies:
                    pending[other.id] -= 1
                    if pending[other.id] == 0:
                        ready.append(other.id)
                        ready.sort()

        if len(ordered) != len(stages):
            cycle = set(stages) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {cycle}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    phase: Phase,
    dependencies: list[str] | None = None,
    fatal: bool = True,
    description: str = "",
):
    """Decorator to register a stage function."""

    def decorator(fn: Callable[["MosaicContext"], None]):
        spec = StageSpec(
            id=id,
            phase=phase,
            fn=fn,
            dependencies=dependencies or [],
            fatal=fatal,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
