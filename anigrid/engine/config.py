"""Mosaic configuration: layout and styling inputs for one run."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MosaicConfig:
    """Canvas, cell and render settings. Styling is input, not algorithm."""

    # Canvas
    canvas_width: int = 2000
    canvas_height: int = 2000
    background: str = "white"

    # Cells: circumradius of each hexagon in pixels
    cell_radius: float = 100.0

    # Outline drawn around every cell after compositing
    stroke_width: int = 10
    stroke_color: str = "black"

    # Render pool size; None = os.cpu_count()
    max_workers: int | None = None

    # Skip media flagged adult by the entity source
    include_adult: bool = False

    output_path: str = "hexagon.png"

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError(
                f"Canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.cell_radius <= 0:
            raise ValueError(f"Cell radius must be positive, got {self.cell_radius}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @property
    def center(self) -> tuple[float, float]:
        return (self.canvas_width / 2, self.canvas_height / 2)
