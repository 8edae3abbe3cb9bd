"""Pillow-backed raster surface: the only shared mutable resource of a render.

Not thread-safe. The render pipeline serializes every call on one lock.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path

from PIL import Image, ImageChops, ImageDraw

logger = logging.getLogger(__name__)

Color = str | tuple[int, ...]


class RasterSurface:
    def __init__(self, width: int, height: int, background: Color = "white") -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._image = Image.new("RGBA", (width, height), background)
        self._clip: Image.Image | None = None

    @property
    def image(self) -> Image.Image:
        return self._image

    def clear(self, color: Color) -> None:
        self._image.paste(color, (0, 0, self.width, self.height))

    def clip_to_polygon(self, points: Sequence[tuple[float, float]]) -> None:
        """Restrict subsequent blits to the inside of ``points``."""
        mask = Image.new("L", (self.width, self.height), 0)
        ImageDraw.Draw(mask).polygon([tuple(p) for p in points], fill=255)
        self._clip = mask

    def reset_clip(self) -> None:
        self._clip = None

    def blit(self, image: Image.Image, x: int, y: int) -> None:
        """Paste ``image`` with its top-left corner at (x, y), honoring clip and alpha."""
        src = image if image.mode == "RGBA" else image.convert("RGBA")
        w, h = src.size
        mask = src.getchannel("A")
        if self._clip is not None:
            mask = ImageChops.multiply(mask, self._clip.crop((x, y, x + w, y + h)))
        self._image.paste(src, (x, y), mask)

    def stroke_polygon(
        self,
        points: Sequence[tuple[float, float]],
        width: int,
        color: Color,
    ) -> None:
        if width <= 0:
            return
        pts = [tuple(p) for p in points]
        if pts and pts[0] != pts[-1]:
            pts.append(pts[0])
        ImageDraw.Draw(self._image).line(pts, fill=color, width=width, joint="curve")

    def to_png_bytes(self) -> bytes:
        buf = io.BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        self._image.save(out, format="PNG")
        logger.info("Saved %dx%d mosaic to %s", self.width, self.height, out)
        return out
