"""Decode + center-crop image bytes to an exact cell size."""

from __future__ import annotations

import io

from PIL import Image, ImageOps


def prepare_image(data: bytes, size: tuple[int, int]) -> Image.Image:
    """Decode ``data`` and scale/crop it to fill ``size`` exactly (center crop).

    Raises ``ValueError`` for an empty target size and Pillow's
    ``UnidentifiedImageError`` / ``OSError`` for undecodable bytes.
    """
    w, h = size
    if w <= 0 or h <= 0:
        raise ValueError(f"Target size must be positive, got {w}x{h}")

    img = Image.open(io.BytesIO(data))
    img.load()
    return ImageOps.fit(
        img.convert("RGBA"),
        (w, h),
        method=Image.Resampling.LANCZOS,
        centering=(0.5, 0.5),
    )
