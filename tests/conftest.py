"""Shared test fixtures."""

from __future__ import annotations

import io
import threading
import time

import pytest
from PIL import Image

from anigrid.sources.base import EntityBundle, ListEntry, Status
from anigrid.sources.images import ImageFetchError


def png_bytes(color: tuple[int, int, int] = (255, 0, 0), size: tuple[int, int] = (64, 96)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


RED_PNG = png_bytes((255, 0, 0))
BLUE_PNG = png_bytes((0, 0, 255), size=(120, 40))


class FakeImageSource:
    """In-memory image source. Unknown refs and refs starting with 'bad' fail."""

    def __init__(self, images: dict[str, bytes] | None = None, delay: float = 0.0) -> None:
        self.images = dict(images or {})
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def fetch(self, ref: str) -> bytes:
        with self._lock:
            self.calls.append(ref)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if ref.startswith("bad") or ref not in self.images:
                raise ImageFetchError(f"no such image: {ref}")
            return self.images[ref]
        finally:
            with self._lock:
                self.in_flight -= 1


SAMPLE_BUNDLE = EntityBundle(
    primary="avatar",
    characters=["char-1", "char-2"],
    anime=[
        ListEntry(image="anime-1", rating=8.5, status=Status.COMPLETED, media_id=1),
        ListEntry(image="anime-2", rating=None, status=Status.DROPPED, is_favorite=True, media_id=2),
        ListEntry(image="anime-3", rating=6.0, status=Status.CURRENT, media_id=3),
    ],
    manga=[
        ListEntry(image="manga-1", rating=10, status=Status.PLANNING, is_favorite=True, media_id=4),
        ListEntry(image="manga-2", rating=7.0, status=Status.PAUSED, media_id=5),
    ],
)


@pytest.fixture
def sample_bundle() -> EntityBundle:
    return SAMPLE_BUNDLE.model_copy(deep=True)


@pytest.fixture
def image_source(sample_bundle: EntityBundle) -> FakeImageSource:
    refs = [sample_bundle.primary, *sample_bundle.characters]
    refs += [e.image for e in sample_bundle.anime + sample_bundle.manga]
    return FakeImageSource({ref: RED_PNG for ref in refs})
