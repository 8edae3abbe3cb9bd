"""FastAPI dependency injection."""

from __future__ import annotations

from anigrid.config import settings
from anigrid.sources.images import CachedImageSource


def get_settings():
    return settings


def get_image_source():
    source = CachedImageSource(settings.image_cache_dir, timeout=settings.http_timeout)
    try:
        yield source
    finally:
        source.close()
