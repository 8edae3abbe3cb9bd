"""Image byte source: image reference → raw bytes, with an on-disk cache.

Remote references are downloaded once and kept under ``cache_dir``. The cache
file name is a short hash of host and path followed by the URL basename, so
equal basenames from different URLs do not collide. Local paths and
``file://`` URLs are read as-is.
"""

from __future__ import annotations

import hashlib
import logging
import os
import posixpath
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import httpx

logger = logging.getLogger(__name__)


class ImageFetchError(RuntimeError):
    """An image reference could not be turned into bytes."""


class ImageSource(Protocol):
    def fetch(self, ref: str) -> bytes: ...


class CachedImageSource:
    def __init__(
        self,
        cache_dir: str | Path,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._owns_client = client is None

    def cache_path(self, ref: str) -> Path:
        parsed = urlparse(ref)
        name = posixpath.basename(unquote(parsed.path))
        if not name:
            raise ImageFetchError(f"Cannot derive a cache file name from {ref!r}")
        digest = hashlib.sha1(f"{parsed.netloc}{parsed.path}".encode()).hexdigest()[:12]
        return self.cache_dir / f"{digest}-{name}"

    def fetch(self, ref: str) -> bytes:
        parsed = urlparse(ref)
        if parsed.scheme in ("", "file"):
            return self._read_local(Path(unquote(parsed.path) if parsed.scheme else ref))
        if parsed.scheme not in ("http", "https"):
            raise ImageFetchError(f"Unsupported image reference scheme: {ref!r}")

        path = self.cache_path(ref)
        if path.exists():
            logger.debug("Image already cached: %s", path)
            return path.read_bytes()

        try:
            resp = self._client.get(ref)
        except httpx.HTTPError as e:
            raise ImageFetchError(f"Failed to download {ref}: {e}") from e

        if resp.status_code != 200:
            raise ImageFetchError(f"Failed to download {ref}: status code {resp.status_code}")

        data = resp.content
        try:
            self._store(path, data)
        except OSError as e:
            # Cache write failure still leaves usable bytes
            logger.warning("Could not cache %s: %s", path, e)
        else:
            logger.debug("Image downloaded: %s", path)
        return data

    def _store(self, path: Path, data: bytes) -> None:
        # Readers only ever see a complete file under the final name
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=path.parent, suffix=".part", delete=False) as tmp:
            tmp.write(data)
        try:
            os.replace(tmp.name, path)
        except OSError:
            os.unlink(tmp.name)
            raise

    def _read_local(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise ImageFetchError(f"Failed to read {path}: {e}") from e

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> CachedImageSource:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
