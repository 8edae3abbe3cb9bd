"""Entity source backed by a JSON document shaped like :class:`EntityBundle`."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from anigrid.sources.base import EntityBundle, EntitySourceError

logger = logging.getLogger(__name__)


class JsonEntitySource:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> EntityBundle:
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise EntitySourceError(f"Cannot read entity file {self.path}: {e}") from e

        try:
            bundle = EntityBundle.model_validate_json(text)
        except ValidationError as e:
            raise EntitySourceError(f"Invalid entity file {self.path}: {e}") from e

        logger.info("Loaded %d entities from %s", bundle.size, self.path)
        return bundle
