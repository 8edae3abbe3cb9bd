"""Entity-source contract: what the ranking stage consumes, independent of transport."""

from __future__ import annotations

import enum
from typing import Protocol

from pydantic import BaseModel, Field


class Status(str, enum.Enum):
    CURRENT = "CURRENT"
    COMPLETED = "COMPLETED"
    DROPPED = "DROPPED"
    PAUSED = "PAUSED"
    PLANNING = "PLANNING"


class MediaKind(str, enum.Enum):
    ANIME = "ANIME"
    MANGA = "MANGA"


class ListEntry(BaseModel):
    """One media-list entry as far as ranking is concerned."""

    image: str = Field(..., description="Image reference (URL or local path)")
    rating: float | None = Field(default=None, description="User rating on a 0-10 scale")
    status: Status = Status.CURRENT
    is_favorite: bool = False
    media_id: int | None = None
    is_adult: bool = False
    title: str = ""


class EntityBundle(BaseModel):
    """Everything one mosaic run is built from."""

    primary: str = Field(..., description="Image reference for the center cell")
    characters: list[str] = Field(default_factory=list)
    anime: list[ListEntry] = Field(default_factory=list)
    manga: list[ListEntry] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return 1 + len(self.characters) + len(self.anime) + len(self.manga)


class EntitySourceError(RuntimeError):
    """The entity source could not produce a bundle; the run cannot proceed."""


class EntitySource(Protocol):
    def load(self) -> EntityBundle: ...
