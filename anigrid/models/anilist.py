"""AniList GraphQL response models (only the fields the mosaic uses)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from anigrid.sources.base import Status


class _AniListModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Avatar(_AniListModel):
    large: str | None = None
    medium: str | None = None


class Node(_AniListModel):
    id: int


class FavouriteNodes(_AniListModel):
    nodes: list[Node] = Field(default_factory=list)


class CharacterNode(_AniListModel):
    id: int
    image: Avatar = Field(default_factory=Avatar)


class Characters(_AniListModel):
    nodes: list[CharacterNode] = Field(default_factory=list)


class Favourites(_AniListModel):
    anime: FavouriteNodes = Field(default_factory=FavouriteNodes)
    manga: FavouriteNodes = Field(default_factory=FavouriteNodes)
    characters: Characters = Field(default_factory=Characters)


class Viewer(_AniListModel):
    id: int
    name: str = ""
    avatar: Avatar = Field(default_factory=Avatar)
    favourites: Favourites = Field(default_factory=Favourites)


class CoverImage(_AniListModel):
    extra_large: str | None = Field(default=None, alias="extraLarge")
    large: str | None = None
    medium: str | None = None

    def best(self) -> str | None:
        return self.extra_large or self.large or self.medium


class MediaTitle(_AniListModel):
    user_preferred: str | None = Field(default=None, alias="userPreferred")


class Media(_AniListModel):
    id: int
    title: MediaTitle = Field(default_factory=MediaTitle)
    cover: CoverImage = Field(default_factory=CoverImage, alias="coverImage")
    is_adult: bool = Field(default=False, alias="isAdult")


class Entry(_AniListModel):
    media: Media
    score: float | None = None
    status: Status = Status.CURRENT


class MediaList(_AniListModel):
    entries: list[Entry] = Field(default_factory=list)


class MediaListCollection(_AniListModel):
    lists: list[MediaList] = Field(default_factory=list)

    def entries(self) -> list[Entry]:
        """All entries across custom and status lists, each media once."""
        seen: set[int] = set()
        out: list[Entry] = []
        for media_list in self.lists:
            for entry in media_list.entries:
                if entry.media.id in seen:
                    continue
                seen.add(entry.media.id)
                out.append(entry)
        return out
