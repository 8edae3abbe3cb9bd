"""AniList entity source: GraphQL over httpx.

Token acquisition is out of scope: the client expects a ready bearer token
(``ANILIST_TOKEN``). The two media collections are fetched concurrently and
the first failure aborts the load.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx
from pydantic import ValidationError

from anigrid.models.anilist import Entry, MediaListCollection, Viewer
from anigrid.sources.base import EntityBundle, EntitySourceError, ListEntry, MediaKind

logger = logging.getLogger(__name__)

ENDPOINT = "https://graphql.anilist.co"

VIEWER_QUERY = """
query {
  Viewer {
    id
    name
    avatar { large medium }
    favourites {
      anime { nodes { id } }
      manga { nodes { id } }
      characters { nodes { id image { large medium } } }
    }
  }
}
"""

MEDIA_COLLECTION_QUERY = """
query ($userId: Int, $type: MediaType) {
  MediaListCollection(userId: $userId, type: $type) {
    lists {
      entries {
        score(format: POINT_10_DECIMAL)
        status
        media {
          id
          title { userPreferred }
          coverImage { extraLarge large medium }
          isAdult
        }
      }
    }
  }
}
"""


class AniListClient:
    def __init__(
        self,
        token: str,
        endpoint: str = ENDPOINT,
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not token:
            raise EntitySourceError("AniList token not configured: set ANILIST_TOKEN in .env")
        self.endpoint = endpoint
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def query(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload = {"query": query, "variables": variables or {}}
        try:
            resp = self._client.post(self.endpoint, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            raise EntitySourceError(f"AniList request failed: {e}") from e

        if resp.status_code != 200:
            raise EntitySourceError(
                f"unexpected status code: {resp.status_code}, body: {resp.text}"
            )

        body = resp.json()
        if body.get("errors"):
            messages = "; ".join(str(err.get("message", err)) for err in body["errors"])
            raise EntitySourceError(f"AniList query failed: {messages}")
        return body.get("data") or {}

    def viewer(self) -> Viewer:
        logger.info("AniList: fetching current user")
        data = self.query(VIEWER_QUERY)
        try:
            return Viewer.model_validate(data["Viewer"])
        except (KeyError, TypeError, ValidationError) as e:
            raise EntitySourceError(f"Malformed Viewer response: {e}") from e

    def media_list(self, user_id: int, kind: MediaKind) -> MediaListCollection:
        logger.info("AniList: fetching %s list", kind.value.lower())
        data = self.query(MEDIA_COLLECTION_QUERY, {"userId": user_id, "type": kind.value})
        try:
            return MediaListCollection.model_validate(data["MediaListCollection"])
        except (KeyError, TypeError, ValidationError) as e:
            raise EntitySourceError(f"Malformed {kind.value} list response: {e}") from e

    def media_lists(self, user_id: int) -> tuple[MediaListCollection, MediaListCollection]:
        """Fetch the anime and manga collections concurrently."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="anigrid-anilist") as pool:
            anime = pool.submit(self.media_list, user_id, MediaKind.ANIME)
            manga = pool.submit(self.media_list, user_id, MediaKind.MANGA)
            return anime.result(), manga.result()

    def close(self) -> None:
        self._client.close()


def _to_entries(entries: list[Entry], favourite_ids: set[int]) -> list[ListEntry]:
    out: list[ListEntry] = []
    for entry in entries:
        image = entry.media.cover.best()
        if not image:
            continue
        out.append(
            ListEntry(
                image=image,
                # AniList reports 0 for "not rated"
                rating=entry.score or None,
                status=entry.status,
                is_favorite=entry.media.id in favourite_ids,
                media_id=entry.media.id,
                is_adult=entry.media.is_adult,
                title=entry.media.title.user_preferred or "",
            )
        )
    return out


class AniListSource:
    """Builds an :class:`EntityBundle` for the authenticated AniList user."""

    def __init__(self, client: AniListClient) -> None:
        self.client = client

    def load(self) -> EntityBundle:
        viewer = self.client.viewer()
        primary = viewer.avatar.large or viewer.avatar.medium
        if not primary:
            raise EntitySourceError(f"User {viewer.name!r} has no avatar image")

        anime, manga = self.client.media_lists(viewer.id)
        favs = viewer.favourites

        bundle = EntityBundle(
            primary=primary,
            characters=[
                c.image.large or c.image.medium
                for c in favs.characters.nodes
                if c.image.large or c.image.medium
            ],
            anime=_to_entries(anime.entries(), {n.id for n in favs.anime.nodes}),
            manga=_to_entries(manga.entries(), {n.id for n in favs.manga.nodes}),
        )
        logger.info(
            "AniList: %s has %d characters, %d anime, %d manga",
            viewer.name,
            len(bundle.characters),
            len(bundle.anime),
            len(bundle.manga),
        )
        return bundle
