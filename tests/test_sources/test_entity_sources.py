"""Tests for the AniList and JSON entity sources."""

from __future__ import annotations

import json

import httpx
import pytest

from anigrid.sources.anilist import MEDIA_COLLECTION_QUERY, VIEWER_QUERY, AniListClient, AniListSource
from anigrid.sources.base import EntitySourceError, MediaKind, Status
from anigrid.sources.local import JsonEntitySource

VIEWER = {
    "id": 42,
    "name": "tester",
    "avatar": {"large": "https://img/avatar-large.png", "medium": "https://img/avatar-medium.png"},
    "favourites": {
        "anime": {"nodes": [{"id": 1}]},
        "manga": {"nodes": [{"id": 20}]},
        "characters": {
            "nodes": [
                {"id": 7, "image": {"large": "https://img/char-7.png"}},
                {"id": 8, "image": {"large": None, "medium": None}},
            ]
        },
    },
}


def _media(media_id: int, adult: bool = False, cover: str | None = "x") -> dict:
    return {
        "id": media_id,
        "title": {"userPreferred": f"title-{media_id}"},
        "coverImage": {"extraLarge": cover and f"https://img/{media_id}-xl.png", "large": None},
        "isAdult": adult,
    }


COLLECTIONS = {
    "ANIME": {
        "lists": [
            {
                "entries": [
                    {"score": 8.5, "status": "COMPLETED", "media": _media(1)},
                    {"score": 0, "status": "COMPLETED", "media": _media(2, adult=True)},
                    {"score": 5, "status": "COMPLETED", "media": _media(3, cover=None)},
                ],
            },
            {
                "entries": [{"score": 8.5, "status": "COMPLETED", "media": _media(1)}],
            },
        ]
    },
    "MANGA": {
        "lists": [
            {
                "entries": [{"score": None, "status": "DROPPED", "media": _media(20)}],
            }
        ]
    },
}


def _handler(request: httpx.Request) -> httpx.Response:
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    if "Viewer" in body["query"]:
        return httpx.Response(200, json={"data": {"Viewer": VIEWER}})
    kind = body["variables"]["type"]
    assert body["variables"]["userId"] == 42
    return httpx.Response(200, json={"data": {"MediaListCollection": COLLECTIONS[kind]}})


def _client(handler=_handler) -> AniListClient:
    return AniListClient(
        "secret",
        endpoint="https://graphql.test",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_anilist_source_builds_bundle():
    bundle = AniListSource(_client()).load()

    assert bundle.primary == "https://img/avatar-large.png"
    assert bundle.characters == ["https://img/char-7.png"]

    # media 3 has no cover, media 1 appears in two lists but counts once
    assert [e.media_id for e in bundle.anime] == [1, 2]
    first = bundle.anime[0]
    assert first.image == "https://img/1-xl.png"
    assert first.rating == 8.5
    assert first.status == Status.COMPLETED
    assert first.is_favorite
    assert first.title == "title-1"

    unrated = bundle.anime[1]
    assert unrated.rating is None
    assert unrated.is_adult
    assert not unrated.is_favorite

    assert len(bundle.manga) == 1
    assert bundle.manga[0].is_favorite
    assert bundle.manga[0].status == Status.DROPPED


def test_media_lists_fetches_both_kinds():
    anime, manga = _client().media_lists(42)
    assert len(anime.entries()) == 3
    assert len(manga.entries()) == 1


def test_missing_token():
    with pytest.raises(EntitySourceError, match="token"):
        AniListClient("")


def test_http_error_status():
    client = _client(lambda r: httpx.Response(500, text="down"))
    with pytest.raises(EntitySourceError, match="500"):
        client.viewer()


def test_graphql_errors():
    client = _client(lambda r: httpx.Response(200, json={"errors": [{"message": "Invalid token"}]}))
    with pytest.raises(EntitySourceError, match="Invalid token"):
        client.viewer()


def test_list_failure_aborts_load():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if "Viewer" in body["query"]:
            return httpx.Response(200, json={"data": {"Viewer": VIEWER}})
        if body["variables"]["type"] == MediaKind.MANGA.value:
            return httpx.Response(429, text="slow down")
        return httpx.Response(200, json={"data": {"MediaListCollection": COLLECTIONS["ANIME"]}})

    with pytest.raises(EntitySourceError, match="429"):
        AniListSource(_client(handler)).load()


def test_viewer_without_avatar():
    viewer = dict(VIEWER, avatar={"large": None, "medium": None})

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": {"Viewer": viewer}})

    with pytest.raises(EntitySourceError, match="avatar"):
        AniListSource(_client(handler)).load()


def test_json_source(tmp_path, sample_bundle):
    path = tmp_path / "bundle.json"
    path.write_text(sample_bundle.model_dump_json(), encoding="utf-8")

    loaded = JsonEntitySource(path).load()
    assert loaded == sample_bundle
    assert loaded.size == 8


def test_json_source_missing_file(tmp_path):
    with pytest.raises(EntitySourceError, match="Cannot read"):
        JsonEntitySource(tmp_path / "nope.json").load()


def test_json_source_invalid(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"characters": []}', encoding="utf-8")
    with pytest.raises(EntitySourceError, match="Invalid"):
        JsonEntitySource(path).load()


def test_queries_request_only_mapped_fields():
    query = VIEWER_QUERY + MEDIA_COLLECTION_QUERY
    for unused in ("bannerImage", "averageScore", "meanScore", "popularity", "color"):
        assert unused not in query
    for used in ("avatar", "favourites", "extraLarge", "isAdult", "userPreferred"):
        assert used in query
