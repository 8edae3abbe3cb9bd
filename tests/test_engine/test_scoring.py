"""Tests for scoring and concurrent aggregation."""

from __future__ import annotations

import pytest

from anigrid.engine.scoring import (
    FAVORITE_CHARACTER_SCORE,
    PRIMARY_SCORE,
    RankedEntity,
    aggregate,
    rank_bundle,
    score_entry,
)
from anigrid.sources.base import ListEntry, Status


@pytest.mark.parametrize(
    "rating, status, favorite, expected",
    [
        (8.5, Status.COMPLETED, False, 185),
        (None, Status.DROPPED, True, 100),
        (10, Status.PLANNING, True, 300),
        (None, Status.CURRENT, False, 0),
        (7.25, Status.PAUSED, False, 73),
        (0.0, Status.DROPPED, False, -100),
    ],
)
def test_score_entry(rating, status, favorite, expected):
    assert score_entry(rating, status, favorite) == expected


def _entries(prefix: str, count: int) -> list[ListEntry]:
    return [
        ListEntry(image=f"{prefix}-{i}", rating=(i % 11), status=Status.CURRENT)
        for i in range(count)
    ]


def test_aggregate_is_complete():
    first = _entries("anime", 40)
    second = _entries("manga", 25)

    ranked = aggregate("avatar", ["c1", "c2", "c3"], first, second)

    assert len(ranked) == 1 + 3 + 40 + 25
    images = [e.image for e in ranked]
    assert len(set(images)) == len(images)
    assert {e.image for e in first + second} <= set(images)


def test_aggregate_sorted_descending():
    ranked = aggregate("avatar", ["c1"], _entries("a", 30), _entries("m", 30))
    scores = [e.score for e in ranked]
    assert scores == sorted(scores, reverse=True)


def test_primary_and_characters_lead():
    ranked = aggregate(
        "avatar",
        ["c1", "c2"],
        [ListEntry(image="fav", rating=10, status=Status.COMPLETED, is_favorite=True)],
        [],
    )
    assert ranked[0] == RankedEntity(image="avatar", score=PRIMARY_SCORE, label="primary")
    assert {e.image for e in ranked[1:3]} == {"c1", "c2"}
    assert all(e.score == FAVORITE_CHARACTER_SCORE for e in ranked[1:3])
    assert ranked[3].image == "fav"
    assert ranked[3].score == 400


def test_empty_streams():
    ranked = aggregate("avatar", [], [], [])
    assert [e.image for e in ranked] == ["avatar"]


def test_adult_entries_filtered_by_default():
    entries = [
        ListEntry(image="safe", rating=5),
        ListEntry(image="nsfw", rating=9, is_adult=True),
    ]
    assert [e.image for e in aggregate("p", [], entries, [])] == ["p", "safe"]
    assert {e.image for e in aggregate("p", [], entries, [], include_adult=True)} == {
        "p",
        "safe",
        "nsfw",
    }


def test_entries_without_image_are_dropped():
    ranked = aggregate("p", [""], [ListEntry(image="", rating=5)], [])
    assert [e.image for e in ranked] == ["p"]


def test_producer_failure_propagates():
    def broken():
        yield ListEntry(image="ok", rating=1)
        raise RuntimeError("stream broke")

    with pytest.raises(RuntimeError, match="stream broke"):
        aggregate("p", [], broken(), _entries("m", 5))


def test_rank_bundle(sample_bundle):
    ranked = rank_bundle(sample_bundle)

    assert len(ranked) == sample_bundle.size
    assert ranked[0].image == "avatar"
    by_image = {e.image: e.score for e in ranked}
    assert by_image["anime-1"] == 185
    assert by_image["anime-2"] == 100
    assert by_image["manga-1"] == 300
    assert by_image["manga-2"] == 70
