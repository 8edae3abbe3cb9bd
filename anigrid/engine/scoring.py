"""Scoring & aggregation: turns an entity bundle into a score-ordered sequence.

score = round(rating × 10) + status bonus + favourite bonus

The two media categories are scored by independent producer threads feeding
one unbounded queue; a single consumer waits for both (join barrier) before
draining it. Interleaving between producers is arbitrary; nothing is lost or
duplicated.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass

from anigrid.sources.base import EntityBundle, ListEntry, Status
from anigrid.utils.math_helpers import round_half_away

logger = logging.getLogger(__name__)

# Far above any computed score (max 100 + 100 + 200), so the primary entity
# always lands in the center cell.
PRIMARY_SCORE = 1_000_000_000

# Favourite characters rank right after the primary entity.
FAVORITE_CHARACTER_SCORE = 500

FAVORITE_BONUS = 200

_STATUS_BONUS: dict[Status, int] = {
    Status.COMPLETED: 100,
    Status.DROPPED: -100,
}

_SENTINEL = object()  # marks end of queue


@dataclass(frozen=True)
class RankedEntity:
    image: str
    score: int
    label: str = ""


def status_bonus(status: Status) -> int:
    return _STATUS_BONUS.get(status, 0)


def score_entry(rating: float | None, status: Status, is_favorite: bool) -> int:
    score = round_half_away(rating * 10) if rating is not None else 0
    score += status_bonus(status)
    if is_favorite:
        score += FAVORITE_BONUS
    return score


def _produce(
    entries: Iterable[ListEntry],
    out: queue.Queue,
    category: str,
    include_adult: bool,
) -> int:
    count = 0
    for entry in entries:
        if not entry.image:
            continue
        if entry.is_adult and not include_adult:
            continue
        score = score_entry(entry.rating, entry.status, entry.is_favorite)
        out.put(RankedEntity(image=entry.image, score=score, label=entry.title))
        count += 1
    logger.debug("Scored %d %s entries", count, category)
    return count


def aggregate(
    primary: str,
    characters: Iterable[str],
    first: Iterable[ListEntry],
    second: Iterable[ListEntry],
    *,
    include_adult: bool = False,
) -> list[RankedEntity]:
    """Score both categories concurrently and merge everything, best first.

    An exception in either producer propagates to the caller.
    """
    results: queue.Queue = queue.Queue()

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="anigrid-score") as pool:
        futures = [
            pool.submit(_produce, first, results, "first", include_adult),
            pool.submit(_produce, second, results, "second", include_adult),
        ]
        wait(futures)
        # Re-raise the first producer failure, if any
        produced = sum(f.result() for f in futures)

    results.put(_SENTINEL)

    ranked = [RankedEntity(image=primary, score=PRIMARY_SCORE, label="primary")]
    ranked.extend(
        RankedEntity(image=image, score=FAVORITE_CHARACTER_SCORE, label="character")
        for image in characters
        if image
    )
    while True:
        item = results.get()
        if item is _SENTINEL:
            break
        ranked.append(item)

    ranked.sort(key=lambda e: e.score, reverse=True)

    logger.info(
        "Ranking: %d entities (%d list entries, %d characters)",
        len(ranked),
        produced,
        len(ranked) - produced - 1,
    )
    return ranked


def rank_bundle(bundle: EntityBundle, *, include_adult: bool = False) -> list[RankedEntity]:
    return aggregate(
        bundle.primary,
        bundle.characters,
        bundle.anime,
        bundle.manga,
        include_adult=include_adult,
    )
