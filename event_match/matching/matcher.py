"""Rank a candidate pool against one profile."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from event_match.matching.scorer import score_profiles
from event_match.profile.models import MatchResult, SeededProfile

logger = logging.getLogger("event_match.matching")

DEFAULT_LIMIT = 5


def generate_matches(
    profile: SeededProfile,
    pool: Sequence[SeededProfile],
    limit: int = DEFAULT_LIMIT,
    max_workers: Optional[int] = None,
    min_score: int = 0,
) -> list[MatchResult]:
    """Score every other profile in the pool and return the top ``limit``.

    The profile itself (matched by id) is never included. Results are
    sorted by score descending; equal scores keep their pool order. With
    ``max_workers`` > 1 scoring runs on a thread pool, and the ranking is
    identical to the serial one.
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    candidates = [p for p in pool if p.id != profile.id]

    if max_workers and max_workers > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            scores = list(executor.map(
                lambda c: score_profiles(profile.attributes, c.attributes),
                candidates,
            ))
    else:
        scores = [score_profiles(profile.attributes, c.attributes) for c in candidates]

    results = [
        MatchResult(candidate=c, score=s)
        for c, s in zip(candidates, scores)
        if s >= min_score
    ]

    # list.sort is stable, so ties stay in pool order
    results.sort(key=lambda r: r.score, reverse=True)

    logger.info(
        "Ranked %d candidates for profile %s, returning top %d",
        len(results), profile.id, min(limit, len(results)),
    )

    return results[:limit]
