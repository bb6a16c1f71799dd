"""Ordering and tie-break helpers shared by both resolvers."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, TypeVar

from rendezvous.domain.models import LocationScore, TimeResolution


T = TypeVar("T")


def time_resolution_sort_key(resolution: TimeResolution) -> tuple[int, int, int]:
    """Most supported first, then earliest day, then earliest time."""
    return (
        -resolution.support_count,
        resolution.slot.day_index,
        resolution.slot.time_index,
    )


def location_score_sort_key(score: LocationScore) -> tuple[float, int, str]:
    """Lowest average distance first; venue id and name settle exact ties."""
    return (
        score.average_distance_meters,
        score.venue.venue_id,
        score.venue.name,
    )


def fairness_gap_sort_key(score: LocationScore) -> tuple[float, float, int, str]:
    return (
        score.fairness_gap,
        score.average_distance_meters,
        score.venue.venue_id,
        score.venue.name,
    )


def rank_time_resolutions(resolutions: Iterable[TimeResolution]) -> list[TimeResolution]:
    return sorted(resolutions, key=time_resolution_sort_key)


def rank_location_scores(scores: Iterable[LocationScore]) -> list[LocationScore]:
    return sorted(scores, key=location_score_sort_key)


def rank_by_fairness_gap(scores: Iterable[LocationScore]) -> list[LocationScore]:
    """Alternate policy: most evenly spread travel burden first."""
    return sorted(scores, key=fairness_gap_sort_key)


def top_k(items: Sequence[T], k: Optional[int]) -> list[T]:
    """Return the first ``k`` ranked items, or all of them when ``k`` is None."""
    if k is None:
        return list(items)
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise ValueError("k must be a positive integer")
    return list(items[:k])


def tied_leaders(ranking: Sequence[TimeResolution]) -> list[TimeResolution]:
    """Return every entry sharing the top support count of a ranked list."""
    if not ranking:
        return []
    best = ranking[0].support_count
    leaders: list[TimeResolution] = []
    for resolution in ranking:
        if resolution.support_count != best:
            break
        leaders.append(resolution)
    return leaders
