"""Venue ranking by participant travel distance."""

from __future__ import annotations

from typing import Sequence

from rendezvous.domain.constraints import (
    InvalidCoordinateError,
    NoVenuesProvidedError,
    validate_coordinate,
    validate_venues,
)
from rendezvous.domain.models import Coordinate, LocationScore, ParticipantSubmission, Venue
from rendezvous.domain.ranking import rank_location_scores
from rendezvous.utils.geo import distance_matrix
from rendezvous.utils.logger import get_logger


logger = get_logger(__name__)


def located_coordinates(submissions: Sequence[ParticipantSubmission]) -> list[Coordinate]:
    """Validated coordinates of located participants in canonical order.

    Unlocated submissions are left out entirely rather than counted as zero
    distance. Sorting makes the float aggregation independent of input order.
    """
    coordinates: list[Coordinate] = []
    for index, submission in enumerate(submissions):
        if submission.location is None:
            continue
        try:
            coordinates.append(validate_coordinate(submission.location))
        except InvalidCoordinateError as exc:
            participant = submission.participant_id or f"#{index}"
            logger.warning(
                "Rejected submission location | participant=%s | reason=%s",
                participant,
                exc,
            )
            raise InvalidCoordinateError(f"participant {participant}: {exc}") from exc
    coordinates.sort(key=lambda item: (item.lat, item.lng))
    return coordinates


def score_venues(
    venues: Sequence[Venue],
    coordinates: Sequence[Coordinate],
) -> list[LocationScore]:
    """Average, worst-case and gap distances for every venue, unranked."""
    if not coordinates:
        return []
    distances = distance_matrix([venue.coordinate for venue in venues], coordinates)
    scores: list[LocationScore] = []
    for venue, row in zip(venues, distances):
        average = float(row.mean())
        maximum = float(row.max())
        scores.append(
            LocationScore(
                venue=venue,
                average_distance_meters=average,
                max_distance_meters=maximum,
                fairness_gap=max(0.0, maximum - average),
            )
        )
    return scores


def resolve_location_fairness(
    submissions: Sequence[ParticipantSubmission],
    venues: Sequence[Venue],
) -> list[LocationScore]:
    validate_venues(venues)
    coordinates = located_coordinates(submissions)
    return rank_location_scores(score_venues(venues, coordinates))


class LocationFairnessResolver:
    """Ranks candidate venues by mean participant distance."""

    def resolve(
        self,
        submissions: Sequence[ParticipantSubmission],
        venues: Sequence[Venue],
    ) -> list[LocationScore]:
        logger.debug(
            "Location fairness requested | submissions=%s | venues=%s",
            len(submissions),
            len(venues),
        )
        try:
            ranking = resolve_location_fairness(submissions, venues)
        except NoVenuesProvidedError:
            logger.warning(
                "Location fairness rejected; venue catalog is empty | submissions=%s",
                len(submissions),
            )
            raise
        if not ranking:
            logger.info(
                "Location fairness empty; no located participants | submissions=%s",
                len(submissions),
            )
            return ranking

        best = ranking[0]
        logger.info(
            (
                "Location fairness resolved | best_venue=%s | average_m=%.1f | "
                "max_m=%.1f | gap_m=%.1f | venues=%s"
            ),
            best.venue.venue_id,
            best.average_distance_meters,
            best.max_distance_meters,
            best.fairness_gap,
            len(ranking),
        )
        return ranking
