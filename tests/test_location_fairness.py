from __future__ import annotations

import math
import random

import pytest

from rendezvous.domain.constraints import InvalidCoordinateError, NoVenuesProvidedError
from rendezvous.domain.models import Coordinate, ParticipantSubmission, Venue
from rendezvous.services.location_fairness_service import (
    LocationFairnessResolver,
    located_coordinates,
    resolve_location_fairness,
)
from rendezvous.utils.geo import haversine_distance


CENTER = Coordinate(lat=40.4270, lng=-86.9180)
METERS_PER_DEGREE = 6_371_000.0 * math.pi / 180.0


def _offset(origin: Coordinate, north_m: float, east_m: float) -> Coordinate:
    return Coordinate(
        lat=origin.lat + north_m / METERS_PER_DEGREE,
        lng=origin.lng + east_m / (METERS_PER_DEGREE * math.cos(math.radians(origin.lat))),
    )


def _located(coordinate: Coordinate | None, participant_id: str | None = None) -> ParticipantSubmission:
    return ParticipantSubmission(location=coordinate, participant_id=participant_id)


def _triangle_submissions() -> list[ParticipantSubmission]:
    return [
        _located(_offset(CENTER, 80.0, 0.0), "north"),
        _located(_offset(CENTER, -35.0, -30.0), "southwest"),
        _located(_offset(CENTER, -35.0, 30.0), "southeast"),
    ]


def test_centroid_venue_ranks_ahead_of_off_center_venue() -> None:
    venue_a = Venue(venue_id=1, name="Central Hall", coordinate=CENTER)
    venue_b = Venue(venue_id=2, name="East Annex", coordinate=_offset(CENTER, 0.0, 400.0))

    ranking = LocationFairnessResolver().resolve(_triangle_submissions(), [venue_b, venue_a])

    assert [score.venue for score in ranking] == [venue_a, venue_b]
    assert ranking[0].average_distance_meters < ranking[1].average_distance_meters
    assert ranking[0].max_distance_meters == pytest.approx(80.0, rel=1e-3)


def test_scores_match_scalar_haversine_aggregates() -> None:
    submissions = _triangle_submissions()
    venue = Venue(venue_id=9, name="Stewart Center", coordinate=Coordinate(40.4265, -86.9186))

    (score,) = resolve_location_fairness(submissions, [venue])

    distances = [haversine_distance(venue.coordinate, item.location) for item in submissions]
    assert score.average_distance_meters == pytest.approx(sum(distances) / len(distances), rel=1e-9)
    assert score.max_distance_meters == pytest.approx(max(distances), rel=1e-9)
    assert score.fairness_gap == pytest.approx(
        score.max_distance_meters - score.average_distance_meters,
        abs=1e-9,
    )
    assert score.fairness_gap >= 0.0


def test_all_unlocated_submissions_resolve_to_empty_list() -> None:
    venues = [Venue(venue_id=1, name="Hall", coordinate=CENTER)]
    assert LocationFairnessResolver().resolve([_located(None), _located(None)], venues) == []


def test_no_submissions_resolve_to_empty_list() -> None:
    venues = [Venue(venue_id=1, name="Hall", coordinate=CENTER)]
    assert LocationFairnessResolver().resolve([], venues) == []


def test_unlocated_participants_are_excluded_not_counted_as_zero() -> None:
    venue = Venue(venue_id=1, name="Hall", coordinate=CENTER)
    located = _located(_offset(CENTER, 1000.0, 0.0))

    (with_absent,) = resolve_location_fairness([located, _located(None)], [venue])
    (alone,) = resolve_location_fairness([located], [venue])

    assert with_absent == alone
    assert with_absent.average_distance_meters == pytest.approx(1000.0, rel=1e-6)


def test_single_participant_has_zero_fairness_gap() -> None:
    venue = Venue(venue_id=1, name="Hall", coordinate=CENTER)
    (score,) = resolve_location_fairness([_located(_offset(CENTER, 250.0, 0.0))], [venue])
    assert score.fairness_gap == 0.0


def test_out_of_range_latitude_raises_invalid_coordinate() -> None:
    venues = [Venue(venue_id=1, name="Hall", coordinate=CENTER)]
    submissions = [_located(CENTER), _located(Coordinate(lat=91.0, lng=-86.9), "dana")]

    with pytest.raises(InvalidCoordinateError, match="dana"):
        LocationFairnessResolver().resolve(submissions, venues)


def test_partial_coordinate_raises_instead_of_being_skipped() -> None:
    submissions = [_located(Coordinate(lat=40.0, lng=None))]  # type: ignore[arg-type]

    with pytest.raises(InvalidCoordinateError):
        located_coordinates(submissions)


def test_empty_venue_catalog_raises() -> None:
    with pytest.raises(NoVenuesProvidedError):
        LocationFairnessResolver().resolve(_triangle_submissions(), [])


def test_empty_venue_catalog_raises_even_without_located_participants() -> None:
    with pytest.raises(NoVenuesProvidedError):
        LocationFairnessResolver().resolve([_located(None)], [])


def test_full_catalog_is_ranked() -> None:
    venues = [
        Venue(venue_id=index, name=f"Venue {index}", coordinate=_offset(CENTER, 50.0 * index, 0.0))
        for index in range(1, 8)
    ]
    ranking = resolve_location_fairness(_triangle_submissions(), venues)
    assert len(ranking) == len(venues)
    averages = [score.average_distance_meters for score in ranking]
    assert averages == sorted(averages)


def test_resolution_is_byte_identical_across_calls_and_input_orders() -> None:
    rng = random.Random(3)
    submissions = [
        _located(_offset(CENTER, rng.uniform(-900, 900), rng.uniform(-900, 900)))
        for _ in range(25)
    ]
    venues = [
        Venue(venue_id=index, name=f"Venue {index}", coordinate=_offset(CENTER, rng.uniform(-500, 500), rng.uniform(-500, 500)))
        for index in range(10)
    ]
    shuffled = list(submissions)
    rng.shuffle(shuffled)

    first = resolve_location_fairness(submissions, venues)

    assert resolve_location_fairness(submissions, venues) == first
    assert resolve_location_fairness(shuffled, venues) == first
