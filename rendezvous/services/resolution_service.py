"""Meeting-level orchestration of time and venue resolution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from rendezvous.domain.constraints import (
    ResolutionConfig,
    validate_resolution_config,
)
from rendezvous.domain.grid import AvailabilityGrid
from rendezvous.domain.models import (
    Coordinate,
    LocationScore,
    ParticipantSubmission,
    TimeResolution,
    Venue,
)
from rendezvous.domain.ranking import rank_by_fairness_gap, tied_leaders, top_k
from rendezvous.repository.venue_catalog import VenueCatalog, load_venue_catalog
from rendezvous.services.location_fairness_service import (
    LocationFairnessResolver,
    located_coordinates,
)
from rendezvous.services.submission_parser import parse_submissions
from rendezvous.services.time_consensus_service import TimeConsensusResolver
from rendezvous.utils.config import Settings, get_settings
from rendezvous.utils.geo import geographic_center
from rendezvous.utils.logger import get_logger


logger = get_logger(__name__)


@dataclass(frozen=True)
class MeetingResolution:
    time_ranking: tuple[TimeResolution, ...]
    best_times: tuple[TimeResolution, ...]
    location_ranking: tuple[LocationScore, ...]
    best_location: Optional[LocationScore]
    most_equitable_location: Optional[LocationScore]
    center_point: Optional[Coordinate]
    participant_count: int
    located_participant_count: int


@dataclass(frozen=True)
class ScheduledTime:
    day_index: int
    time_index: int
    meeting_date: Optional[date]
    start_time: Optional[time]
    end_time: Optional[time]
    participant_count: int
    label: str


class MeetingResolutionService:
    """Runs both resolvers over one stable snapshot of a meeting's submissions."""

    def __init__(
        self,
        catalog: Optional[VenueCatalog] = None,
        settings: Optional[Settings] = None,
        time_resolver: Optional[TimeConsensusResolver] = None,
        location_resolver: Optional[LocationFairnessResolver] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._catalog = catalog if catalog is not None else load_venue_catalog(self._settings)
        self._time_resolver = time_resolver or TimeConsensusResolver()
        self._location_resolver = location_resolver or LocationFairnessResolver()

    @property
    def catalog(self) -> VenueCatalog:
        return self._catalog

    def resolve_meeting(
        self,
        submissions: Iterable[Union[ParticipantSubmission, Mapping[str, Any]]],
        venues: Optional[Sequence[Venue]] = None,
        top_k_venues: Optional[int] = None,
    ) -> MeetingResolution:
        config = ResolutionConfig(
            top_k_venues=(
                top_k_venues
                if top_k_venues is not None
                else self._settings.default_top_k_venues
            ),
        )
        validate_resolution_config(config)

        # Later writes by other participants must not leak into this call.
        snapshot = parse_submissions(submissions)
        candidate_venues = tuple(venues) if venues is not None else self._catalog.venues()

        time_ranking = self._time_resolver.resolve(snapshot)
        full_location_ranking = self._location_resolver.resolve(snapshot, candidate_venues)
        coordinates = located_coordinates(snapshot)

        equitable = rank_by_fairness_gap(full_location_ranking)
        location_ranking = top_k(full_location_ranking, config.top_k_venues)

        resolution = MeetingResolution(
            time_ranking=tuple(time_ranking),
            best_times=tuple(tied_leaders(time_ranking)),
            location_ranking=tuple(location_ranking),
            best_location=location_ranking[0] if location_ranking else None,
            most_equitable_location=equitable[0] if equitable else None,
            center_point=geographic_center(coordinates) if coordinates else None,
            participant_count=len(snapshot),
            located_participant_count=len(coordinates),
        )
        logger.info(
            (
                "Meeting resolved | participants=%s | located=%s | tied_best_times=%s | "
                "venues_ranked=%s"
            ),
            resolution.participant_count,
            resolution.located_participant_count,
            len(resolution.best_times),
            len(resolution.location_ranking),
        )
        return resolution

    def describe_time(
        self,
        resolution: TimeResolution,
        grid: Optional[AvailabilityGrid] = None,
    ) -> ScheduledTime:
        """Render a chosen slot against the meeting grid; off-grid slots get no times."""
        resolved_grid = grid or AvailabilityGrid.from_settings(self._settings)
        slot = resolution.slot
        return ScheduledTime(
            day_index=slot.day_index,
            time_index=slot.time_index,
            meeting_date=resolved_grid.slot_date(slot),
            start_time=resolved_grid.slot_start(slot),
            end_time=resolved_grid.slot_end(slot),
            participant_count=resolution.support_count,
            label=resolved_grid.label(slot),
        )
