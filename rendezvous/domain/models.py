"""Domain models for time consensus and venue fairness resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, order=True)
class TimeSlotId:
    """One cell of the availability grid; orders by day, then time."""

    day_index: int
    time_index: int

    def cell_id(self) -> str:
        return f"{self.day_index}-{self.time_index}"


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float


@dataclass(frozen=True)
class ParticipantSubmission:
    availability: frozenset[TimeSlotId] = field(default_factory=frozenset)
    location: Optional[Coordinate] = None
    participant_id: Optional[str] = None


@dataclass(frozen=True)
class Venue:
    venue_id: int
    name: str
    coordinate: Coordinate
    abbreviation: Optional[str] = None


@dataclass(frozen=True)
class TimeResolution:
    slot: TimeSlotId
    support_count: int


@dataclass(frozen=True)
class LocationScore:
    venue: Venue
    average_distance_meters: float
    max_distance_meters: float
    fairness_gap: float
