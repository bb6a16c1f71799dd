"""Read-only catalog of candidate meeting venues."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Optional

from rendezvous.domain.constraints import InvalidCoordinateError, validate_coordinate_values
from rendezvous.domain.models import Venue
from rendezvous.utils.config import Settings, get_settings
from rendezvous.utils.logger import get_logger


logger = get_logger(__name__)


# Campus buildings offered as starting points and meeting places.
DEFAULT_CAMPUS_BUILDINGS: tuple[tuple[int, str, str, float, float], ...] = (
    (1, "Lawson Computer Science Building", "LWSN", 40.4283, -86.9162),
    (2, "Hicks Undergraduate Library", "HICKS", 40.4264, -86.9214),
    (3, "Wilmeth Active Learning Center", "WALC", 40.4279, -86.9166),
    (4, "Electrical Engineering Building", "EE", 40.4282, -86.9169),
    (5, "Mathematical Sciences Building", "MATH", 40.4271, -86.9152),
    (6, "Recitation Building", "REC", 40.4268, -86.9203),
    (7, "Haas Hall", "HAAS", 40.4254, -86.9189),
    (8, "Stanley Coulter Hall", "SC", 40.4255, -86.9208),
    (9, "Stewart Center", "STEW", 40.4265, -86.9186),
    (10, "Armstrong Hall", "ARMS", 40.4276, -86.9194),
)


class VenueCatalog:
    """Immutable, ordered collection of venues keyed by id."""

    def __init__(self, venues: Iterable[Venue]) -> None:
        ordered = tuple(venues)
        by_id: dict[int, Venue] = {}
        for venue in ordered:
            if venue.venue_id in by_id:
                raise ValueError(f"Duplicate venue id {venue.venue_id}")
            by_id[venue.venue_id] = venue
        self._venues = ordered
        self._by_id = by_id

    @classmethod
    def default(cls) -> "VenueCatalog":
        return cls(
            Venue(
                venue_id=venue_id,
                name=name,
                abbreviation=abbreviation,
                coordinate=validate_coordinate_values(lat, lng),
            )
            for venue_id, name, abbreviation, lat, lng in DEFAULT_CAMPUS_BUILDINGS
        )

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "VenueCatalog":
        venues: list[Venue] = []
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValueError(f"Venue record {position} must be a JSON object")
            try:
                venue_id = record["id"]
                name = record["name"]
            except KeyError as exc:
                raise ValueError(f"Venue record {position} is missing {exc.args[0]!r}") from exc
            if isinstance(venue_id, bool) or not isinstance(venue_id, int):
                raise ValueError(f"Venue record {position} id must be an integer")
            if not isinstance(name, str) or not name.strip():
                raise ValueError(f"Venue record {position} name must be a non-empty string")
            abbreviation = record.get("abbr")
            if abbreviation is not None and not isinstance(abbreviation, str):
                raise ValueError(f"Venue record {position} abbr must be a string")
            try:
                coordinate = validate_coordinate_values(record.get("lat"), record.get("lng"))
            except InvalidCoordinateError as exc:
                raise InvalidCoordinateError(f"venue {venue_id}: {exc}") from exc
            venues.append(
                Venue(
                    venue_id=venue_id,
                    name=name.strip(),
                    abbreviation=abbreviation,
                    coordinate=coordinate,
                )
            )
        return cls(venues)

    @classmethod
    def from_json_file(cls, path: Path) -> "VenueCatalog":
        with Path(path).open("r", encoding="utf-8") as handle:
            records = json.load(handle)
        if not isinstance(records, list):
            raise ValueError(f"Venue catalog {path} must contain a JSON list")
        catalog = cls.from_records(records)
        logger.info("Venue catalog loaded | path=%s | venues=%s", path, len(catalog))
        return catalog

    def __len__(self) -> int:
        return len(self._venues)

    def venues(self) -> tuple[Venue, ...]:
        return self._venues

    def get(self, venue_id: int) -> Venue:
        try:
            return self._by_id[venue_id]
        except KeyError:
            raise KeyError(f"Unknown venue id {venue_id}") from None

    def search(self, query: str) -> list[Venue]:
        """Case-insensitive match on display name or abbreviation."""
        needle = query.strip().lower()
        if not needle:
            return list(self._venues)
        return [
            venue
            for venue in self._venues
            if needle in venue.name.lower()
            or (venue.abbreviation is not None and needle in venue.abbreviation.lower())
        ]


def load_venue_catalog(settings: Optional[Settings] = None) -> VenueCatalog:
    resolved = settings or get_settings()
    if resolved.venue_catalog_path is None:
        return VenueCatalog.default()
    return VenueCatalog.from_json_file(resolved.venue_catalog_path)
