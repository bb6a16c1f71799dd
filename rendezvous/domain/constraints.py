"""Domain-level validation rules for resolution inputs."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from rendezvous.domain.models import Coordinate, Venue


LAT_BOUNDS = (-90.0, 90.0)
LNG_BOUNDS = (-180.0, 180.0)


class ResolutionError(Exception):
    """Base failure for caller-supplied resolution input."""


class InvalidCoordinateError(ResolutionError, ValueError):
    """Raised when a coordinate is partial, non-numeric, or out of range."""


class NoVenuesProvidedError(ResolutionError):
    """Raised when location resolution is asked to rank an empty catalog."""


class SubmissionValidationError(ResolutionError, ValueError):
    """Raised when a raw submission payload cannot be parsed."""


@dataclass(frozen=True)
class ResolutionConfig:
    top_k_venues: Optional[int] = None


def validate_resolution_config(config: ResolutionConfig) -> None:
    if config.top_k_venues is not None:
        if isinstance(config.top_k_venues, bool) or not isinstance(config.top_k_venues, int):
            raise ValueError("top_k_venues must be an integer")
        if config.top_k_venues <= 0:
            raise ValueError("top_k_venues must be > 0")


def _as_degrees(name: str, value: Any) -> float:
    if value is None:
        raise InvalidCoordinateError(f"{name} is missing; lat and lng must be given together")
    if isinstance(value, bool):
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}")
    try:
        degrees = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidCoordinateError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(degrees):
        raise InvalidCoordinateError(f"{name} must be finite, got {value!r}")
    return degrees


def validate_coordinate_values(lat: Any, lng: Any) -> Coordinate:
    """Check a raw lat/lng pair and return it as a Coordinate."""
    lat_degrees = _as_degrees("lat", lat)
    lng_degrees = _as_degrees("lng", lng)
    if not LAT_BOUNDS[0] <= lat_degrees <= LAT_BOUNDS[1]:
        raise InvalidCoordinateError(f"lat must be between -90 and 90, got {lat_degrees}")
    if not LNG_BOUNDS[0] <= lng_degrees <= LNG_BOUNDS[1]:
        raise InvalidCoordinateError(f"lng must be between -180 and 180, got {lng_degrees}")
    return Coordinate(lat=lat_degrees, lng=lng_degrees)


def validate_coordinate(coordinate: Coordinate) -> Coordinate:
    return validate_coordinate_values(coordinate.lat, coordinate.lng)


def validate_venues(venues: Sequence[Venue]) -> None:
    if not venues:
        raise NoVenuesProvidedError("At least one candidate venue is required")
    for venue in venues:
        try:
            validate_coordinate(venue.coordinate)
        except InvalidCoordinateError as exc:
            raise InvalidCoordinateError(f"venue {venue.venue_id}: {exc}") from exc
