"""Great-circle distance primitives on the WGS-84 sphere approximation."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from rendezvous.domain.models import Coordinate


EARTH_RADIUS_METERS = 6_371_000.0


def haversine_distance(origin: Coordinate, destination: Coordinate) -> float:
    """Return the Haversine great-circle distance between two points in meters."""
    lat1 = math.radians(origin.lat)
    lng1 = math.radians(origin.lng)
    lat2 = math.radians(destination.lat)
    lng2 = math.radians(destination.lng)

    delta_lat = lat2 - lat1
    delta_lng = lng2 - lng1
    a = (
        math.sin(delta_lat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2.0) ** 2
    )
    # Rounding can push a a hair outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return EARTH_RADIUS_METERS * c


def distance_matrix(
    origins: Sequence[Coordinate],
    destinations: Sequence[Coordinate],
) -> np.ndarray:
    """Vectorised Haversine distances, shape ``(len(origins), len(destinations))``."""
    if not origins or not destinations:
        return np.zeros((len(origins), len(destinations)), dtype=np.float64)

    origin_rad = np.radians(
        np.array([(item.lat, item.lng) for item in origins], dtype=np.float64)
    )
    destination_rad = np.radians(
        np.array([(item.lat, item.lng) for item in destinations], dtype=np.float64)
    )
    lat1 = origin_rad[:, 0][:, np.newaxis]
    lng1 = origin_rad[:, 1][:, np.newaxis]
    lat2 = destination_rad[:, 0][np.newaxis, :]
    lng2 = destination_rad[:, 1][np.newaxis, :]

    a = (
        np.sin((lat2 - lat1) / 2.0) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lng2 - lng1) / 2.0) ** 2
    )
    a = np.clip(a, 0.0, 1.0)
    c = 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))
    return EARTH_RADIUS_METERS * c


def geographic_center(coordinates: Sequence[Coordinate]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes.

    Adequate for clusters a few kilometres wide; it does not handle the
    antimeridian.
    """
    if not coordinates:
        raise ValueError("geographic_center requires at least one coordinate")
    ordered = sorted((item.lat, item.lng) for item in coordinates)
    lat = math.fsum(lat for lat, _ in ordered) / len(ordered)
    lng = math.fsum(lng for _, lng in ordered) / len(ordered)
    return Coordinate(lat=lat, lng=lng)
