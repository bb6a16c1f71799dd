from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest

from rendezvous.domain.constraints import InvalidCoordinateError
from rendezvous.repository.venue_catalog import VenueCatalog, load_venue_catalog
from rendezvous.utils.config import get_settings


def _write_catalog(tmp_path, records) -> Path:
    path = tmp_path / "venues.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def test_default_catalog_has_campus_buildings_in_order() -> None:
    catalog = VenueCatalog.default()
    assert len(catalog) == 10
    assert [venue.venue_id for venue in catalog.venues()] == list(range(1, 11))
    assert catalog.get(1).abbreviation == "LWSN"


def test_get_unknown_venue_raises_key_error() -> None:
    with pytest.raises(KeyError):
        VenueCatalog.default().get(999)


def test_search_matches_name_or_abbreviation_case_insensitively() -> None:
    catalog = VenueCatalog.default()
    assert [venue.abbreviation for venue in catalog.search("hall")] == ["HAAS", "SC", "ARMS"]
    assert [venue.name for venue in catalog.search("walc")] == ["Wilmeth Active Learning Center"]
    assert catalog.search("   ") == list(catalog.venues())
    assert catalog.search("observatory") == []


def test_load_from_json_file(tmp_path) -> None:
    path = _write_catalog(
        tmp_path,
        [
            {"id": 20, "name": "Union", "abbr": "PMU", "lat": 40.4247, "lng": -86.9111},
            {"id": 21, "name": "Library", "lat": 40.4264, "lng": -86.9214},
        ],
    )

    catalog = VenueCatalog.from_json_file(path)

    assert len(catalog) == 2
    assert catalog.get(20).abbreviation == "PMU"
    assert catalog.get(21).abbreviation is None


def test_duplicate_ids_rejected(tmp_path) -> None:
    path = _write_catalog(
        tmp_path,
        [
            {"id": 1, "name": "A", "lat": 0, "lng": 0},
            {"id": 1, "name": "B", "lat": 1, "lng": 1},
        ],
    )
    with pytest.raises(ValueError, match="Duplicate"):
        VenueCatalog.from_json_file(path)


def test_invalid_venue_coordinate_rejected(tmp_path) -> None:
    path = _write_catalog(tmp_path, [{"id": 1, "name": "A", "lat": 0}])
    with pytest.raises(InvalidCoordinateError, match="venue 1"):
        VenueCatalog.from_json_file(path)


@pytest.mark.parametrize(
    "records",
    [
        {"id": 1},
        [{"name": "No id", "lat": 0, "lng": 0}],
        [{"id": "1", "name": "String id", "lat": 0, "lng": 0}],
        [{"id": 1, "name": " ", "lat": 0, "lng": 0}],
        [{"id": 1, "name": "Hall", "abbr": 5, "lat": 1.0, "lng": 2.0}],
    ],
)
def test_malformed_catalog_rejected(tmp_path, records) -> None:
    path = _write_catalog(tmp_path, records)
    with pytest.raises(ValueError):
        VenueCatalog.from_json_file(path)


def test_load_venue_catalog_uses_configured_path(tmp_path) -> None:
    path = _write_catalog(tmp_path, [{"id": 5, "name": "Gym", "lat": 40.43, "lng": -86.92}])
    settings = replace(get_settings(), venue_catalog_path=path)

    catalog = load_venue_catalog(settings)

    assert [venue.name for venue in catalog.venues()] == ["Gym"]


def test_load_venue_catalog_defaults_to_built_in() -> None:
    settings = replace(get_settings(), venue_catalog_path=None)
    assert len(load_venue_catalog(settings)) == 10
