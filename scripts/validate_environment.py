#!/usr/bin/env python3
"""Validate local Rendezvous environment readiness."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rendezvous.repository.venue_catalog import load_venue_catalog
from rendezvous.services.resolution_service import MeetingResolutionService
from rendezvous.utils.config import get_settings

SEPARATOR_LINE = "=" * 44

SAMPLE_SUBMISSIONS = [
    {"participant_id": "alice", "availability": ["0-2", "0-3"], "location": {"lat": 40.4283, "lng": -86.9162}},
    {"participant_id": "bob", "availability": ["0-2"], "location": {"lat": 40.4254, "lng": -86.9189}},
    {"participant_id": "charlie", "availability": ["1-0"], "location": {"lat": 40.4279, "lng": -86.9166}},
]


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 — Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 — Required packages importable
    import_errors: list[str] = []
    for module_name in ("numpy", "pydantic", "pytest"):
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 — Venue catalog
    settings = get_settings()
    catalog = None
    try:
        catalog = load_venue_catalog(settings)
        if len(catalog) == 0:
            raise RuntimeError("catalog is empty")
        source = settings.venue_catalog_path or "built-in"
        ok, line = _print_result("Venue catalog", True, f": {len(catalog)} venues ({source})")
    except Exception as exc:
        ok, line = _print_result("Venue catalog", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 — Sample resolution
    if catalog is not None:
        try:
            service = MeetingResolutionService(catalog=catalog, settings=settings)
            resolution = service.resolve_meeting(SAMPLE_SUBMISSIONS)
            if not resolution.best_times or resolution.best_location is None:
                raise RuntimeError("sample resolution produced no winner")
            best_time = service.describe_time(resolution.best_times[0])
            ok, line = _print_result(
                "Sample resolution",
                True,
                f": {best_time.label} @ {resolution.best_location.venue.name}",
            )
        except Exception as exc:
            ok, line = _print_result("Sample resolution", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Rendezvous Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
