"""Conversion of raw participant payloads into domain submissions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from rendezvous.domain.constraints import (
    InvalidCoordinateError,
    SubmissionValidationError,
    validate_coordinate_values,
)
from rendezvous.domain.models import Coordinate, ParticipantSubmission, TimeSlotId
from rendezvous.utils.logger import get_logger


logger = get_logger(__name__)


class SlotPayload(BaseModel):
    """One selected grid cell."""

    day_index: int = Field(ge=0, strict=True)
    time_index: int = Field(ge=0, strict=True)


class LocationPayload(BaseModel):
    """Raw lat/lng pair; range checks happen in the domain layer."""

    model_config = ConfigDict(extra="ignore")

    lat: Any = None
    lng: Any = None


class SubmissionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    participant_id: Optional[str] = None
    availability: list[SlotPayload] = Field(default_factory=list)
    location: Optional[LocationPayload] = None

    @field_validator("availability", mode="before")
    @classmethod
    def expand_cell_ids(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise ValueError("availability must be a list of slots")
        return [_expand_cell_id(item) if isinstance(item, str) else item for item in value]

    @field_validator("location", mode="before")
    @classmethod
    def unwrap_coordinates(cls, value: Any) -> Any:
        # Stored participant locations nest the pair under "coordinates".
        if isinstance(value, Mapping) and "coordinates" in value:
            return value["coordinates"]
        return value


def _expand_cell_id(cell_id: str) -> dict[str, int]:
    parts = cell_id.strip().split("-")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        raise ValueError(f"slot {cell_id!r} must follow <day>-<time> format")
    day_index, time_index = (int(part) for part in parts)
    return {"day_index": day_index, "time_index": time_index}


def _to_coordinate(location: Optional[LocationPayload]) -> Optional[Coordinate]:
    if location is None:
        return None
    if location.lat is None and location.lng is None:
        return None
    return validate_coordinate_values(location.lat, location.lng)


def parse_submission(payload: Mapping[str, Any]) -> ParticipantSubmission:
    """Validate one raw payload; duplicate slots collapse into a set."""
    try:
        model = SubmissionPayload.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Rejected submission payload | errors=%s", exc.error_count())
        raise SubmissionValidationError(str(exc)) from exc

    try:
        location = _to_coordinate(model.location)
    except InvalidCoordinateError as exc:
        participant = model.participant_id or "unknown"
        logger.warning(
            "Rejected submission location | participant=%s | reason=%s",
            participant,
            exc,
        )
        raise InvalidCoordinateError(f"participant {participant}: {exc}") from exc

    return ParticipantSubmission(
        availability=frozenset(
            TimeSlotId(day_index=slot.day_index, time_index=slot.time_index)
            for slot in model.availability
        ),
        location=location,
        participant_id=model.participant_id,
    )


def parse_submissions(
    payloads: Iterable[Union[Mapping[str, Any], ParticipantSubmission]],
) -> tuple[ParticipantSubmission, ...]:
    return tuple(
        payload if isinstance(payload, ParticipantSubmission) else parse_submission(payload)
        for payload in payloads
    )
