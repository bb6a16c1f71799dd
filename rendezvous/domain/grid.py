"""Shape of a meeting's availability grid, used for rendering chosen slots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from rendezvous.domain.models import TimeSlotId
from rendezvous.utils.config import Settings


@dataclass(frozen=True)
class AvailabilityGrid:
    day_count: int
    start_hour: int
    end_hour: int
    slot_minutes: int
    start_date: Optional[date] = None

    def __post_init__(self) -> None:
        validate_grid(self)

    @classmethod
    def from_settings(cls, settings: Settings, start_date: Optional[date] = None) -> "AvailabilityGrid":
        return cls(
            day_count=settings.grid_day_count,
            start_hour=settings.grid_start_hour,
            end_hour=settings.grid_end_hour,
            slot_minutes=settings.grid_slot_minutes,
            start_date=start_date,
        )

    @property
    def slots_per_day(self) -> int:
        return (self.end_hour - self.start_hour) * 60 // self.slot_minutes

    def contains(self, slot: TimeSlotId) -> bool:
        return 0 <= slot.day_index < self.day_count and 0 <= slot.time_index < self.slots_per_day

    def _offset(self, slot: TimeSlotId, extra_slots: int) -> Optional[time]:
        if not self.contains(slot):
            return None
        anchor = datetime.combine(date.min, time(hour=self.start_hour))
        moment = anchor + timedelta(minutes=(slot.time_index + extra_slots) * self.slot_minutes)
        return moment.time()

    def slot_start(self, slot: TimeSlotId) -> Optional[time]:
        return self._offset(slot, 0)

    def slot_end(self, slot: TimeSlotId) -> Optional[time]:
        return self._offset(slot, 1)

    def slot_date(self, slot: TimeSlotId) -> Optional[date]:
        if self.start_date is None or not self.contains(slot):
            return None
        return self.start_date + timedelta(days=slot.day_index)

    def label(self, slot: TimeSlotId) -> str:
        start = self.slot_start(slot)
        end = self.slot_end(slot)
        if start is None or end is None:
            return f"Day {slot.day_index} slot {slot.time_index} (outside grid)"
        return f"Day {slot.day_index} {start:%H:%M}-{end:%H:%M}"


def validate_grid(grid: AvailabilityGrid) -> None:
    if grid.day_count <= 0:
        raise ValueError("grid day_count must be > 0")
    if not 0 <= grid.start_hour < grid.end_hour <= 24:
        raise ValueError("grid hours must satisfy 0 <= start_hour < end_hour <= 24")
    if grid.slot_minutes <= 0 or 60 % grid.slot_minutes != 0:
        raise ValueError("grid slot_minutes must be a positive divisor of 60")
