from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from smartschedule.schemas.catalog import (
    DEFAULT_SECTION_BASE,
    EARLIEST_START_HOUR,
    LATEST_START_HOUR,
    Day,
    OccupancyKey,
    TimeSlot,
    occupancy_key,
)
from smartschedule.schemas.scheduling import RuleSettings, SessionAssignment


def is_slot_available(
    day: Day,
    time_slot: TimeSlot,
    hours: int,
    occupied: set[OccupancyKey] | frozenset[OccupancyKey],
    daily_hours: Mapping[Day, int],
    rules: RuleSettings,
) -> bool:
    if occupancy_key(day, time_slot) in occupied:
        return False
    if time_slot.value in rules.lunch_breaks:
        return False
    if day in rules.blocked_days:
        return False
    if daily_hours.get(day, 0) + hours > rules.max_daily_hours:
        return False
    if time_slot.start_hour < EARLIEST_START_HOUR or time_slot.start_hour > LATEST_START_HOUR:
        return False
    return True


@dataclass
class RunState:
    """Mutable bookkeeping for a single generation call.

    Only ever grows: keys and hours are added as sessions are committed and
    nothing is released until the owning call returns.
    """

    occupied: set[OccupancyKey] = field(default_factory=set)
    daily_hours: dict[Day, int] = field(default_factory=dict)
    next_section: int = DEFAULT_SECTION_BASE

    @classmethod
    def seeded(cls, occupied_slots: Iterable[OccupancyKey], *, section_base: int) -> "RunState":
        keys = {occupancy_key(day, time_slot) for day, time_slot in occupied_slots}
        return cls(occupied=keys, next_section=section_base)

    def is_available(self, day: Day, time_slot: TimeSlot, hours: int, rules: RuleSettings) -> bool:
        return is_slot_available(day, time_slot, hours, self.occupied, self.daily_hours, rules)

    def commit(self, assignment: SessionAssignment) -> SessionAssignment:
        self.occupied.add(occupancy_key(assignment.day, assignment.time_slot))
        self.daily_hours[assignment.day] = self.daily_hours.get(assignment.day, 0) + assignment.hours
        return assignment

    def allocate_section(self) -> int:
        section_num = self.next_section
        self.next_section += 1
        return section_num
