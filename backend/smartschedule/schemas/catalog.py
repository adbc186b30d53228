from __future__ import annotations

from enum import Enum

MIDDAY_SLOT = "12:00-12:50"
EARLIEST_START_HOUR = 8
LATEST_START_HOUR = 14
DEFAULT_SECTION_BASE = 50000


def parse_time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class Day(str, Enum):
    sunday = "Sunday"
    monday = "Monday"
    tuesday = "Tuesday"
    wednesday = "Wednesday"
    thursday = "Thursday"


class ActivityType(str, Enum):
    lecture = "Lecture"
    tutorial = "Tutorial"
    lab = "Lab"


class TimeSlot(str, Enum):
    short_0800 = "08:00-08:50"
    short_0900 = "09:00-09:50"
    short_1000 = "10:00-10:50"
    short_1100 = "11:00-11:50"
    short_1300 = "13:00-13:50"
    short_1400 = "14:00-14:50"
    long_0800 = "08:00-09:50"
    long_0900 = "09:00-10:50"
    long_1000 = "10:00-11:50"
    long_1300 = "13:00-14:50"

    @property
    def start(self) -> str:
        return self.value.split("-")[0]

    @property
    def end(self) -> str:
        return self.value.split("-")[1]

    @property
    def start_hour(self) -> int:
        return int(self.start.split(":")[0])

    @property
    def duration_hours(self) -> int:
        # 50-minute slots count as one hour, 110-minute slots as two.
        minutes = parse_time_to_minutes(self.end) - parse_time_to_minutes(self.start)
        return (minutes + 10) // 60

    @property
    def is_long(self) -> bool:
        return self.duration_hours == 2


DAYS: tuple[Day, ...] = tuple(Day)
SHORT_SLOTS: tuple[TimeSlot, ...] = tuple(slot for slot in TimeSlot if not slot.is_long)
LONG_SLOTS: tuple[TimeSlot, ...] = tuple(slot for slot in TimeSlot if slot.is_long)

OccupancyKey = tuple[str, str]


def parse_time_slot(label: str) -> TimeSlot | None:
    try:
        return TimeSlot(label.strip())
    except ValueError:
        return None


def occupancy_key(day: Day | str, time_slot: TimeSlot | str) -> OccupancyKey:
    """Plain-string (day, slot) pair used for conflict detection.

    Keys are normalised to plain whitespace-trimmed labels, so pre-occupied rows
    read as strings compare equal to keys built from catalog members.
    """
    day_label = day.value if isinstance(day, Day) else day.strip()
    slot_label = time_slot.value if isinstance(time_slot, TimeSlot) else time_slot.strip()
    return day_label, slot_label
