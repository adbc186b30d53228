from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from smartschedule.schemas.catalog import DAYS, MIDDAY_SLOT, ActivityType, Day, TimeSlot


class CoursePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_code: str = Field(min_length=1, max_length=50)
    course_name: str = Field(min_length=1, max_length=200)
    lecture_hours: int = Field(default=0, ge=0, le=40)
    tutorial_hours: int = Field(default=0, ge=0, le=40)
    lab_hours: int = Field(default=0, ge=0, le=40)
    level: int = Field(default=1, ge=1, le=20)

    @property
    def total_hours(self) -> int:
        return self.lecture_hours + self.tutorial_hours + self.lab_hours

    def required_hours(self, activity_type: ActivityType) -> int:
        if activity_type == ActivityType.lecture:
            return self.lecture_hours
        if activity_type == ActivityType.tutorial:
            return self.tutorial_hours
        return self.lab_hours


class SchedulingRulePayload(BaseModel):
    rule_name: str | None = Field(default=None, max_length=200)
    rule_description: str = Field(default="", max_length=2000)
    rule_type: str | None = Field(default=None, max_length=100)
    is_active: bool = True


class OccupiedSlotPayload(BaseModel):
    day: str = Field(min_length=1, max_length=20)
    time_slot: str = Field(min_length=1, max_length=20)


class RuleSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    lunch_breaks: frozenset[str] = frozenset({MIDDAY_SLOT})
    lab_after_hour: int = Field(default=12, ge=0)
    max_daily_hours: int = Field(default=8, ge=0)
    blocked_days: frozenset[Day] = frozenset()

    @field_validator("lunch_breaks")
    @classmethod
    def ensure_midday_blocked(cls, value: frozenset[str]) -> frozenset[str]:
        return value | {MIDDAY_SLOT}

    @field_serializer("lunch_breaks")
    def serialize_lunch_breaks(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    @field_serializer("blocked_days")
    def serialize_blocked_days(self, value: frozenset[Day]) -> list[str]:
        return [day.value for day in DAYS if day in value]


class SessionAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_code: str
    course_name: str
    activity_type: ActivityType
    section_num: int
    day: Day
    time_slot: TimeSlot
    hours: int = Field(ge=1, le=2)

    @model_validator(mode="after")
    def validate_duration(self) -> "SessionAssignment":
        if self.hours != self.time_slot.duration_hours:
            raise ValueError(
                f"Slot {self.time_slot.value} lasts {self.time_slot.duration_hours} hour(s), got hours={self.hours}"
            )
        return self


PlacementStatus = Literal["complete", "partial", "unscheduled"]


class CoursePlacementSummary(BaseModel):
    course_code: str
    lecture_hours_required: int = 0
    lecture_hours_placed: int = 0
    tutorial_hours_required: int = 0
    tutorial_hours_placed: int = 0
    lab_hours_required: int = 0
    lab_hours_placed: int = 0
    sessions_placed: int = 0
    status: PlacementStatus = "unscheduled"

    @property
    def shortfalls(self) -> dict[str, int]:
        missing = {
            ActivityType.lecture.value: self.lecture_hours_required - self.lecture_hours_placed,
            ActivityType.tutorial.value: self.tutorial_hours_required - self.tutorial_hours_placed,
            ActivityType.lab.value: self.lab_hours_required - self.lab_hours_placed,
        }
        return {activity: hours for activity, hours in missing.items() if hours > 0}


class InterpretRulesRequest(BaseModel):
    rules: list[SchedulingRulePayload] = Field(default_factory=list, max_length=200)


class GenerateScheduleRequest(BaseModel):
    level: int = Field(ge=1, le=20)
    group: int = Field(default=1, ge=1, le=50)
    courses: list[CoursePayload] = Field(default_factory=list, max_length=500)
    occupied_slots: list[OccupiedSlotPayload] = Field(default_factory=list, max_length=2000)
    rules: list[SchedulingRulePayload] = Field(default_factory=list, max_length=200)


class GenerateScheduleResponse(BaseModel):
    level: int
    group: int
    total_sessions: int
    assignments: list[SessionAssignment] = Field(default_factory=list)
    placements: list[CoursePlacementSummary] = Field(default_factory=list)
    rule_settings: RuleSettings
    runtime_ms: int = 0


class GenerateGroupSchedulesRequest(BaseModel):
    level: int = Field(ge=1, le=20)
    number_of_groups: int = Field(ge=1, le=50)
    courses: list[CoursePayload] = Field(default_factory=list, max_length=500)
    occupied_by_group: dict[int, list[OccupiedSlotPayload]] = Field(default_factory=dict)
    rules: list[SchedulingRulePayload] = Field(default_factory=list, max_length=200)

    @model_validator(mode="after")
    def validate_group_numbers(self) -> "GenerateGroupSchedulesRequest":
        unknown = sorted(group for group in self.occupied_by_group if group < 1 or group > self.number_of_groups)
        if unknown:
            raise ValueError(f"Occupancy given for unknown group(s): {', '.join(str(item) for item in unknown)}")
        return self


class GroupScheduleOut(BaseModel):
    group: int
    total_sessions: int
    assignments: list[SessionAssignment] = Field(default_factory=list)
    placements: list[CoursePlacementSummary] = Field(default_factory=list)


class GenerateGroupSchedulesResponse(BaseModel):
    level: int
    groups: list[GroupScheduleOut] = Field(default_factory=list)
    total_courses: int
    courses_scheduled: list[str] = Field(default_factory=list)
    rule_settings: RuleSettings
    runtime_ms: int = 0
