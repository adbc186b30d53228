from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from time import perf_counter

from smartschedule.schemas.catalog import DEFAULT_SECTION_BASE, ActivityType, OccupancyKey, occupancy_key
from smartschedule.schemas.scheduling import (
    CoursePayload,
    CoursePlacementSummary,
    RuleSettings,
    SessionAssignment,
)
from smartschedule.services.availability import RunState
from smartschedule.services.session_placer import place_labs, place_lectures, place_tutorials

logger = logging.getLogger(__name__)

PlacementStrategy = Callable[[CoursePayload, RunState, RuleSettings, int], list[SessionAssignment]]

# Lectures claim slots first, then tutorials, then labs.
PLACEMENT_ORDER: tuple[tuple[ActivityType, PlacementStrategy], ...] = (
    (ActivityType.lecture, place_lectures),
    (ActivityType.tutorial, place_tutorials),
    (ActivityType.lab, place_labs),
)


@dataclass
class GenerationResult:
    assignments: list[SessionAssignment] = field(default_factory=list)
    placements: list[CoursePlacementSummary] = field(default_factory=list)
    runtime_ms: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.assignments

    @property
    def total_hours(self) -> int:
        return sum(item.hours for item in self.assignments)


def select_level_courses(courses: Iterable[CoursePayload], level: int) -> list[CoursePayload]:
    return sorted(
        (course for course in courses if course.level == level and course.total_hours > 0),
        key=lambda course: course.course_code,
    )


def occupancy_from_assignments(assignments: Iterable[SessionAssignment]) -> set[OccupancyKey]:
    return {occupancy_key(item.day, item.time_slot) for item in assignments}


def summarize_placements(
    courses: Sequence[CoursePayload],
    assignments: Sequence[SessionAssignment],
) -> list[CoursePlacementSummary]:
    placed_hours: dict[tuple[str, ActivityType], int] = {}
    sessions: dict[str, int] = {}
    for item in assignments:
        key = (item.course_code, item.activity_type)
        placed_hours[key] = placed_hours.get(key, 0) + item.hours
        sessions[item.course_code] = sessions.get(item.course_code, 0) + 1

    summaries: list[CoursePlacementSummary] = []
    for course in courses:
        lecture = placed_hours.get((course.course_code, ActivityType.lecture), 0)
        tutorial = placed_hours.get((course.course_code, ActivityType.tutorial), 0)
        lab = placed_hours.get((course.course_code, ActivityType.lab), 0)
        if lecture + tutorial + lab == 0:
            status = "unscheduled"
        elif lecture >= course.lecture_hours and tutorial >= course.tutorial_hours and lab >= course.lab_hours:
            status = "complete"
        else:
            status = "partial"
        summary = CoursePlacementSummary(
            course_code=course.course_code,
            lecture_hours_required=course.lecture_hours,
            lecture_hours_placed=lecture,
            tutorial_hours_required=course.tutorial_hours,
            tutorial_hours_placed=tutorial,
            lab_hours_required=course.lab_hours,
            lab_hours_placed=lab,
            sessions_placed=sessions.get(course.course_code, 0),
            status=status,
        )
        if summary.shortfalls:
            logger.warning(
                "COURSE UNDER-SCHEDULED | course=%s | status=%s | missing_hours=%s",
                course.course_code,
                status,
                summary.shortfalls,
            )
        summaries.append(summary)
    return summaries


class ScheduleGenerator:
    """Greedy timetable generator for one level/group.

    Each instance owns its own RunState; create a new generator for every
    run instead of sharing one between groups or threads.
    """

    def __init__(
        self,
        *,
        courses: Sequence[CoursePayload],
        occupied_slots: Iterable[OccupancyKey] = (),
        rule_settings: RuleSettings | None = None,
        section_base: int = DEFAULT_SECTION_BASE,
    ) -> None:
        self.courses = list(courses)
        self.rule_settings = rule_settings or RuleSettings()
        self.state = RunState.seeded(occupied_slots, section_base=section_base)

    def _processing_order(self) -> list[CoursePayload]:
        # sorted() is stable, so equal loads keep their input order.
        return sorted(self.courses, key=lambda course: course.total_hours, reverse=True)

    def run(self) -> GenerationResult:
        started = perf_counter()
        ordered = self._processing_order()
        logger.info(
            "SCHEDULE GENERATION START | courses=%s | pre_occupied=%s | lab_after=%s | max_daily=%s",
            len(ordered),
            len(self.state.occupied),
            self.rule_settings.lab_after_hour,
            self.rule_settings.max_daily_hours,
        )

        assignments: list[SessionAssignment] = []
        for course in ordered:
            for activity_type, strategy in PLACEMENT_ORDER:
                if course.required_hours(activity_type) <= 0:
                    continue
                section_num = self.state.allocate_section()
                placed = strategy(course, self.state, self.rule_settings, section_num)
                logger.debug(
                    "PLACED | course=%s | activity=%s | section=%s | sessions=%s",
                    course.course_code,
                    activity_type.value,
                    section_num,
                    len(placed),
                )
                assignments.extend(placed)

        result = GenerationResult(
            assignments=assignments,
            placements=summarize_placements(ordered, assignments),
            runtime_ms=int((perf_counter() - started) * 1000),
        )
        logger.info(
            "SCHEDULE GENERATION COMPLETE | sessions=%s | hours=%s | runtime_ms=%s",
            len(result.assignments),
            result.total_hours,
            result.runtime_ms,
        )
        return result


def generate_schedule(
    courses: Sequence[CoursePayload],
    occupied_slots: Iterable[OccupancyKey],
    rule_settings: RuleSettings,
) -> list[SessionAssignment]:
    return ScheduleGenerator(
        courses=courses,
        occupied_slots=occupied_slots,
        rule_settings=rule_settings,
    ).run().assignments


def generate_group_schedules(
    courses: Sequence[CoursePayload],
    occupied_by_group: Mapping[int, Iterable[OccupancyKey]],
    rule_settings: RuleSettings,
    *,
    number_of_groups: int,
    section_base: int = DEFAULT_SECTION_BASE,
) -> dict[int, GenerationResult]:
    results: dict[int, GenerationResult] = {}
    for group in range(1, number_of_groups + 1):
        generator = ScheduleGenerator(
            courses=courses,
            occupied_slots=occupied_by_group.get(group, ()),
            rule_settings=rule_settings,
            section_base=section_base,
        )
        results[group] = generator.run()
        if results[group].is_empty:
            logger.warning("GROUP SCHEDULE EMPTY | group=%s | courses=%s", group, len(courses))
    return results
