from __future__ import annotations

import logging

from smartschedule.schemas.catalog import DAYS, LONG_SLOTS, SHORT_SLOTS, ActivityType, Day, TimeSlot
from smartschedule.schemas.scheduling import CoursePayload, RuleSettings, SessionAssignment
from smartschedule.services.availability import RunState

logger = logging.getLogger(__name__)


def lecture_day_pattern(hours: int) -> tuple[Day, ...]:
    if hours >= 3:
        return (DAYS[0], DAYS[2], DAYS[4])
    if hours == 2:
        return (DAYS[1], DAYS[3])
    return (DAYS[0],)


def _session(
    course: CoursePayload,
    activity_type: ActivityType,
    section_num: int,
    day: Day,
    time_slot: TimeSlot,
) -> SessionAssignment:
    return SessionAssignment(
        course_code=course.course_code,
        course_name=course.course_name,
        activity_type=activity_type,
        section_num=section_num,
        day=day,
        time_slot=time_slot,
        hours=time_slot.duration_hours,
    )


def place_lectures(
    course: CoursePayload,
    state: RunState,
    rules: RuleSettings,
    section_num: int,
) -> list[SessionAssignment]:
    """Place lectures on the day pattern for the course's lecture load.

    A single short slot that is free on every pattern day wins outright so the
    lecture keeps the same time all week. Otherwise each pattern day takes its
    first free short slot; days with nothing free are skipped.
    """
    pattern = lecture_day_pattern(course.lecture_hours)

    for time_slot in SHORT_SLOTS:
        if all(state.is_available(day, time_slot, 1, rules) for day in pattern):
            return [
                state.commit(_session(course, ActivityType.lecture, section_num, day, time_slot))
                for day in pattern
            ]

    placed: list[SessionAssignment] = []
    hours_placed = 0
    for day in pattern:
        if hours_placed >= course.lecture_hours:
            break
        for time_slot in SHORT_SLOTS:
            if state.is_available(day, time_slot, 1, rules):
                placed.append(state.commit(_session(course, ActivityType.lecture, section_num, day, time_slot)))
                hours_placed += 1
                break
    return placed


def place_tutorials(
    course: CoursePayload,
    state: RunState,
    rules: RuleSettings,
    section_num: int,
) -> list[SessionAssignment]:
    """Two-hour tutorials take one long slot when any is free; all else is filled hour by hour."""
    required = course.tutorial_hours

    if required == 2:
        for day in DAYS:
            for time_slot in LONG_SLOTS:
                if state.is_available(day, time_slot, 2, rules):
                    return [state.commit(_session(course, ActivityType.tutorial, section_num, day, time_slot))]

    placed: list[SessionAssignment] = []
    hours_placed = 0
    for day in DAYS:
        for time_slot in SHORT_SLOTS:
            if hours_placed >= required:
                return placed
            if state.is_available(day, time_slot, 1, rules):
                placed.append(state.commit(_session(course, ActivityType.tutorial, section_num, day, time_slot)))
                hours_placed += 1
    return placed


def place_labs(
    course: CoursePayload,
    state: RunState,
    rules: RuleSettings,
    section_num: int,
) -> list[SessionAssignment]:
    """Labs prefer one long block per day, then top up with short slots.

    Every candidate slot must start at or after ``rules.lab_after_hour``.
    """
    required = course.lab_hours
    placed: list[SessionAssignment] = []
    hours_placed = 0

    for day in DAYS:
        if hours_placed >= required:
            break
        for time_slot in LONG_SLOTS:
            if time_slot.start_hour < rules.lab_after_hour:
                continue
            if state.is_available(day, time_slot, 2, rules):
                placed.append(state.commit(_session(course, ActivityType.lab, section_num, day, time_slot)))
                hours_placed += 2
                break

    if hours_placed < required:
        for day in DAYS:
            for time_slot in SHORT_SLOTS:
                if hours_placed >= required:
                    break
                if time_slot.start_hour < rules.lab_after_hour:
                    continue
                if state.is_available(day, time_slot, 1, rules):
                    placed.append(state.commit(_session(course, ActivityType.lab, section_num, day, time_slot)))
                    hours_placed += 1

    if hours_placed < required:
        logger.debug(
            "LAB PLACEMENT SHORT | course=%s | required=%s | placed=%s | lab_after=%s",
            course.course_code,
            required,
            hours_placed,
            rules.lab_after_hour,
        )
    return placed
