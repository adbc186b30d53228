import logging
from time import perf_counter

from fastapi import APIRouter, Depends

from smartschedule.core.config import Settings, get_settings
from smartschedule.core.exceptions import NoValidScheduleError, SchedulerError
from smartschedule.schemas.catalog import OccupancyKey, occupancy_key
from smartschedule.schemas.scheduling import (
    GenerateGroupSchedulesRequest,
    GenerateGroupSchedulesResponse,
    GenerateScheduleRequest,
    GenerateScheduleResponse,
    GroupScheduleOut,
    OccupiedSlotPayload,
)
from smartschedule.services.rule_interpreter import baseline_rule_settings, interpret_rules
from smartschedule.services.schedule_generator import (
    ScheduleGenerator,
    generate_group_schedules,
    select_level_courses,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _occupancy_keys(slots: list[OccupiedSlotPayload]) -> set[OccupancyKey]:
    return {occupancy_key(item.day, item.time_slot) for item in slots}


@router.post("/generate", response_model=GenerateScheduleResponse)
def generate(
    payload: GenerateScheduleRequest,
    settings: Settings = Depends(get_settings),
) -> GenerateScheduleResponse:
    started = perf_counter()
    courses = select_level_courses(payload.courses, payload.level)
    if not courses:
        raise SchedulerError(f"No courses found for level {payload.level}", details={"level": payload.level})

    rule_settings = interpret_rules(payload.rules, baseline=baseline_rule_settings(settings))
    logger.info(
        "SCHEDULE REQUEST | level=%s | group=%s | courses=%s | occupied=%s | rules=%s",
        payload.level,
        payload.group,
        len(courses),
        len(payload.occupied_slots),
        len(payload.rules),
    )
    result = ScheduleGenerator(
        courses=courses,
        occupied_slots=_occupancy_keys(payload.occupied_slots),
        rule_settings=rule_settings,
        section_base=settings.section_number_base,
    ).run()
    if result.is_empty:
        logger.warning("SCHEDULE REQUEST EMPTY | level=%s | group=%s", payload.level, payload.group)
        raise NoValidScheduleError(payload.level, payload.group)

    return GenerateScheduleResponse(
        level=payload.level,
        group=payload.group,
        total_sessions=len(result.assignments),
        assignments=result.assignments,
        placements=result.placements,
        rule_settings=rule_settings,
        runtime_ms=int((perf_counter() - started) * 1000),
    )


@router.post("/generate-groups", response_model=GenerateGroupSchedulesResponse)
def generate_groups(
    payload: GenerateGroupSchedulesRequest,
    settings: Settings = Depends(get_settings),
) -> GenerateGroupSchedulesResponse:
    started = perf_counter()
    if payload.number_of_groups > settings.max_groups_per_request:
        raise SchedulerError(
            f"At most {settings.max_groups_per_request} groups can be generated per request",
            details={"number_of_groups": payload.number_of_groups},
        )
    courses = select_level_courses(payload.courses, payload.level)
    if not courses:
        raise SchedulerError(f"No courses found for level {payload.level}", details={"level": payload.level})

    rule_settings = interpret_rules(payload.rules, baseline=baseline_rule_settings(settings))
    results = generate_group_schedules(
        courses,
        {group: _occupancy_keys(slots) for group, slots in payload.occupied_by_group.items()},
        rule_settings,
        number_of_groups=payload.number_of_groups,
        section_base=settings.section_number_base,
    )
    groups = [
        GroupScheduleOut(
            group=group,
            total_sessions=len(result.assignments),
            assignments=result.assignments,
            placements=result.placements,
        )
        for group, result in results.items()
    ]
    if all(item.total_sessions == 0 for item in groups):
        raise NoValidScheduleError(payload.level)

    logger.info(
        "GROUP SCHEDULE REQUEST COMPLETE | level=%s | groups=%s | sessions=%s",
        payload.level,
        len(groups),
        sum(item.total_sessions for item in groups),
    )
    return GenerateGroupSchedulesResponse(
        level=payload.level,
        groups=groups,
        total_courses=len(courses),
        courses_scheduled=[course.course_code for course in courses],
        rule_settings=rule_settings,
        runtime_ms=int((perf_counter() - started) * 1000),
    )
