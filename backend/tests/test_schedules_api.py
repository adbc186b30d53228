from smartschedule.schemas.catalog import DAYS, SHORT_SLOTS


def course_payload(code, *, lecture=0, tutorial=0, lab=0, level=3):
    return {
        "course_code": code,
        "course_name": f"Course {code}",
        "lecture_hours": lecture,
        "tutorial_hours": tutorial,
        "lab_hours": lab,
        "level": level,
    }


def test_generate_returns_pending_assignments(client):
    response = client.post(
        "/api/schedules/generate",
        json={
            "level": 3,
            "group": 1,
            "courses": [
                course_payload("SWE381", lecture=3, tutorial=2),
                course_payload("SWE382", lab=2),
                course_payload("CS210", lecture=2, level=2),
            ],
            "occupied_slots": [{"day": "Sunday", "time_slot": "08:00-08:50"}],
            "rules": [{"rule_name": "Thursday off", "rule_description": "No class on Thursday"}],
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["level"] == 3
    assert body["total_sessions"] == len(body["assignments"])
    assert {item["course_code"] for item in body["assignments"]} == {"SWE381", "SWE382"}
    assert all(item["day"] != "Thursday" for item in body["assignments"])
    assert ("Sunday", "08:00-08:50") not in {(item["day"], item["time_slot"]) for item in body["assignments"]}
    assert body["rule_settings"]["blocked_days"] == ["Thursday"]
    assert body["rule_settings"]["lunch_breaks"] == ["12:00-12:50"]

    tutorial = [item for item in body["assignments"] if item["activity_type"] == "Tutorial"]
    assert tutorial == [
        {
            "course_code": "SWE381",
            "course_name": "Course SWE381",
            "activity_type": "Tutorial",
            "section_num": 50001,
            "day": "Sunday",
            "time_slot": "08:00-09:50",
            "hours": 2,
        }
    ]
    statuses = {item["course_code"]: item["status"] for item in body["placements"]}
    assert statuses == {"SWE381": "partial", "SWE382": "complete"}


def test_generate_rejects_level_without_courses(client):
    response = client.post(
        "/api/schedules/generate",
        json={"level": 4, "courses": [course_payload("SWE381", lecture=3)]},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "No courses found for level 4"


def test_generate_reports_when_nothing_fits(client):
    occupied = [{"day": day.value, "time_slot": slot.value} for day in DAYS for slot in SHORT_SLOTS]
    response = client.post(
        "/api/schedules/generate",
        json={"level": 3, "courses": [course_payload("SWE381", lecture=1)], "occupied_slots": occupied},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "No valid schedule generated. Not enough free time slots."
    assert body["details"] == {"level": 3, "group": 1}


def test_generate_validates_payload(client):
    response = client.post(
        "/api/schedules/generate",
        json={"level": 3, "courses": [course_payload("SWE381", lecture=-1)]},
    )
    assert response.status_code == 422


def test_generate_groups_runs_each_group_separately(client):
    response = client.post(
        "/api/schedules/generate-groups",
        json={
            "level": 3,
            "number_of_groups": 2,
            "courses": [course_payload("SWE381", lecture=3)],
            "occupied_by_group": {"2": [{"day": "Sunday", "time_slot": "08:00-08:50"}]},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["courses_scheduled"] == ["SWE381"]
    assert [group["group"] for group in body["groups"]] == [1, 2]
    slots = [{item["time_slot"] for item in group["assignments"]} for group in body["groups"]]
    assert slots == [{"08:00-08:50"}, {"09:00-09:50"}]


def test_generate_groups_limit(client):
    response = client.post(
        "/api/schedules/generate-groups",
        json={"level": 3, "number_of_groups": 11, "courses": [course_payload("SWE381", lecture=3)]},
    )
    assert response.status_code == 400


def test_generate_groups_rejects_unknown_group_occupancy(client):
    response = client.post(
        "/api/schedules/generate-groups",
        json={
            "level": 3,
            "number_of_groups": 2,
            "courses": [course_payload("SWE381", lecture=3)],
            "occupied_by_group": {"5": []},
        },
    )
    assert response.status_code == 422


def test_interpret_rules_endpoint(client):
    response = client.post(
        "/api/rules/interpret",
        json={
            "rules": [
                {"rule_description": "No lab sessions after 10"},
                {"rule_description": "No class on Thursday or Sunday"},
                {"rule_description": "At most 5 hours per day"},
            ]
        },
    )
    assert response.status_code == 200
    assert response.json() == {
        "lunch_breaks": ["12:00-12:50"],
        "lab_after_hour": 10,
        "max_daily_hours": 5,
        "blocked_days": ["Sunday", "Thursday"],
    }
