"""Schedule Routes — resolved weeks and days, lesson creation.

Invariants:
    - week_of normalized to its Monday; omitted → current week in display timezone
    - Monday override "Ауд. 999" replaces the recurring lecture on 2025-10-06 only
    - UPPER-week lab absent in LOWER weeks, present in UPPER weeks
    - Lesson creation validates shape (400), group and course (404)
    - Each lesson carries its course name and teacher
    - A week loads in three statements and never touches the users table
"""

from uuid import uuid4

from sqlalchemy import event


def _rooms(day: dict) -> list[str]:
    return [lesson["room"] for lesson in day["lessons"]]


async def test_week_with_override(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(
        f"/api/v1/groups/{group.id}/schedule", params={"week_of": "2025-10-08"},
    )
    assert res.status_code == 200
    week = res.json()
    assert week["week_start"] == "2025-10-06"
    assert week["week_label"] == "lower"
    assert len(week["days"]) == 7
    monday = week["days"][0]
    assert _rooms(monday) == ["Ауд. 999"]
    assert monday["lessons"][0]["is_temporary"] is True
    assert week["days"][1]["lessons"] == []


async def test_following_week_uses_template(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(
        f"/api/v1/groups/{group.id}/schedule", params={"week_of": "2025-10-13"},
    )
    week = res.json()
    assert week["week_label"] == "upper"
    assert _rooms(week["days"][0]) == ["Ауд. 301"]
    assert _rooms(week["days"][1]) == ["Лаб. 12"]


async def test_week_defaults_to_current_week(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(f"/api/v1/groups/{group.id}/schedule")
    assert res.json()["week_start"] == "2025-10-06"


async def test_week_unknown_group(client):
    res = await client.get(f"/api/v1/groups/{uuid4()}/schedule")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_day_schedule(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(
        f"/api/v1/groups/{group.id}/schedule/day", params={"date": "2025-10-14"},
    )
    assert res.status_code == 200
    day = res.json()
    assert day["weekday"] == "tuesday"
    assert _rooms(day) == ["Лаб. 12"]


async def test_day_defaults_to_today(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(f"/api/v1/groups/{group.id}/schedule/day")
    assert res.json()["date"] == "2025-10-06"
    assert _rooms(res.json()) == ["Ауд. 999"]


async def test_create_template(client, seed_group):
    group, course = seed_group
    res = await client.post(f"/api/v1/groups/{group.id}/lessons", json={
        "course_id": str(course.id), "weekday": "wednesday",
        "start_time": "13:00", "end_time": "14:30", "room": " Ауд. 101 ",
        "kind": "practice", "recurrence": "lower",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["room"] == "Ауд. 101"
    assert body["date"] is None

    week = (await client.get(
        f"/api/v1/groups/{group.id}/schedule", params={"week_of": "2025-10-06"},
    )).json()
    assert _rooms(week["days"][2]) == ["Ауд. 101"]


async def test_create_override_derives_weekday(client, seed_group):
    group, course = seed_group
    res = await client.post(f"/api/v1/groups/{group.id}/lessons", json={
        "course_id": str(course.id), "start_time": "09:00", "end_time": "10:30",
        "room": "Ауд. 5", "is_temporary": True, "date": "2025-10-10",
    })
    assert res.status_code == 201
    assert res.json()["weekday"] == "friday"


async def test_create_lesson_rejects_inverted_times(client, seed_group):
    group, course = seed_group
    res = await client.post(f"/api/v1/groups/{group.id}/lessons", json={
        "course_id": str(course.id), "weekday": "monday",
        "start_time": "10:00", "end_time": "09:00", "room": "Ауд. 1",
    })
    assert res.status_code == 400


async def test_create_lesson_unknown_course(client, seed_group):
    group, _ = seed_group
    res = await client.post(f"/api/v1/groups/{group.id}/lessons", json={
        "course_id": str(uuid4()), "weekday": "monday",
        "start_time": "09:00", "end_time": "10:00", "room": "Ауд. 1",
    })
    assert res.status_code == 404


async def test_create_lesson_unknown_group(client, seed_group):
    _, course = seed_group
    res = await client.post(f"/api/v1/groups/{uuid4()}/lessons", json={
        "course_id": str(course.id), "weekday": "monday",
        "start_time": "09:00", "end_time": "10:00", "room": "Ауд. 1",
    })
    assert res.status_code == 404


async def test_lessons_carry_course_and_teacher(client, seed_lessons, seed_group):
    group, _ = seed_group
    res = await client.get(
        f"/api/v1/groups/{group.id}/schedule", params={"week_of": "2025-10-13"},
    )
    lab = res.json()["days"][1]["lessons"][0]
    assert lab["course_name"] == "Алгоритми"
    assert lab["teacher_name"] == "Сидоренко С.С."


async def test_week_lookup_stays_lean(client, seed_lessons, seed_group, test_engine):
    group, _ = seed_group
    statements: list[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement.lower())

    event.listen(test_engine.sync_engine, "before_cursor_execute", record)
    try:
        res = await client.get(
            f"/api/v1/groups/{group.id}/schedule", params={"week_of": "2025-10-13"},
        )
    finally:
        event.remove(test_engine.sync_engine, "before_cursor_execute", record)

    assert res.status_code == 200
    selects = [s for s in statements if s.lstrip().startswith("select")]
    assert len(selects) == 3
    assert not any("users" in s for s in selects)
