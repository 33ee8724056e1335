import pytest
from httpx import AsyncClient

from tests.integration.helpers import (
    API,
    create_course,
    create_instructor,
    current_user,
    sign_up,
)
from tests.fixtures.payloads import without_keys

GENERATED_DATES = ["2024-01-01", "2024-01-03", "2024-01-08", "2024-01-10"]


@pytest.mark.asyncio
async def test_create_course_generates_sessions_and_financials(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    owner_me = await current_user(client, owner)
    instructor = await create_instructor(client, owner)
    payload = test_data.get_copy("course")
    payload["instructors"] = [instructor["id"]]
    payload["instructor_rates"] = {instructor["id"]: 25}

    course = await create_course(client, owner, payload)

    assert [s["date"] for s in course["sessions"]] == GENERATED_DATES
    assert course["sessions"][0] == {
        "date": "2024-01-01",
        "start_time": "16:00",
        "end_time": "18:00",
    }
    assert course["owner_id"] == owner_me["id"]
    assert course["total_sessions"] == 4
    assert course["total_hours"] == 8
    assert course["revenue"] == 1000
    assert course["instructor_expense"] == 200
    assert course["profit"] == 750

    response = await client.get(f"{API}/courses/{course['id']}", headers=owner)
    assert response.status_code == 200
    assert without_keys(response.json(), "updated_at") == without_keys(course, "updated_at")


@pytest.mark.asyncio
async def test_create_course_keeps_supplied_sessions(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    payload = test_data.get_copy("course")
    payload["sessions"] = [
        {"date": "2024-01-05", "start_time": "10:00", "end_time": "11:30"},
        {"date": "2024-01-02", "start_time": "09:00", "end_time": "10:00"},
    ]

    course = await create_course(client, owner, payload)

    assert [s["date"] for s in course["sessions"]] == ["2024-01-02", "2024-01-05"]
    assert course["total_hours"] == 2.5


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,code",
    [
        ({"start_date": "2024-02-01", "end_date": "2024-01-01"}, "INVALID_DATE_RANGE"),
        ({"days_of_week": [7]}, "VALIDATION_ERROR"),
        ({"location": "Library"}, "VALIDATION_ERROR"),
        ({"cost": -1}, "VALIDATION_ERROR"),
        ({"range_start_time": "4pm"}, "VALIDATION_ERROR"),
    ],
)
async def test_create_course_rejects_bad_input(client: AsyncClient, test_data, overrides, code):
    owner = await sign_up(client, "owner@acme.com")
    payload = test_data.get_copy("course")
    payload.update(overrides)

    response = await client.post(f"{API}/courses", json=payload, headers=owner)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == code


@pytest.mark.asyncio
async def test_get_course_not_found_before_forbidden(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    stranger = await sign_up(client, "stranger@acme.com")
    course = await create_course(client, owner, test_data.get_copy("course"))

    response = await client.get(f"{API}/courses/{course['id']}", headers=stranger)
    assert response.status_code == 403

    response = await client.get(
        f"{API}/courses/00000000-0000-0000-0000-000000000000", headers=stranger
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "COURSE_NOT_FOUND"


@pytest.mark.asyncio
async def test_assigned_instructor_and_enrolled_student_can_read(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    instructor = await create_instructor(client, owner, email="ada@acme.com")
    payload = test_data.get_copy("course")
    payload["instructors"] = [instructor["id"]]
    course = await create_course(client, owner, payload)

    ada = await sign_up(client, "ada@acme.com")
    response = await client.get(f"{API}/courses/{course['id']}", headers=ada)
    assert response.status_code == 200

    student = await sign_up(client, "student@acme.com")
    student_me = await current_user(client, student)
    response = await client.get(f"{API}/courses/{course['id']}", headers=student)
    assert response.status_code == 403

    response = await client.post(
        f"{API}/courses/{course['id']}/enrollments",
        json={"user_id": student_me["id"]},
        headers=owner,
    )
    assert response.status_code == 200
    assert response.json()["enrolled"] == [student_me["id"]]

    response = await client.get(f"{API}/courses/{course['id']}", headers=student)
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_list_courses_scoping_and_filters(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    other_owner = await sign_up(client, "other@acme.com")
    guitar = await create_course(client, owner, test_data.get_copy("course"))
    piano = test_data.get_copy(
        "course",
        title="Piano",
        description="Scales",
        start_date="2024-03-01",
        end_date="2024-03-31",
    )
    piano = await create_course(client, owner, piano)
    await create_course(client, other_owner, test_data.get_copy("course"))

    response = await client.get(f"{API}/courses", headers=owner)
    body = response.json()
    assert body["total"] == 2
    assert {c["id"] for c in body["items"]} == {guitar["id"], piano["id"]}

    response = await client.get(f"{API}/courses", params={"q": "chords"}, headers=owner)
    assert [c["id"] for c in response.json()["items"]] == [guitar["id"]]

    response = await client.get(f"{API}/courses", params={"from": "2024-02-01"}, headers=owner)
    assert [c["id"] for c in response.json()["items"]] == [piano["id"]]

    response = await client.get(
        f"{API}/courses", params={"sort": "title", "limit": 1, "page": 2}, headers=owner
    )
    body = response.json()
    assert body["page"] == 2
    assert body["limit"] == 1
    assert body["total"] == 2
    assert [c["title"] for c in body["items"]] == ["Piano"]


@pytest.mark.asyncio
async def test_list_courses_for_instructor(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    instructor = await create_instructor(client, owner, email="ada@acme.com")
    assigned = test_data.get_copy("course")
    assigned["instructors"] = [instructor["id"]]
    assigned = await create_course(client, owner, assigned)
    rated_only = test_data.get_copy("course")
    rated_only["instructor_rates"] = {instructor["id"]: 10}
    rated_only = await create_course(client, owner, rated_only)
    await create_course(client, owner, test_data.get_copy("course"))

    ada = await sign_up(client, "ada@acme.com")
    response = await client.get(f"{API}/courses", params={"instructor": "me"}, headers=ada)
    assert response.status_code == 200
    assert {c["id"] for c in response.json()["items"]} == {assigned["id"], rated_only["id"]}

    response = await client.get(
        f"{API}/courses/instructors/{instructor['id']}/courses", headers=owner
    )
    assert response.json()["total"] == 2

    stranger = await sign_up(client, "stranger@acme.com")
    response = await client.get(
        f"{API}/courses", params={"instructor": instructor["id"]}, headers=stranger
    )
    assert response.json()["total"] == 0

    response = await client.get(f"{API}/courses", params={"instructor": "me"}, headers=stranger)
    assert response.json() == {"page": 1, "limit": 20, "total": 0, "items": []}

    response = await client.get(
        f"{API}/courses", params={"instructor": "not-an-id"}, headers=owner
    )
    assert response.json()["total"] == 0


@pytest.mark.asyncio
async def test_update_course_rebuilds_sessions_on_range_change(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    course = await create_course(client, owner, test_data.get_copy("course"))

    response = await client.patch(
        f"{API}/courses/{course['id']}", json={"days_of_week": [1]}, headers=owner
    )
    assert response.status_code == 200
    assert [s["date"] for s in response.json()["sessions"]] == ["2024-01-01", "2024-01-08"]

    response = await client.patch(
        f"{API}/courses/{course['id']}", json={"title": "Guitar II"}, headers=owner
    )
    assert response.json()["title"] == "Guitar II"
    assert len(response.json()["sessions"]) == 2

    response = await client.patch(
        f"{API}/courses/{course['id']}",
        json={"end_date": "2023-12-01"},
        headers=owner,
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"


@pytest.mark.asyncio
async def test_only_owner_can_modify(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    stranger = await sign_up(client, "stranger@acme.com")
    course = await create_course(client, owner, test_data.get_copy("course"))
    url = f"{API}/courses/{course['id']}"

    assert (await client.put(url, json={"title": "x"}, headers=stranger)).status_code == 403
    assert (await client.delete(url, headers=stranger)).status_code == 403
    response = await client.post(f"{url}/regenerate-sessions", headers=stranger)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_regenerate_sessions_with_overrides(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    payload = test_data.get_copy("course")
    payload["sessions"] = [{"date": "2024-01-02", "start_time": "09:00", "end_time": "10:00"}]
    course = await create_course(client, owner, payload)

    response = await client.post(f"{API}/courses/{course['id']}/regenerate-sessions", headers=owner)
    assert response.status_code == 200
    assert [s["date"] for s in response.json()["sessions"]] == GENERATED_DATES

    response = await client.post(
        f"{API}/courses/{course['id']}/regenerate-sessions",
        json={"days_of_week": [3], "range_start_time": "09:00", "range_end_time": "12:00"},
        headers=owner,
    )
    body = response.json()
    assert [s["date"] for s in body["sessions"]] == ["2024-01-03", "2024-01-10"]
    assert body["days_of_week"] == [3]
    assert body["total_hours"] == 6


@pytest.mark.asyncio
async def test_delete_course(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    course = await create_course(client, owner, test_data.get_copy("course"))

    response = await client.delete(f"{API}/courses/{course['id']}", headers=owner)
    assert response.status_code == 204

    response = await client.get(f"{API}/courses/{course['id']}", headers=owner)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_enrollment_errors(client: AsyncClient, test_data):
    owner = await sign_up(client, "owner@acme.com")
    student = await sign_up(client, "student@acme.com")
    student_me = await current_user(client, student)
    course = await create_course(client, owner, test_data.get_copy("course"))

    response = await client.post(
        f"{API}/courses/{course['id']}/enrollments",
        json={"user_id": "00000000-0000-0000-0000-000000000000"},
        headers=owner,
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    response = await client.delete(
        f"{API}/courses/{course['id']}/enrollments/{student_me['id']}", headers=owner
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_ENROLLED"

    url = f"{API}/courses/{course['id']}/enrollments"
    await client.post(url, json={"user_id": student_me["id"]}, headers=owner)
    response = await client.post(url, json={"user_id": student_me["id"]}, headers=owner)
    assert response.json()["enrolled"] == [student_me["id"]]

    response = await client.delete(f"{url}/{student_me['id']}", headers=owner)
    assert response.status_code == 200
    assert response.json()["enrolled"] == []


@pytest.mark.asyncio
async def test_ambiguous_instructor_on_course_paths(client: AsyncClient, test_data):
    first_owner = await sign_up(client, "one@acme.com")
    second_owner = await sign_up(client, "two@acme.com")
    instructor = await create_instructor(client, first_owner, email="ada@acme.com")
    await create_instructor(client, second_owner, email="ada@acme.com")
    course = await create_course(
        client, first_owner, test_data.get_copy("course", instructors=[instructor["id"]])
    )
    ada = await sign_up(client, "ada@acme.com")

    response = await client.get(f"{API}/courses/{course['id']}", headers=ada)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "AMBIGUOUS_INSTRUCTOR"

    response = await client.get(
        f"{API}/courses/instructors/{instructor['id']}/courses", headers=ada
    )
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "AMBIGUOUS_INSTRUCTOR"

    # The owner is unaffected
    response = await client.get(f"{API}/courses/{course['id']}", headers=first_owner)
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"instructor_rates": {"x": "Infinity"}},
        {"instructor_rates": {"x": "NaN"}},
        {"cost": "Infinity"},
        {"materials_cost": "-Infinity"},
    ],
)
async def test_non_finite_amounts_are_rejected(client: AsyncClient, test_data, overrides):
    owner = await sign_up(client, "owner@acme.com")

    response = await client.post(
        f"{API}/courses", json=test_data.get_copy("course", **overrides), headers=owner
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    course = await create_course(client, owner, test_data.get_copy("course"))
    response = await client.patch(
        f"{API}/courses/{course['id']}", json=overrides, headers=owner
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
