import pytest
from httpx import AsyncClient

from tests.integration.helpers import API, create_course, create_instructor, sign_up


@pytest.fixture
def course_payload(test_data):
    return test_data.get_copy("course")


async def assigned_course(client, owner, course_payload, *instructors):
    course_payload["instructors"] = [i["id"] for i in instructors]
    return await create_course(client, owner, course_payload)


@pytest.mark.asyncio
async def test_owner_writes_whole_map(client: AsyncClient, course_payload):
    owner = await sign_up(client, "owner@acme.com")
    ada = await create_instructor(client, owner, email="ada@acme.com")
    course = await assigned_course(client, owner, course_payload, ada)
    url = f"{API}/courses/{course['id']}/attendance"

    response = await client.put(
        url,
        json={ada["id"]: ["2024-01-01", "idx-1", "2024-02-30", "bogus", "2024-01-01"]},
        headers=owner,
    )

    assert response.status_code == 200
    assert response.json() == {ada["id"]: ["2024-01-01", "2024-01-03"]}

    response = await client.get(url, headers=owner)
    assert response.json() == {ada["id"]: ["2024-01-01", "2024-01-03"]}


@pytest.mark.asyncio
async def test_instructor_writes_only_own_entry(client: AsyncClient, course_payload):
    owner = await sign_up(client, "owner@acme.com")
    ada = await create_instructor(client, owner, email="ada@acme.com")
    grace = await create_instructor(client, owner, email="grace@acme.com")
    course = await assigned_course(client, owner, course_payload, ada, grace)
    url = f"{API}/courses/{course['id']}/attendance"
    await client.put(url, json={grace["id"]: ["2024-01-08"]}, headers=owner)

    ada_headers = await sign_up(client, "ada@acme.com")
    response = await client.put(
        url,
        json={ada["id"]: ["idx-0"], grace["id"]: ["2024-01-10"]},
        headers=ada_headers,
    )
    assert response.status_code == 200
    assert response.json() == {ada["id"]: ["2024-01-01"]}

    response = await client.put(url, json=["2024-01-03", "2024-01-03"], headers=ada_headers)
    assert response.json() == {ada["id"]: ["2024-01-03"]}

    response = await client.get(url, headers=ada_headers)
    assert response.json() == {
        grace["id"]: ["2024-01-08"],
        ada["id"]: ["2024-01-03"],
    }


@pytest.mark.asyncio
async def test_unassigned_callers_are_forbidden(client: AsyncClient, course_payload):
    owner = await sign_up(client, "owner@acme.com")
    await create_instructor(client, owner, email="ada@acme.com")
    course = await create_course(client, owner, course_payload)
    url = f"{API}/courses/{course['id']}/attendance"

    ada_headers = await sign_up(client, "ada@acme.com")
    assert (await client.get(url, headers=ada_headers)).status_code == 403
    response = await client.put(url, json=["2024-01-01"], headers=ada_headers)
    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_session_change_prunes_attendance(client: AsyncClient, course_payload):
    owner = await sign_up(client, "owner@acme.com")
    ada = await create_instructor(client, owner, email="ada@acme.com")
    course = await assigned_course(client, owner, course_payload, ada)
    url = f"{API}/courses/{course['id']}/attendance"
    await client.put(url, json={ada["id"]: ["2024-01-01", "2024-01-03"]}, headers=owner)

    response = await client.patch(
        f"{API}/courses/{course['id']}", json={"days_of_week": [3]}, headers=owner
    )

    assert response.json()["attendance"] == {ada["id"]: ["2024-01-03"]}


@pytest.mark.asyncio
async def test_unknown_course(client: AsyncClient):
    owner = await sign_up(client, "owner@acme.com")

    response = await client.get(
        f"{API}/courses/00000000-0000-0000-0000-000000000000/attendance", headers=owner
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_ambiguous_instructor_gets_distinct_error(client: AsyncClient, course_payload):
    first_owner = await sign_up(client, "one@acme.com")
    second_owner = await sign_up(client, "two@acme.com")
    ada = await create_instructor(client, first_owner, email="ada@acme.com")
    await create_instructor(client, second_owner, email="ada@acme.com")
    course = await assigned_course(client, first_owner, course_payload, ada)
    url = f"{API}/courses/{course['id']}/attendance"
    ada_headers = await sign_up(client, "ada@acme.com")

    response = await client.put(url, json=["2024-01-01"], headers=ada_headers)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "AMBIGUOUS_INSTRUCTOR"

    response = await client.get(url, headers=ada_headers)
    assert response.status_code == 409

    response = await client.get(url, headers=first_owner)
    assert response.json() == {}
