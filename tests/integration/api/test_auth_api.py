import pytest
from httpx import AsyncClient

from tests.integration.helpers import API, current_user, sign_up


@pytest.mark.asyncio
async def test_sign_up_then_sign_in(client: AsyncClient, test_data):
    payload = test_data.get_copy("sign_up")

    response = await client.post(f"{API}/auth/sign-up", json=payload)
    assert response.status_code == 201
    assert response.json()["token"]

    response = await client.post(f"{API}/auth/sign-in", json=payload)
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    me = await current_user(client, headers)
    assert me["username"] == "owner@acme.com"
    assert me["roles"] == ["student"]
    assert me["status"] == "active"
    assert me["instructor_id"] is None
    assert me["last_login_at"] is not None
    assert "hashed_password" not in me


@pytest.mark.asyncio
async def test_sign_up_lowercases_username(client: AsyncClient):
    headers = await sign_up(client, "  Mixed@Case.com ")

    me = await current_user(client, headers)
    assert me["username"] == "mixed@case.com"

    response = await client.post(
        f"{API}/auth/sign-in", json={"username": "MIXED@case.com", "password": "SecurePass123"}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_duplicate_username(client: AsyncClient):
    await sign_up(client, "dup@acme.com")

    response = await client.post(
        f"{API}/auth/sign-up", json={"username": "DUP@acme.com", "password": "SecurePass123"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "USERNAME_TAKEN"


@pytest.mark.asyncio
async def test_short_password_is_a_validation_error(client: AsyncClient):
    response = await client.post(
        f"{API}/auth/sign-up", json={"username": "a@acme.com", "password": "short"}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert "password" in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_wrong_password(client: AsyncClient):
    await sign_up(client, "user@acme.com")

    response = await client.post(
        f"{API}/auth/sign-in", json={"username": "user@acme.com", "password": "WrongPass999"}
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-jwt"},
        {"Authorization": "Basic abc"},
    ],
)
async def test_protected_routes_require_valid_token(client: AsyncClient, headers):
    response = await client.get(f"{API}/me", headers=headers)

    assert response.status_code == 401
    assert response.json()["error"] == {
        "code": "UNAUTHORIZED",
        "message": "Invalid or expired token",
    }


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
