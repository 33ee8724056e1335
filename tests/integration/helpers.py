from httpx import AsyncClient

API = "/api"


async def sign_up(client: AsyncClient, username: str, password: str = "SecurePass123") -> dict:
    """Create an account and return auth headers for it"""
    response = await client.post(
        f"{API}/auth/sign-up", json={"username": username, "password": password}
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


async def current_user(client: AsyncClient, headers: dict) -> dict:
    response = await client.get(f"{API}/me", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def create_instructor(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"name": "Ada Lovelace", "email": "ada@acme.com"}
    payload.update(fields)
    response = await client.post(f"{API}/instructors", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_course(client: AsyncClient, headers: dict, payload: dict) -> dict:
    response = await client.post(f"{API}/courses", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
