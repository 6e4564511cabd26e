import pytest
from httpx import AsyncClient

from tests.fixtures.users import create_user

API = "/api/v1"


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "POST"])
async def test_logout_overwrites_cookie(client: AsyncClient, method):
    response = await client.request(method, f"{API}/users/logout")

    assert response.status_code == 200
    assert response.json() == {"status": "success"}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("jwt=loggedout")
    assert "HttpOnly" in set_cookie


@pytest.mark.asyncio
async def test_logged_out_cookie_is_rejected(client: AsyncClient):
    response = await client.get(f"{API}/users/me", headers={"Cookie": "jwt=loggedout"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_bearer_token_survives_logout(client: AsyncClient, db_session):
    """Logout only replaces the cookie; an extracted token is still valid until expiry"""
    await create_user(db_session, email="laura@example.com", password="test1234")
    login = await client.post(
        f"{API}/users/login", json={"email": "laura@example.com", "password": "test1234"}
    )
    token = login.json()["token"]

    await client.get(f"{API}/users/logout")
    response = await client.get(
        f"{API}/users/me", headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 200
