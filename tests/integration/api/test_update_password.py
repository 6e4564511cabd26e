from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

from tests.fixtures.users import create_user

API = "/api/v1"

UPDATE = {
    "passwordCurrent": "OldPass123!",
    "password": "NewPass456!",
    "passwordConfirm": "NewPass456!",
}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def old_token(app):
    """Token issued an hour ago, before any password change"""

    def issue(user_id):
        return app.state.token_issuer.issue(
            user_id, now=datetime.now(UTC) - timedelta(hours=1)
        )

    return issue


@pytest.mark.asyncio
async def test_update_password(client: AsyncClient, db_session, old_token):
    user_id = await create_user(db_session, email="kate@example.com")
    token = old_token(user_id)

    response = await client.patch(
        f"{API}/users/updateMyPassword", json=UPDATE, headers=bearer(token)
    )

    assert response.status_code == 200
    new_token = response.json()["token"]
    assert new_token != token
    assert response.headers["set-cookie"].startswith(f"jwt={new_token}")

    login = await client.post(
        f"{API}/users/login", json={"email": "kate@example.com", "password": "NewPass456!"}
    )
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_token_issued_before_password_change_is_rejected(
    client: AsyncClient, db_session, old_token
):
    user_id = await create_user(db_session, email="kate@example.com")
    token = old_token(user_id)

    before = await client.get(f"{API}/users/me", headers=bearer(token))
    update = await client.patch(
        f"{API}/users/updateMyPassword", json=UPDATE, headers=bearer(token)
    )
    after = await client.get(f"{API}/users/me", headers=bearer(token))
    fresh = await client.get(f"{API}/users/me", headers=bearer(update.json()["token"]))

    assert before.status_code == 200
    assert update.status_code == 200
    assert after.status_code == 401
    assert after.json()["error"]["code"] == "PASSWORD_CHANGED"
    assert after.json()["error"]["message"] == "User recently changed password! Please log in again."
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_update_password_wrong_current(client: AsyncClient, db_session, old_token):
    user_id = await create_user(db_session, email="kate@example.com")

    response = await client.patch(
        f"{API}/users/updateMyPassword",
        json={**UPDATE, "passwordCurrent": "not-my-password"},
        headers=bearer(old_token(user_id)),
    )

    assert response.status_code == 401
    error = response.json()["error"]
    assert error["code"] == "INCORRECT_PASSWORD"
    assert error["message"] == "Current password is incorrect."


@pytest.mark.asyncio
async def test_update_password_mismatch(client: AsyncClient, db_session, old_token):
    user_id = await create_user(db_session, email="kate@example.com")

    response = await client.patch(
        f"{API}/users/updateMyPassword",
        json={**UPDATE, "passwordConfirm": "Mismatch456!"},
        headers=bearer(old_token(user_id)),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "PASSWORD_MISMATCH"


@pytest.mark.asyncio
async def test_update_password_requires_login(client: AsyncClient):
    response = await client.patch(f"{API}/users/updateMyPassword", json=UPDATE)

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Please login to get access!"
