"""
Integration tests for PUT /api/auth/users/{user_id}
"""
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.utils.jwt import generate_jwt
from src.domain.entities import AuditEvent, User
from tests.fixtures.factories import create_user


def auth_headers(user_id) -> dict:
    return {"Authorization": f"Bearer {generate_jwt(user_id)}"}


@pytest.mark.asyncio
async def test_update_own_username(client: AsyncClient, db_session: AsyncSession):
    user_id = await create_user(db_session)

    response = await client.put(
        f"/api/auth/users/{user_id}",
        json={"username": "renamed"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 200
    assert response.json() == {
        "id": str(user_id),
        "username": "renamed",
        "email": "reset-pass-test@example.com",
    }

    user = (await db_session.exec(select(User).where(User.id == user_id))).one()
    assert user.username == "renamed"

    audit = (await db_session.exec(select(AuditEvent).where(AuditEvent.action == "user_updated"))).one()
    assert audit.event_metadata["changes"]["username"]["new"] == "renamed"


@pytest.mark.asyncio
async def test_email_change_invalidates_outstanding_reset_token(
    client: AsyncClient, db_session: AsyncSession, dispatcher
):
    user_id = await create_user(db_session)
    await client.post("/api/auth/reset-password", json={"email": "reset-pass-test@example.com"})
    token = dispatcher.last_token_for("reset-pass-test@example.com")

    response = await client.put(
        f"/api/auth/users/{user_id}",
        json={"email": "moved@example.com"},
        headers=auth_headers(user_id),
    )
    assert response.status_code == 200
    assert response.json()["email"] == "moved@example.com"

    reset = await client.post(
        "/api/auth/reset-password-complete",
        json={"token": token, "password": "NewSecurePass123!"},
    )
    assert reset.status_code == 400
    assert reset.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_update_requires_bearer_token(client: AsyncClient, db_session: AsyncSession):
    user_id = await create_user(db_session)

    missing = await client.put(f"/api/auth/users/{user_id}", json={"username": "renamed"})
    invalid = await client.put(
        f"/api/auth/users/{user_id}",
        json={"username": "renamed"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert missing.status_code == 401
    assert invalid.status_code == 401
    assert "error" in invalid.json()


@pytest.mark.asyncio
async def test_cannot_update_another_user(client: AsyncClient, db_session: AsyncSession):
    user_id = await create_user(db_session)
    other_id = await create_user(db_session, email="other@example.com", username="otheruser")

    response = await client.put(
        f"/api/auth/users/{other_id}",
        json={"username": "hijacked"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_update_deleted_user(client: AsyncClient):
    ghost_id = uuid4()

    response = await client.put(
        f"/api/auth/users/{ghost_id}",
        json={"username": "ghost"},
        headers=auth_headers(ghost_id),
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_to_taken_email(client: AsyncClient, db_session: AsyncSession):
    user_id = await create_user(db_session)
    await create_user(db_session, email="other@example.com", username="otheruser")

    response = await client.put(
        f"/api/auth/users/{user_id}",
        json={"email": "other@example.com"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_update_with_empty_payload(client: AsyncClient, db_session: AsyncSession):
    user_id = await create_user(db_session)

    response = await client.put(f"/api/auth/users/{user_id}", json={}, headers=auth_headers(user_id))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
