"""
Integration tests for POST /api/auth/reset-password-complete

- Valid token: password replaced, token consumed, login works
- Replayed, superseded and expired tokens are rejected
- Weak password: rejected without consuming the token
"""
from datetime import UTC, datetime, timedelta

import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.depends import get_clock
from src.domain.entities import AuditEvent, PasswordResetToken, PasswordResetTokenStatus, User, UserStatus
from tests.fixtures.factories import DEFAULT_PASSWORD, create_user
from tests.fixtures.fakes import FixedClock

EMAIL = "reset-pass-test@example.com"
NEW_PASSWORD = "NewSecurePass123!"
COMPLETE_URL = "/api/auth/reset-password-complete"


async def request_token(client: AsyncClient, dispatcher, email: str = EMAIL) -> str:
    response = await client.post("/api/auth/reset-password", json={"email": email})
    assert response.status_code == 200
    return dispatcher.last_token_for(email)


@pytest.mark.asyncio
async def test_successful_password_reset(client: AsyncClient, db_session: AsyncSession, dispatcher):
    user_id = await create_user(db_session)
    token = await request_token(client, dispatcher)

    response = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["message"] == "Password has been reset successfully"

    user = (await db_session.exec(select(User).where(User.id == user_id))).one()
    assert bcrypt.checkpw(NEW_PASSWORD.encode(), user.password_hash.encode())

    reset_token = (
        await db_session.exec(select(PasswordResetToken).where(PasswordResetToken.user_id == user_id))
    ).one()
    assert reset_token.status == PasswordResetTokenStatus.consumed
    assert reset_token.consumed_at is not None

    audit = (
        await db_session.exec(select(AuditEvent).where(AuditEvent.action == "password_reset_confirmed"))
    ).one()
    assert audit.event_metadata == {"token_id": str(reset_token.id)}


@pytest.mark.asyncio
async def test_login_uses_new_password_after_reset(client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    token = await request_token(client, dispatcher)
    await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})

    old_login = await client.post("/api/auth/login", json={"email": EMAIL, "password": DEFAULT_PASSWORD})
    new_login = await client.post("/api/auth/login", json={"email": EMAIL, "password": NEW_PASSWORD})

    assert old_login.status_code == 401
    assert new_login.status_code == 200
    assert new_login.json()["access_token"]


@pytest.mark.asyncio
async def test_token_cannot_be_replayed(client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    token = await request_token(client, dispatcher)

    first = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})
    second = await client.post(COMPLETE_URL, json={"token": token, "password": "AnotherPass456!"})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_TOKEN"

    login = await client.post("/api/auth/login", json={"email": EMAIL, "password": NEW_PASSWORD})
    assert login.status_code == 200


@pytest.mark.asyncio
async def test_superseded_token_is_rejected(client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    first_token = await request_token(client, dispatcher)
    second_token = await request_token(client, dispatcher)

    stale = await client.post(COMPLETE_URL, json={"token": first_token, "password": NEW_PASSWORD})
    fresh = await client.post(COMPLETE_URL, json={"token": second_token, "password": NEW_PASSWORD})

    assert stale.status_code == 400
    assert stale.json()["error"]["code"] == "INVALID_TOKEN"
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_expired_token_is_rejected(app, client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    token = await request_token(client, dispatcher)

    later = datetime.now(UTC).replace(tzinfo=None) + timedelta(hours=2)
    app.dependency_overrides[get_clock] = lambda: FixedClock(later)

    response = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})

    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "INVALID_TOKEN",
        "message": "Invalid or expired password reset token",
    }


@pytest.mark.asyncio
async def test_weak_password_keeps_token_usable(client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    token = await request_token(client, dispatcher)

    weak = await client.post(COMPLETE_URL, json={"token": token, "password": "weak"})
    assert weak.status_code == 400
    assert weak.json()["error"]["code"] == "WEAK_PASSWORD"

    ok = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})
    assert ok.status_code == 200


@pytest.mark.asyncio
async def test_disabled_user_cannot_complete_reset(client: AsyncClient, db_session: AsyncSession, dispatcher):
    user_id = await create_user(db_session)
    token = await request_token(client, dispatcher)

    user = (await db_session.exec(select(User).where(User.id == user_id))).one()
    user.status = UserStatus.disabled
    db_session.add(user)
    await db_session.commit()

    response = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{}, {"token": "abc"}, {"password": NEW_PASSWORD}, {"token": "", "password": NEW_PASSWORD}])
async def test_incomplete_payload(client: AsyncClient, payload):
    response = await client.post(COMPLETE_URL, json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_password_over_bcrypt_limit_is_rejected(client: AsyncClient, db_session: AsyncSession, dispatcher):
    await create_user(db_session)
    token = await request_token(client, dispatcher)

    response = await client.post(COMPLETE_URL, json={"token": token, "password": "Aa1!" + "x" * 80})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "WEAK_PASSWORD"

    # Token was not consumed by the rejected attempt
    ok = await client.post(COMPLETE_URL, json={"token": token, "password": NEW_PASSWORD})
    assert ok.status_code == 200
