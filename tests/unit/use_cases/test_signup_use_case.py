from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import bcrypt
import pytest

from src.api.utils.jwt import verify_jwt
from src.app.use_cases.auth.signup_dto import SignupCommand
from src.app.use_cases.auth.signup_use_case import SignupUseCase
from src.domain.entities import User


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)

    async def assign_id(user):
        user.id = user.id or uuid4()
        return user
    uow.users.create = AsyncMock(side_effect=assign_id)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


def signup_command(**overrides) -> SignupCommand:
    data = {
        "username": "resetpassuser",
        "email": "reset-pass-test@example.com",
        "password": "ValidPassword123!",
    }
    data.update(overrides)
    return SignupCommand(**data)


@pytest.mark.asyncio
async def test_successful_signup(mock_uow, password_policy):
    use_case = SignupUseCase(mock_uow, password_policy)

    result = await use_case.execute(signup_command())

    assert result.is_ok()
    response = result.value
    assert response.user.username == "resetpassuser"
    assert response.user.email == "reset-pass-test@example.com"

    payload = verify_jwt(response.access_token)
    assert payload["user_id"] == response.user.id

    created_user = mock_uow.users.create.call_args.args[0]
    assert bcrypt.checkpw(b"ValidPassword123!", created_user.password_hash.encode())

    audit_event = mock_uow.audit_events.create.call_args.args[0]
    assert audit_event.action == "signup"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_signup_weak_password(mock_uow, password_policy):
    use_case = SignupUseCase(mock_uow, password_policy)

    result = await use_case.execute(signup_command(password="weak"))

    assert result.is_err()
    assert result.error.code == "WEAK_PASSWORD"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_signup_email_already_exists(mock_uow, password_policy):
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(), email="reset-pass-test@example.com", username="other", password_hash="x"
    )
    use_case = SignupUseCase(mock_uow, password_policy)

    result = await use_case.execute(signup_command())

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_signup_username_already_exists(mock_uow, password_policy):
    mock_uow.users.get_by_username.return_value = User(
        id=uuid4(), email="other@example.com", username="resetpassuser", password_hash="x"
    )
    use_case = SignupUseCase(mock_uow, password_policy)

    result = await use_case.execute(signup_command())

    assert result.is_err()
    assert result.error.code == "USERNAME_ALREADY_EXISTS"
    mock_uow.users.create.assert_not_called()


@pytest.mark.asyncio
async def test_signup_password_over_bcrypt_limit(mock_uow, password_policy):
    use_case = SignupUseCase(mock_uow, password_policy)

    result = await use_case.execute(signup_command(password="Aa1!" + "x" * 80))

    assert result.is_err()
    assert result.error.code == "WEAK_PASSWORD"
    mock_uow.users.create.assert_not_called()
