import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.fakes import FixedClock, RecordingNotificationDispatcher
from src.app.services.password_policy import PasswordPolicy


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def dispatcher():
    return RecordingNotificationDispatcher()


@pytest.fixture
def password_policy():
    return PasswordPolicy()
