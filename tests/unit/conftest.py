import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.token_codec import TokenCodec


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.accounts = MagicMock()
    uow.accounts.get_by_name = AsyncMock()
    uow.accounts.get_by_id = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.create = AsyncMock()
    uow.sessions.get_by_id = AsyncMock()
    uow.sessions.refresh = AsyncMock()
    uow.sessions.sweep = AsyncMock()

    return uow


@pytest.fixture
def token_codec():
    return TokenCodec("unit-test-secret")
