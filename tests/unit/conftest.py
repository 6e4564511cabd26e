from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.api.utils.jwt import SessionTokenIssuer
from src.libs.result import Error, Return


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.get_by_password_reset_token = AsyncMock()
    uow.users.list_all = AsyncMock()
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    return uow


@pytest.fixture
def token_issuer():
    return SessionTokenIssuer("unit-test-secret", timedelta(days=90))


@pytest.fixture
def mock_email_service():
    service = MagicMock()
    service.send = AsyncMock(return_value=Return.ok(None))
    return service


@pytest.fixture
def failing_email_service():
    service = MagicMock()
    service.send = AsyncMock(
        return_value=Return.err(Error("EMAIL_DELIVERY_FAILED", "Connection refused"))
    )
    return service
