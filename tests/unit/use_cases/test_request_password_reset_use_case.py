"""
Unit tests for RequestPasswordResetUseCase

Tests all business logic with mocked dependencies.
"""
import hashlib
from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.email_service import EmailKind
from src.app.use_cases.auth import RequestPasswordResetUseCase
from src.domain.base import utcnow
from src.domain.entities import User

RESET_URL = "http://127.0.0.1:8000/api/v1/users/resetPassword"


@pytest.fixture
def user():
    return User(
        id=uuid4(),
        name="Leo Gillespie",
        email="leo@example.com",
        password_hash="hashed_password",
    )


@pytest.mark.asyncio
async def test_successful_password_reset_request(mock_uow, mock_email_service, user):
    mock_uow.users.get_by_email.return_value = user

    result = await RequestPasswordResetUseCase(mock_uow, mock_email_service).execute(
        user.email, RESET_URL
    )

    assert result.is_ok()
    assert result.value.status == "success"
    assert result.value.message == "Token sent to email!"

    # Only the SHA-256 hash is stored
    assert len(user.password_reset_token) == 64
    time_until_expiry = user.password_reset_expires - utcnow()
    assert timedelta(minutes=9) < time_until_expiry <= timedelta(minutes=10)

    mock_email_service.send.assert_called_once()
    recipient, kind, data = mock_email_service.send.call_args[0]
    assert recipient.email == "leo@example.com"
    assert recipient.first_name == "Leo"
    assert kind == EmailKind.password_reset
    assert data["url"].startswith(RESET_URL + "/")

    # The emailed raw token hashes to the stored value
    raw_token = data["url"].rsplit("/", 1)[1]
    assert raw_token != user.password_reset_token
    assert hashlib.sha256(raw_token.encode()).hexdigest() == user.password_reset_token

    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_password_reset_non_existent_email(mock_uow, mock_email_service):
    mock_uow.users.get_by_email.return_value = None

    result = await RequestPasswordResetUseCase(mock_uow, mock_email_service).execute(
        "nobody@example.com", RESET_URL
    )

    assert result.is_err()
    assert result.error.code == "USER_NOT_FOUND"
    assert result.error.message == "There is no user with this email address."
    mock_email_service.send.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_password_reset_email_failure_clears_token(
    mock_uow, failing_email_service, user
):
    """No reset state survives a failed send"""
    mock_uow.users.get_by_email.return_value = user

    result = await RequestPasswordResetUseCase(mock_uow, failing_email_service).execute(
        user.email, RESET_URL
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_DELIVERY_FAILED"
    assert result.error.message == "There was an error sending the email. Try again later!"

    assert user.password_reset_token is None
    assert user.password_reset_expires is None
    assert mock_uow.users.update.call_count == 2
    assert mock_uow.commit.call_count == 2


@pytest.mark.asyncio
async def test_password_reset_custom_expiry(mock_uow, mock_email_service, user):
    mock_uow.users.get_by_email.return_value = user

    use_case = RequestPasswordResetUseCase(
        mock_uow, mock_email_service, expires_in=timedelta(minutes=30)
    )
    await use_case.execute(user.email, RESET_URL)

    time_until_expiry = user.password_reset_expires - utcnow()
    assert timedelta(minutes=29) < time_until_expiry <= timedelta(minutes=30)


@pytest.mark.asyncio
async def test_each_request_generates_a_new_token(mock_uow, mock_email_service, user):
    mock_uow.users.get_by_email.return_value = user
    use_case = RequestPasswordResetUseCase(mock_uow, mock_email_service)

    await use_case.execute(user.email, RESET_URL)
    first_hash = user.password_reset_token
    await use_case.execute(user.email, RESET_URL)

    assert user.password_reset_token != first_hash


@pytest.mark.asyncio
async def test_password_reset_send_exception_clears_token(mock_uow, mock_email_service, user):
    """A send that raises is treated as a failed delivery"""
    mock_uow.users.get_by_email.return_value = user
    mock_email_service.send.side_effect = RuntimeError("relay exploded")

    result = await RequestPasswordResetUseCase(mock_uow, mock_email_service).execute(
        user.email, RESET_URL
    )

    assert result.is_err()
    assert result.error.code == "EMAIL_DELIVERY_FAILED"
    assert user.password_reset_token is None
    assert user.password_reset_expires is None
    assert mock_uow.commit.call_count == 2


@pytest.mark.asyncio
async def test_password_reset_email_carries_expiry_window(mock_uow, mock_email_service, user):
    mock_uow.users.get_by_email.return_value = user

    await RequestPasswordResetUseCase(
        mock_uow, mock_email_service, expires_in=timedelta(minutes=25)
    ).execute(user.email, RESET_URL)

    _, _, data = mock_email_service.send.call_args[0]
    assert data["expires_minutes"] == 25
