from datetime import timedelta

from src.app.services.password_hasher import (
    BCRYPT_MAX_BYTES,
    hash_password,
    password_fits_bcrypt,
)
from src.domain.base import utcnow
from src.domain.entities import User
from src.libs.result import Error, Result, Return

MIN_PASSWORD_LENGTH = 8


def validate_new_password(password: str, password_confirm: str) -> Result[None]:
    """
    Validate a password being set on an account.

    Returns:
        Result with None if valid, or Error(INVALID_PASSWORD / PASSWORD_MISMATCH)
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            )
        )

    if not password_fits_bcrypt(password):
        return Return.err(
            Error(
                "INVALID_PASSWORD",
                f"Password must not be longer than {BCRYPT_MAX_BYTES} bytes",
            )
        )

    if password != password_confirm:
        return Return.err(Error("PASSWORD_MISMATCH", "Passwords are not the same!"))

    return Return.ok(None)


def apply_password_change(user: User, new_password: str) -> None:
    """
    Hash and store a new password on an existing user.

    password_changed_at is set one second in the past so the token issued
    right after the change is not rejected by the changed-password check.
    """
    user.password_hash = hash_password(new_password)
    user.password_changed_at = utcnow() - timedelta(seconds=1)
