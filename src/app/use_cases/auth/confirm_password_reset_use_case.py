"""
Confirm Password Reset Use Case

Redeems a password reset token (resetPassword) and logs the user in.
"""

from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse
from .password_policy import apply_password_change, validate_new_password
from .request_password_reset_use_case import hash_reset_token


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token is validated by hashing and comparing with the stored hash
    - Stored expiry must still be in the future
    - New password must be at least 8 chars and match its confirmation
    - password_changed_at is refreshed, invalidating older session tokens
    - Reset fields are cleared, so the token cannot be redeemed twice
    - A fresh session token is issued
    """

    def __init__(self, uow: UnitOfWork, token_issuer: SessionTokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(
        self, token: str, password: str, password_confirm: str
    ) -> Result[AuthResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token (plain text from email)
            password: New password
            password_confirm: Confirmation of the new password

        Returns:
            Result with AuthResponse, or Error

        Errors:
            - INVALID_TOKEN: Token unknown or expired
            - INVALID_PASSWORD / PASSWORD_MISMATCH: New password rejected
        """
        async with self.uow:
            user = await self.uow.users.get_by_password_reset_token(
                hash_reset_token(token), utcnow()
            )
            if user is None:
                return Return.err(
                    Error("INVALID_TOKEN", "Token is invalid or has expired")
                )

            validation = validate_new_password(password, password_confirm)
            if validation.is_err():
                return Return.err(validation.error)

            apply_password_change(user, password)
            user.password_reset_token = None
            user.password_reset_expires = None
            await self.uow.users.update(user)
            await self.uow.commit()

            token = self.token_issuer.issue(user.id)
            return Return.ok(AuthResponse.for_user(user, token))
