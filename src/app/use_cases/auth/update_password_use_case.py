"""
Update Password Use Case

Lets an authenticated user change their password (updateMyPassword).
"""

from uuid import UUID

from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.password_hasher import verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse
from .password_policy import apply_password_change, validate_new_password


class UpdatePasswordUseCase:
    """
    Use case for changing the current user's password.

    Business Rules:
    - Current password must be supplied and correct
    - New password must be at least 8 chars and match its confirmation
    - Tokens issued before the change stop working; a new one is issued
    """

    def __init__(self, uow: UnitOfWork, token_issuer: SessionTokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(
        self,
        user_id: UUID,
        password_current: str,
        password: str,
        password_confirm: str,
    ) -> Result[AuthResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error(
                        "USER_NOT_FOUND",
                        "The user associated with this token no longer exists.",
                    )
                )

            if not verify_password(password_current, user.password_hash):
                return Return.err(
                    Error("INCORRECT_PASSWORD", "Current password is incorrect.")
                )

            validation = validate_new_password(password, password_confirm)
            if validation.is_err():
                return Return.err(validation.error)

            apply_password_change(user, password)
            await self.uow.users.update(user)
            await self.uow.commit()

            token = self.token_issuer.issue(user.id)
            return Return.ok(AuthResponse.for_user(user, token))
