"""
Authenticate Use Case

Resolves the user behind a session token.
"""

from uuid import UUID

from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

from .dtos import UserInfo


class AuthenticateUseCase:
    """
    Use case behind route protection.

    Checks, in order:
    1. Token signature and expiry (INVALID_TOKEN / TOKEN_EXPIRED)
    2. User still exists (USER_NOT_FOUND)
    3. Password not changed after the token was issued (PASSWORD_CHANGED)
    """

    def __init__(self, uow: UnitOfWork, token_issuer: SessionTokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(self, token: str) -> Result[UserInfo]:
        verified = self.token_issuer.verify(token)
        if verified.is_err():
            return Return.err(verified.error)
        claims = verified.value

        try:
            user_id = UUID(claims.user_id)
        except ValueError:
            return Return.err(
                Error("INVALID_TOKEN", "Invalid token. Please log in again!")
            )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(
                    Error(
                        "USER_NOT_FOUND",
                        "The user associated with this token no longer exists.",
                    )
                )

            if user.changed_password_after(claims.issued_at):
                return Return.err(
                    Error(
                        "PASSWORD_CHANGED",
                        "User recently changed password! Please log in again.",
                    )
                )

            return Return.ok(UserInfo.from_entity(user))
