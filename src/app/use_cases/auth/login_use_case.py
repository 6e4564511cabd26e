"""
Login Use Case

Checks submitted credentials and issues a session token.
"""

from typing import Optional

from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.password_hasher import burn_verification_time, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return

from .dtos import AuthResponse


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Email and password are both required
    - Constant-time password comparison to prevent timing attacks
    - Same error for unknown email and wrong password (no enumeration)
    """

    def __init__(self, uow: UnitOfWork, token_issuer: SessionTokenIssuer):
        self.uow = uow
        self.token_issuer = token_issuer

    async def execute(
        self, email: Optional[str], password: Optional[str]
    ) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with AuthResponse, or Error(MISSING_CREDENTIALS / INVALID_CREDENTIALS)
        """
        if not email or not password:
            return Return.err(
                Error("MISSING_CREDENTIALS", "Please provide email and password!")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            # Always perform a hash check even if user not found
            if user is None:
                burn_verification_time(password)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Incorrect email or password")
                )

            if not verify_password(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Incorrect email or password")
                )

            token = self.token_issuer.issue(user.id)
            return Return.ok(AuthResponse.for_user(user, token))
