"""
Request Password Reset Use Case

Handles generating and sending password reset tokens (forgotPassword).
"""

import hashlib
import logging
import secrets
from datetime import timedelta

from src.app.services.email_service import EmailKind, EmailRecipient, IEmailService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return

from .dtos import MessageResponse

logger = logging.getLogger(__name__)

RESET_TOKEN_BYTES = 32


def hash_reset_token(token: str) -> str:
    """SHA-256 hex digest of a raw reset token, the only form persisted"""
    return hashlib.sha256(token.encode()).hexdigest()


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown email is reported as USER_NOT_FOUND
    - Token is 32 cryptographically random bytes, hex encoded
    - Only the SHA-256 hash of the token is stored, with an expiry
    - The raw token travels only inside the emailed reset URL
    - If the email cannot be sent, the stored hash and expiry are cleared
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_service: IEmailService,
        expires_in: timedelta = timedelta(minutes=10),
    ):
        self.uow = uow
        self.email_service = email_service
        self.expires_in = expires_in

    async def execute(
        self, email: str, reset_url_base: str
    ) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address
            reset_url_base: URL the raw token is appended to

        Returns:
            Result with MessageResponse, or Error(USER_NOT_FOUND / EMAIL_DELIVERY_FAILED)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "There is no user with this email address.")
                )

            reset_token = secrets.token_hex(RESET_TOKEN_BYTES)
            user.password_reset_token = hash_reset_token(reset_token)
            user.password_reset_expires = utcnow() + self.expires_in
            await self.uow.users.update(user)
            await self.uow.commit()

            recipient = EmailRecipient(email=user.email, name=user.name)
            data = {
                "url": f"{reset_url_base.rstrip('/')}/{reset_token}",
                "expires_minutes": int(self.expires_in.total_seconds() // 60),
            }
            try:
                sent = await self.email_service.send(
                    recipient, EmailKind.password_reset, data
                )
                failure = sent.error.code if sent.is_err() else None
            except Exception as e:
                failure = repr(e)

            if failure is not None:
                logger.error(f"Password reset email failed for user {user.id}: {failure}")
                user.password_reset_token = None
                user.password_reset_expires = None
                await self.uow.users.update(user)
                await self.uow.commit()
                return Return.err(
                    Error(
                        "EMAIL_DELIVERY_FAILED",
                        "There was an error sending the email. Try again later!",
                    )
                )

            return Return.ok(
                MessageResponse(status="success", message="Token sent to email!")
            )
