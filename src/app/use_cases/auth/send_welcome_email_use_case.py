import logging

from src.app.services.email_service import EmailKind, EmailRecipient, IEmailService

logger = logging.getLogger(__name__)


class SendWelcomeEmailUseCase:
    """
    Sends the signup welcome email.

    Runs after the signup response has been sent. A delivery failure is
    logged and dropped here; it never reaches the client.
    """

    def __init__(self, email_service: IEmailService):
        self.email_service = email_service

    async def execute(self, recipient: EmailRecipient, url: str) -> None:
        sent = await self.email_service.send(recipient, EmailKind.welcome, {"url": url})
        if sent.is_err():
            logger.warning(
                f"Welcome email to {recipient.email} not delivered: {sent.error.message}"
            )
