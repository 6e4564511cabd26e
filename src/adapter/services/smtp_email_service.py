"""
SMTP Email Service

Delivers transactional emails over SMTP. smtplib is blocking, so the
send runs in Starlette's threadpool.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Dict

from fastapi.concurrency import run_in_threadpool

from src.app.services.email_service import EmailKind, EmailRecipient, IEmailService
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

SUBJECTS = {
    EmailKind.welcome: "Welcome to the Natours Family!",
    EmailKind.password_reset: "Reset your Natours password",
}

BODIES = {
    EmailKind.welcome: (
        "Hello {first_name}!\n\n"
        "Welcome to Natours! Click below to get started.\n\n"
        "{url}\n"
    ),
    EmailKind.password_reset: (
        "Hello {first_name},\n\n"
        "Forgot your password? Follow the link below to reset it. "
        "The link is valid for {expires_minutes} minutes.\n\n"
        "{url}\n\n"
        "If you didn't forget your password, please ignore this email.\n"
    ),
}


def build_message(
    sender: str, recipient: EmailRecipient, kind: EmailKind, data: Dict[str, Any]
) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient.email
    message["Subject"] = SUBJECTS[kind]
    message.set_content(BODIES[kind].format(first_name=recipient.first_name, **data))
    return message


class SmtpEmailService(IEmailService):
    """IEmailService implementation over an SMTP relay"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        from_name: str = "Natours",
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = f"{from_name} <{from_address}>"
        self.use_tls = use_tls
        self.timeout = timeout

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as conn:
            if self.use_tls:
                conn.starttls()
            if self.username:
                conn.login(self.username, self.password)
            conn.send_message(message)

    async def send(
        self, recipient: EmailRecipient, kind: EmailKind, data: Dict[str, Any]
    ) -> Result[None]:
        message = build_message(self.sender, recipient, kind, data)
        try:
            await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending {kind.value} email to {recipient.email}: {e}")
            return Return.err(Error("EMAIL_DELIVERY_FAILED", str(e)))

        logger.info(f"Email sent to {recipient.email}: {kind.value}")
        return Return.ok(None)
