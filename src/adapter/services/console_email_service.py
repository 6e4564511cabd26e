import logging
from typing import Any, Dict

from src.app.services.email_service import EmailKind, EmailRecipient, IEmailService
from src.libs.result import Result, Return

from .smtp_email_service import build_message

logger = logging.getLogger(__name__)


class ConsoleEmailService(IEmailService):
    """Development email backend: writes messages to the log instead of sending"""

    def __init__(self, from_address: str, from_name: str = "Natours"):
        self.sender = f"{from_name} <{from_address}>"

    async def send(
        self, recipient: EmailRecipient, kind: EmailKind, data: Dict[str, Any]
    ) -> Result[None]:
        message = build_message(self.sender, recipient, kind, data)
        logger.info(f"Email ({kind.value}) to {recipient.email}:\n{message}")
        return Return.ok(None)
