from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel

from src.libs.result import Result


class EmailKind(str, Enum):
    """Transactional email templates"""

    welcome = "welcome"
    password_reset = "password_reset"


class EmailRecipient(BaseModel):
    """Addressee of a transactional email"""

    email: str
    name: str

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""


class IEmailService(ABC):
    """Email dispatcher interface - application layer"""

    @abstractmethod
    async def send(
        self, recipient: EmailRecipient, kind: EmailKind, data: Dict[str, Any]
    ) -> Result[None]:
        """
        Send a transactional email.

        Returns ok on delivery, or Error(EMAIL_DELIVERY_FAILED).
        Rendering and transport are the implementation's concern.
        """
        pass
