from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    """Rendered transactional email"""

    to: str
    subject: str
    html: str


class EmailDispatchError(Exception):
    """Raised when the email transport fails to accept a message"""


class IEmailDispatcher(ABC):
    """Email dispatcher interface - application layer"""

    @abstractmethod
    async def send_email(self, message: EmailMessage) -> None:
        """Send a message. Raises EmailDispatchError on transport failure."""
        pass
