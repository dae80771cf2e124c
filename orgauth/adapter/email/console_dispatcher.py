import logging
from typing import List

from orgauth.app.services.email_dispatcher import EmailMessage, IEmailDispatcher

logger = logging.getLogger(__name__)


class ConsoleEmailDispatcher(IEmailDispatcher):
    """Local development backend: logs each message and keeps it in memory"""

    def __init__(self):
        self.sent: List[EmailMessage] = []

    async def send_email(self, message: EmailMessage) -> None:
        self.sent.append(message)
        logger.info("Email to %s: %s\n%s", message.to, message.subject, message.html)
