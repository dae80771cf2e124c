"""Email delivery through the Resend API."""

import asyncio
import logging
from typing import Optional

import resend

from orgauth.app.services.email_dispatcher import (
    EmailDispatchError,
    EmailMessage,
    IEmailDispatcher,
)

logger = logging.getLogger(__name__)


def _masked_api_key(api_key: Optional[str]) -> str:
    raw = (api_key or "").strip()
    if not raw:
        return "(missing)"
    if len(raw) <= 10:
        return f"{raw[:2]}***"
    return f"{raw[:6]}...{raw[-4:]}"


class ResendEmailDispatcher(IEmailDispatcher):
    """
    Sends through resend.Emails.send.

    The SDK is synchronous, so each send runs in a worker thread. Any SDK
    failure, and a missing API key, is raised as EmailDispatchError.
    """

    def __init__(self, api_key: Optional[str], sender: str):
        self.api_key = api_key
        self.sender = sender

    def _send(self, message: EmailMessage):
        resend.api_key = self.api_key
        return resend.Emails.send(
            {
                "from": self.sender,
                "to": [message.to],
                "subject": message.subject,
                "html": message.html,
            }
        )

    async def send_email(self, message: EmailMessage) -> None:
        if not self.api_key:
            logger.error("RESEND_API_KEY not configured - cannot send email")
            raise EmailDispatchError("RESEND_API_KEY is not configured")

        try:
            response = await asyncio.to_thread(self._send, message)
        except Exception as exc:
            logger.error(
                "Resend send failed for %s (key=%s): %s",
                message.to,
                _masked_api_key(self.api_key),
                exc,
            )
            raise EmailDispatchError(f"Failed to send email to {message.to}") from exc

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info("Email %r sent to %s (id=%s)", message.subject, message.to, message_id)
