"""Verification and password reset email senders."""

from dataclasses import dataclass
from typing import Awaitable, Callable

from orgauth.app.services.email_dispatcher import EmailMessage, IEmailDispatcher
from orgauth.app.services.email_templates import (
    render_reset_password,
    render_verify_email,
)

VERIFY_SUBJECT = "Verify your email"
RESET_SUBJECT = "Reset your password"


@dataclass(frozen=True)
class UserLinkEmailData:
    """Recipient plus the single-use link issued for them"""

    email: str
    name: str
    url: str


def make_verification_email_sender(
    dispatcher: IEmailDispatcher,
) -> Callable[[UserLinkEmailData], Awaitable[None]]:
    async def send_verification_email(data: UserLinkEmailData) -> None:
        await dispatcher.send_email(
            EmailMessage(
                to=data.email,
                subject=VERIFY_SUBJECT,
                html=render_verify_email(username=data.name, verify_url=data.url),
            )
        )

    return send_verification_email


def make_reset_password_sender(
    dispatcher: IEmailDispatcher,
) -> Callable[[UserLinkEmailData], Awaitable[None]]:
    async def send_reset_password(data: UserLinkEmailData) -> None:
        await dispatcher.send_email(
            EmailMessage(
                to=data.email,
                subject=RESET_SUBJECT,
                html=render_reset_password(
                    username=data.name, reset_url=data.url, user_email=data.email
                ),
            )
        )

    return send_reset_password
