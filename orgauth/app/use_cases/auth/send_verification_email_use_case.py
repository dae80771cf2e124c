"""
Send Verification Email Use Case

Re-issues the verification link for an unverified account.
"""

import logging
import secrets

from orgauth.app.hooks import UserLinkEmailData
from orgauth.app.services.email_dispatcher import EmailDispatchError
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.result import Error, Result, Return

from .dtos import SendVerificationEmailResponse
from .links import verification_url

logger = logging.getLogger(__name__)


class SendVerificationEmailUseCase:
    """
    Business Rules:
    - Same response whether or not the email is registered
    - Already verified users get no email
    - A fresh token replaces the previous one
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self, email: str, callback_url: str = "/"
    ) -> Result[SendVerificationEmailResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None or user.email_verified:
                return Return.ok(SendVerificationEmailResponse(status="sent"))

            token = secrets.token_urlsafe(32)
            user.email_verification_token = token
            user.email_verification_expires_at = (
                utcnow() + self.config.email_verification.expires_in
            )
            await self.uow.users.update(user)

            try:
                await self.config.hooks.send_verification_email(
                    UserLinkEmailData(
                        email=user.email,
                        name=user.name,
                        url=verification_url(self.config, token, callback_url),
                    )
                )
            except EmailDispatchError:
                logger.error("Verification email to %s could not be sent", user.email)
                return Return.err(
                    Error(
                        "EMAIL_DELIVERY_FAILED",
                        "Verification email could not be sent. Please try again.",
                    )
                )

            await self.uow.commit()

            return Return.ok(SendVerificationEmailResponse(status="sent"))
