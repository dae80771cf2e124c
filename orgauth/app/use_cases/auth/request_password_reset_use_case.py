"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import hashlib
import logging
import secrets

from orgauth.app.hooks import UserLinkEmailData
from orgauth.app.services.email_dispatcher import EmailDispatchError
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import PasswordResetToken
from orgauth.result import Error, Result, Return

from .dtos import RequestPasswordResetResponse
from .links import reset_password_url

logger = logging.getLogger(__name__)

_SENT = RequestPasswordResetResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token
    - Hash token with SHA-256 before storing
    - Token expires in 1 hour
    - A new request invalidates the links sent before it
    - No email enumeration (same response for valid/invalid emails)
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.ok(_SENT)

            await self.uow.password_reset_tokens.invalidate_for_user(user.id)

            reset_token = secrets.token_urlsafe(32)
            token_hash = hashlib.sha256(reset_token.encode()).hexdigest()

            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    used=False,
                    expires_at=utcnow()
                    + self.config.email_and_password.reset_password_token_expires_in,
                )
            )

            try:
                await self.config.hooks.send_reset_password(
                    UserLinkEmailData(
                        email=user.email,
                        name=user.name,
                        url=reset_password_url(self.config, reset_token),
                    )
                )
            except EmailDispatchError:
                logger.error("Password reset email to %s could not be sent", user.email)
                return Return.err(
                    Error(
                        "EMAIL_DELIVERY_FAILED",
                        "Password reset email could not be sent. Please try again.",
                    )
                )

            await self.uow.commit()

            return Return.ok(_SENT)
