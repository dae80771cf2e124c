"""
Verify Email Use Case

Consumes the token sent in the verification email.
"""

from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.result import Error, Result, Return

from .dtos import VerifyEmailResponse


class VerifyEmailUseCase:
    """
    Use case for verifying a user's email address.

    Business Rules:
    - Token must exist and not be expired
    - Token is cleared after use (single-use)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyEmailResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_verification_token(token)
            if user is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid verification token"))

            if (
                user.email_verification_expires_at is not None
                and user.email_verification_expires_at < utcnow()
            ):
                return Return.err(
                    Error("TOKEN_EXPIRED", "Verification token has expired")
                )

            user.email_verified = True
            user.email_verification_token = None
            user.email_verification_expires_at = None
            await self.uow.users.update(user)

            await self.uow.commit()

            return Return.ok(VerifyEmailResponse(status="verified", email=user.email))
