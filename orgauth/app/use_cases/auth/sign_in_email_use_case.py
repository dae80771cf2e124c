"""
Sign In with email and password

Authenticates a credential user and opens a session.
"""

from typing import Optional

from orgauth.api.utils.jwt import generate_session_token
from orgauth.app.services.passwords import burn_password_check, verify_password
from orgauth.app.services.session_service import create_session
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import LoginMethod
from orgauth.result import Error, Result, Return

from .dtos import SessionInfo, SignInResponse, UserInfo


class SignInEmailUseCase:
    """
    Use case for email/password sign-in.

    Business Rules:
    - Constant-time failure for unknown emails (no user enumeration)
    - Users without a password (social only) cannot use this method
    - Unverified emails are refused when verification is required
    - Session is created through the session service, so it carries the
      user's active organization
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self,
        email: str,
        password: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SignInResponse]:
        """
        Execute sign-in use case.

        Args:
            email: User email
            password: Plain text password
            ip_address: Client address stored on the session
            user_agent: Client user agent stored on the session

        Returns:
            Result with SignInResponse, or Error
        """
        if not self.config.email_and_password.enabled:
            return Return.err(
                Error("EMAIL_PASSWORD_DISABLED", "Email and password sign-in is disabled")
            )

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None or not user.password_hash:
                burn_password_check(password)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if (
                self.config.email_and_password.require_email_verification
                and not user.email_verified
            ):
                return Return.err(
                    Error("EMAIL_NOT_VERIFIED", "Email not verified")
                )

            session = await create_session(
                self.uow, self.config, user.id, ip_address, user_agent
            )

            await self.uow.commit()

            return Return.ok(
                SignInResponse(
                    user=UserInfo.from_entity(user),
                    session=SessionInfo.from_entity(session),
                    token=generate_session_token(session, self.config.secret),
                    login_method=LoginMethod.email.value,
                )
            )
