import logging
import secrets

from orgauth.api.utils.jwt import generate_session_token
from orgauth.app.hooks import UserLinkEmailData
from orgauth.app.services.email_dispatcher import EmailDispatchError
from orgauth.app.services.passwords import hash_password
from orgauth.app.services.session_service import create_session
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import CREDENTIAL_PROVIDER, Account, User
from orgauth.result import Error, Result, Return

from .dtos import SessionInfo, SignUpCommand, SignUpResponse, UserInfo
from .links import verification_url

logger = logging.getLogger(__name__)


class SignUpEmailUseCase:
    """
    Sign Up with email and password

    Business Logic:
    1. Reject when email/password sign-up is disabled
    2. Enforce password length policy
    3. Reject an email that is already registered
    4. Create User (email_verified=False) and its credential Account
    5. Issue a verification token and send the verification email
    6. Commit; open a session only when verification is not required

    A verification email that cannot be delivered fails the sign-up so the
    user can retry with the same address.
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(self, command: SignUpCommand) -> Result[SignUpResponse]:
        policy = self.config.email_and_password
        if not policy.enabled:
            return Return.err(
                Error("EMAIL_PASSWORD_DISABLED", "Email and password sign-up is disabled")
            )

        if not policy.min_password_length <= len(command.password) <= policy.max_password_length:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be between {policy.min_password_length} and "
                    f"{policy.max_password_length} characters",
                )
            )

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("USER_ALREADY_EXISTS", "User already exists. Use another email.")
                )

            verification = self.config.email_verification
            send_verification = (
                verification.send_on_sign_up or policy.require_email_verification
            )
            token = secrets.token_urlsafe(32) if send_verification else None

            user = User(
                email=command.email,
                name=command.name,
                password_hash=hash_password(command.password),
                email_verified=False,
                email_verification_token=token,
                email_verification_expires_at=(
                    utcnow() + verification.expires_in if token else None
                ),
            )
            user = await self.uow.users.create(user)

            await self.uow.accounts.create(
                Account(
                    user_id=user.id,
                    provider_id=CREDENTIAL_PROVIDER,
                    account_id=str(user.id),
                )
            )

            if token:
                try:
                    await self.config.hooks.send_verification_email(
                        UserLinkEmailData(
                            email=user.email,
                            name=user.name,
                            url=verification_url(self.config, token, command.callback_url),
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

            session = None
            if not policy.require_email_verification:
                session = await create_session(self.uow, self.config, user.id)

            await self.uow.commit()

            return Return.ok(
                SignUpResponse(
                    user=UserInfo.from_entity(user),
                    email_verification_required=policy.require_email_verification,
                    token=(
                        generate_session_token(session, self.config.secret)
                        if session
                        else None
                    ),
                    session=SessionInfo.from_entity(session) if session else None,
                )
            )
