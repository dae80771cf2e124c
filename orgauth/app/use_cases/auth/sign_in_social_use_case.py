"""
Sign In with a social provider

Runs after the provider's token exchange has produced a SocialProfile.
"""

import logging
from typing import Optional

from orgauth.api.utils.jwt import generate_session_token
from orgauth.app.services.session_service import create_session
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.entities import Account, User
from orgauth.result import Error, Result, Return

from .dtos import SessionInfo, SignInResponse, SocialProfile, UserInfo

logger = logging.getLogger(__name__)


class SignInSocialUseCase:
    """
    Use case for Google/GitHub sign-in.

    Business Rules:
    - Returning users are found by (provider, subject)
    - First sign-in with a provider links to the user with the same email,
      only when the provider verified that email
    - Unknown emails get a new user, verified if the provider says so
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    async def execute(
        self,
        profile: SocialProfile,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[SignInResponse]:
        if profile.provider not in self.config.social_providers:
            return Return.err(
                Error("PROVIDER_NOT_FOUND", f"Provider {profile.provider} is not enabled")
            )

        async with self.uow:
            user = None
            account = await self.uow.accounts.get_by_provider(
                profile.provider, profile.account_id
            )
            if account is not None:
                user = await self.uow.users.get_by_id(account.user_id)

            if user is None:
                user = await self.uow.users.get_by_email(profile.email)
                if user is not None:
                    if not profile.email_verified:
                        return Return.err(
                            Error(
                                "ACCOUNT_NOT_LINKED",
                                "Email is not verified by the provider; account not linked",
                            )
                        )
                    await self.uow.accounts.create(
                        Account(
                            user_id=user.id,
                            provider_id=profile.provider,
                            account_id=profile.account_id,
                        )
                    )
                    logger.info("Linked %s identity to user %s", profile.provider, user.id)
                else:
                    user = await self.uow.users.create(
                        User(
                            email=profile.email,
                            name=profile.name,
                            image=profile.image,
                            email_verified=profile.email_verified,
                        )
                    )
                    await self.uow.accounts.create(
                        Account(
                            user_id=user.id,
                            provider_id=profile.provider,
                            account_id=profile.account_id,
                        )
                    )
                    logger.info("Created user %s from %s sign-in", user.id, profile.provider)

            if profile.email_verified and not user.email_verified:
                user.email_verified = True
                user = await self.uow.users.update(user)

            session = await create_session(
                self.uow, self.config, user.id, ip_address, user_agent
            )

            await self.uow.commit()

            return Return.ok(
                SignInResponse(
                    user=UserInfo.from_entity(user),
                    session=SessionInfo.from_entity(session),
                    token=generate_session_token(session, self.config.secret),
                    login_method=profile.provider,
                )
            )
