"""
Reset Password Use Case

Handles password reset confirmation with secure token validation.
"""

import hashlib

from orgauth.app.services.passwords import hash_password
from orgauth.app.services.unit_of_work import UnitOfWork
from orgauth.domain.base import utcnow
from orgauth.domain.entities import CREDENTIAL_PROVIDER, Account
from orgauth.result import Error, Result, Return

from .dtos import ResetPasswordResponse


class ResetPasswordUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is validated by hashing and comparing with stored hash
    - Token must not be expired or already used
    - New password must satisfy the length policy
    - All user sessions are revoked
    - Social-only users gain a credential account
    """

    def __init__(self, uow: UnitOfWork, config):
        self.uow = uow
        self.config = config

    def _validate_password(self, password: str) -> Result[None]:
        policy = self.config.email_and_password
        if len(password) < policy.min_password_length:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {policy.min_password_length} characters long",
                )
            )
        if len(password) > policy.max_password_length:
            return Return.err(Error("INVALID_PASSWORD", "Password is too long"))
        return Return.ok(None)

    async def execute(self, token: str, new_password: str) -> Result[ResetPasswordResponse]:
        """
        Errors:
            - INVALID_TOKEN: Token not found
            - TOKEN_EXPIRED: Token has expired
            - TOKEN_ALREADY_USED: Token has already been used
            - INVALID_PASSWORD: Password does not meet the policy
        """
        password_validation = self._validate_password(new_password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            token_hash = hashlib.sha256(token.encode()).hexdigest()
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(token_hash)

            if reset_token is None:
                return Return.err(
                    Error("INVALID_TOKEN", "Invalid or expired password reset token")
                )

            if reset_token.expires_at < utcnow():
                return Return.err(
                    Error("TOKEN_EXPIRED", "Password reset token has expired")
                )

            if reset_token.used:
                return Return.err(
                    Error("TOKEN_ALREADY_USED", "Password reset token has already been used")
                )

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if not user.password_hash:
                await self.uow.accounts.create(
                    Account(
                        user_id=user.id,
                        provider_id=CREDENTIAL_PROVIDER,
                        account_id=str(user.id),
                    )
                )

            user.password_hash = hash_password(new_password)
            await self.uow.users.update(user)

            reset_token.used = True
            await self.uow.password_reset_tokens.update(reset_token)

            await self.uow.sessions.revoke_all_by_user_id(user.id)

            await self.uow.commit()

            return Return.ok(
                ResetPasswordResponse(
                    status="success",
                    message="Password has been reset successfully",
                )
            )
