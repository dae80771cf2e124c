from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from orgauth.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """Password reset token store. Only SHA-256 hashes are persisted."""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        pass

    @abstractmethod
    async def update(self, token: PasswordResetToken) -> PasswordResetToken:
        pass

    @abstractmethod
    async def invalidate_for_user(self, user_id: UUID) -> int:
        """Mark every unused token of a user as used; returns how many"""
        pass
