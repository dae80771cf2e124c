from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.password_reset_token_repository import (
    IPasswordResetTokenRepository,
)
from orgauth.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _save(self, token: PasswordResetToken) -> PasswordResetToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        return await self._save(token)

    async def update(self, token: PasswordResetToken) -> PasswordResetToken:
        return await self._save(token)

    async def get_by_token_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        result = await self.session.exec(
            select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        )
        return result.one_or_none()

    async def invalidate_for_user(self, user_id: UUID) -> int:
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.used == False,  # noqa: E712
            )
            .values(used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
