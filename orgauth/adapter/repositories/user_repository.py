from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.user_repository import IUserRepository
from orgauth.domain.base import utcnow
from orgauth.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, *criteria) -> Optional[User]:
        result = await self.session.exec(select(User).where(*criteria))
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return await self._first(User.id == user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._first(User.email == email.strip().lower())

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        return await self._first(
            User.email_verification_token == token,
            User.email_verified == False,  # noqa: E712
        )

    async def create(self, user: User) -> User:
        user.email = user.email.strip().lower()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        user.updated_at = utcnow()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
