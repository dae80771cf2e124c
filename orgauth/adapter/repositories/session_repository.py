from typing import Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from orgauth.app.repositories.session_repository import ISessionRepository
from orgauth.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def update(self, session_obj: Session) -> Session:
        """Update existing session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def set_active_organization_for_user(
        self, user_id: UUID, organization_id: UUID
    ) -> int:
        """Point every session of a user at an organization"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id)
            .values(active_organization_id=organization_id)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_all_by_user_id(self, user_id: UUID) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, Session.revoked == False)  # noqa: E712
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def revoke_by_id(self, session_id: UUID) -> bool:
        """Revoke a specific session by ID"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.revoked == False)  # noqa: E712
            .values(revoked=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
